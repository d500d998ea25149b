"""
Lógica de autenticación: registro y login con email + password.
"""
import logging
from typing import Any, Dict, Optional

from argon2 import PasswordHasher
from argon2.exceptions import VerificationError, InvalidHashError
from argon2.low_level import Type
from pymongo.errors import DuplicateKeyError

from smartnotes.core.exceptions import AuthError, ConflictError, ValidationError
from smartnotes.repositories import user_repo as repo
from smartnotes.services.token_service import create_access_token

_log = logging.getLogger("smartnotes.auth")

ph = PasswordHasher(time_cost=2, memory_cost=51200, parallelism=2, hash_len=32, salt_len=16, type=Type.ID)

INVALID_CREDENTIALS = "Invalid credentials"


def hash_password(password: str) -> str:
    return ph.hash(password)


def verify_password(password: str, password_hash: Optional[str]) -> bool:
    if not password_hash:
        return False
    try:
        return ph.verify(password_hash, password)
    except (VerificationError, InvalidHashError):
        return False


def _blank(v: Optional[str]) -> bool:
    return not (v and str(v).strip())


def _session(user: Dict[str, Any]) -> Dict[str, Any]:
    return {"token": create_access_token(user_id=str(user["_id"])), "user": repo.public_user(user)}


def register(name: Optional[str], email: Optional[str], password: Optional[str]) -> Dict[str, Any]:
    """
    Registra un usuario local y emite token de sesión.

    - ValidationError si falta algún campo.
    - ConflictError si el email ya existe (también si el índice único rechaza una alta concurrente).
    """
    if _blank(name) or _blank(email) or not password:
        raise ValidationError("Missing fields")

    if repo.find_user_by_email(email):
        raise ConflictError("Email already registered")

    try:
        user = repo.insert_user(name=str(name).strip(), email=email, password_hash=hash_password(password))
    except DuplicateKeyError:
        raise ConflictError("Email already registered")

    _log.info("Usuario registrado id=%s", user["_id"])
    return _session(user)


def login(email: Optional[str], password: Optional[str]) -> Dict[str, Any]:
    """Email desconocido y password incorrecto responden igual (sin enumeración)."""
    if _blank(email) or not password:
        raise ValidationError("Missing fields")

    u = repo.find_user_by_email(email)
    if not u or not verify_password(password, u.get("password_hash")):
        raise AuthError(INVALID_CREDENTIALS)
    return _session(u)
