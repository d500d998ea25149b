"""
Creación y verificación de JWTs de sesión (bearer, sin estado en servidor).
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict
from uuid import uuid4

import jwt as pyjwt

from smartnotes.core.config import settings
from smartnotes.core.exceptions import AuthError


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


def create_access_token(*, user_id: str, expires_in: timedelta | None = None) -> str:
    """
    Genera un JWT HS256 válido por TOKEN_EXPIRE_DAYS (7 días por defecto).
    Claims: sub(user_id), iat, exp, jti.
    """
    now = _now_utc()
    exp = now + (expires_in if expires_in is not None else timedelta(days=settings.token_expire_days))
    payload = {
        "sub": str(user_id),
        "iat": int(now.timestamp()),
        "exp": int(exp.timestamp()),
        "jti": str(uuid4()),
    }
    return pyjwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Decodifica y valida firma/expiración. Devuelve payload (errores de PyJWT se propagan).
    """
    return pyjwt.decode(
        token,
        key=settings.jwt_secret,
        algorithms=[settings.jwt_algorithm],
        options={"require": ["exp", "sub"]},
    )


def verify_token(token: str | None) -> str:
    """Valida el token y devuelve el user_id; AuthError si falta, está mal formado o expiró."""
    if not token:
        raise AuthError("Missing token")
    try:
        payload = decode_access_token(token)
    except pyjwt.ExpiredSignatureError:
        raise AuthError("Token expired")
    except pyjwt.InvalidTokenError:
        raise AuthError("Invalid token")
    user_id = payload.get("sub")
    if not user_id:
        raise AuthError("Invalid token")
    return str(user_id)
