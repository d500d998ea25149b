"""
Repositorio para la colección `user` (credenciales).
"""
from typing import Any, Dict, Optional
from datetime import datetime, timezone

from bson import ObjectId
from bson.errors import InvalidId

from smartnotes.infrastructure.db.mongo import get_db

COLLECTION = "user"


def _now() -> datetime:
    # Precisión de BSON (milisegundos)
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def normalize_email(email: str) -> str:
    return str(email or "").strip().lower()


def find_user_by_email(email: str) -> Optional[Dict[str, Any]]:
    """Busca usuario por email (normalizado a minúsculas)."""
    return get_db()[COLLECTION].find_one({"email": normalize_email(email)})


def get_user_by_id(user_id: str) -> Optional[Dict[str, Any]]:
    """Obtiene usuario por id (str); None si el id no es un ObjectId válido."""
    try:
        oid = ObjectId(user_id)
    except (InvalidId, TypeError):
        return None
    return get_db()[COLLECTION].find_one({"_id": oid})


def insert_user(*, name: str, email: str, password_hash: str) -> Dict[str, Any]:
    """
    Inserta un usuario y devuelve el documento guardado (con `_id`).
    El índice único sobre `email` hace que un alta duplicada levante DuplicateKeyError.
    """
    now = _now()
    data = {
        "name": name,
        "email": normalize_email(email),
        "password_hash": password_hash,
        "created_at": now,
        "updated_at": now,
    }
    res = get_db()[COLLECTION].insert_one(data)
    data["_id"] = res.inserted_id
    return data


def public_user(u: Dict[str, Any]) -> Dict[str, Any]:
    """Campos públicos del usuario (sin hash)."""
    return {"id": str(u["_id"]), "name": u.get("name"), "email": u.get("email")}
