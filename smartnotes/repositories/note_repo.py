"""Repo de la colección `note`.

Toda mutación va acotada por `{_id, user_id}` en una sola operación atómica:
inexistente y ajena son indistinguibles (ambas devuelven None).
"""
from typing import Any, Dict, List, Optional
from datetime import datetime, timezone

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import DESCENDING, ReturnDocument

from smartnotes.infrastructure.db.mongo import get_db

COLLECTION = "note"


def _now() -> datetime:
    # Precisión de BSON (milisegundos)
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def _oid(note_id: str) -> Optional[ObjectId]:
    try:
        return ObjectId(note_id)
    except (InvalidId, TypeError):
        return None


def _owned(note_id: str, user_id: str) -> Optional[Dict[str, Any]]:
    oid = _oid(note_id)
    if oid is None:
        return None
    return {"_id": oid, "user_id": str(user_id)}


def insert_note(*, user_id: str, note_text: str, note_html: str, summary: str, tags: List[str]) -> Dict[str, Any]:
    """Inserta nota con timestamps y devuelve el documento guardado."""
    now = _now()
    data = {
        "user_id": str(user_id),
        "note_text": note_text,
        "note_html": note_html or "",
        "summary": summary or "",
        "tags": list(tags or []),
        "created_at": now,
        "updated_at": now,
    }
    res = get_db()[COLLECTION].insert_one(data)
    data["_id"] = res.inserted_id
    return data


def update_owned_note(note_id: str, user_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """Reemplaza texto/html/tags/resumen si la nota existe y es del usuario; None si no."""
    criteria = _owned(note_id, user_id)
    if criteria is None:
        return None
    changes = dict(fields)
    changes["updated_at"] = _now()
    return get_db()[COLLECTION].find_one_and_update(
        criteria,
        {"$set": changes},
        return_document=ReturnDocument.AFTER,
    )


def delete_owned_note(note_id: str, user_id: str) -> Optional[Dict[str, Any]]:
    """Elimina la nota si es del usuario; devuelve el documento borrado o None."""
    criteria = _owned(note_id, user_id)
    if criteria is None:
        return None
    return get_db()[COLLECTION].find_one_and_delete(criteria)


def build_list_filter(user_id: str, q: Optional[str] = None, tag: Optional[str] = None) -> Dict[str, Any]:
    """Filtro de listado: dueño + búsqueda de texto y/o tag exacto (AND)."""
    filtro: Dict[str, Any] = {"user_id": str(user_id)}
    q = (q or "").strip()
    if q:
        filtro["$text"] = {"$search": q}
    tag = (tag or "").strip()
    if tag:
        filtro["tags"] = tag
    return filtro


def list_notes(user_id: str, q: Optional[str] = None, tag: Optional[str] = None) -> List[Dict[str, Any]]:
    """Lista notas del usuario (más recientes primero)."""
    cursor = get_db()[COLLECTION].find(build_list_filter(user_id, q=q, tag=tag))
    return list(cursor.sort([("created_at", DESCENDING), ("_id", DESCENDING)]))
