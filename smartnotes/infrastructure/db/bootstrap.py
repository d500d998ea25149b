"""
Bootstrap de la base Mongo: define y aplica validadores (JSON Schema) e índices.
Se ejecuta al inicio de la app para asegurar colecciones mínimas y consistencia.
"""
from __future__ import annotations

from typing import Any, Dict, List
import logging

from pymongo import ASCENDING, DESCENDING, TEXT
from pymongo.errors import PyMongoError

from smartnotes.infrastructure.db.mongo import get_db
from smartnotes.repositories.note_repo import COLLECTION as NOTE_COLL
from smartnotes.repositories.user_repo import COLLECTION as USER_COLL

_log = logging.getLogger("smartnotes.mongo.bootstrap")


USER_VALIDATOR: Dict[str, Any] = {
    "bsonType": "object",
    "required": ["name", "email", "password_hash", "created_at", "updated_at"],
    "properties": {
        "name": {"bsonType": "string", "minLength": 1},
        "email": {"bsonType": "string", "minLength": 3, "description": "lowercase"},
        "password_hash": {"bsonType": "string"},
        "created_at": {"bsonType": "date"},
        "updated_at": {"bsonType": "date"},
    },
    "additionalProperties": True,
}

NOTE_VALIDATOR: Dict[str, Any] = {
    "bsonType": "object",
    "required": ["user_id", "note_text", "note_html", "summary", "tags", "created_at", "updated_at"],
    "properties": {
        "user_id": {"bsonType": "string"},
        "note_text": {"bsonType": "string", "minLength": 1},
        "note_html": {"bsonType": "string"},
        "summary": {"bsonType": "string"},
        "tags": {"bsonType": "array", "maxItems": 10, "items": {"bsonType": "string"}},
        "created_at": {"bsonType": "date"},
        "updated_at": {"bsonType": "date"},
    },
    "additionalProperties": True,
}


def _collmod_or_create(name: str, validator: Dict[str, Any] | None) -> None:
    db = get_db()
    try:
        if name not in db.list_collection_names():
            if validator:
                db.create_collection(name, validator={"$jsonSchema": validator})
            else:
                db.create_collection(name)
        elif validator:
            db.command({
                "collMod": name,
                "validator": {"$jsonSchema": validator},
                "validationLevel": "moderate",
            })
    except PyMongoError as e:
        # No aborta el arranque; solo deja sin validator estricto.
        _log.warning("No se pudo aplicar validator en '%s': %s", name, e)


def _ensure_indexes(name: str, indexes: List[Dict[str, Any]]) -> None:
    coll = get_db()[name]
    for ix in indexes:
        opts = dict(ix)
        keys = opts.pop("keys")
        try:
            coll.create_index(keys, **opts)
        except PyMongoError as e:
            # Ignora fallas de índice (e.g., ya existe o datos no únicos previos)
            _log.warning("No se pudo crear índice en '%s' (%s): %s", name, keys, e)


def ensure_collections() -> None:
    """
    Garantiza colecciones, validadores e índices mínimos.
    """
    _collmod_or_create(USER_COLL, USER_VALIDATOR)
    _ensure_indexes(
        USER_COLL,
        [
            {"keys": [("email", ASCENDING)], "unique": True, "name": "uniq_email"},
        ],
    )

    _collmod_or_create(NOTE_COLL, NOTE_VALIDATOR)
    _ensure_indexes(
        NOTE_COLL,
        [
            {"keys": [("user_id", ASCENDING)], "name": "ix_user"},
            {"keys": [("tags", ASCENDING)], "name": "ix_tags"},
            {"keys": [("user_id", ASCENDING), ("created_at", DESCENDING)], "name": "ix_user_created"},
            # Búsqueda full-text sobre texto y resumen
            {"keys": [("note_text", TEXT), ("summary", TEXT)], "name": "tx_text_summary"},
        ],
    )
    _log.info("Colecciones e índices asegurados")
