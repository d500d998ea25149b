"""
Esquemas Pydantic para `note`. En el cable se usa camelCase (noteText, noteHtml, ...)
como espera el cliente; en Mongo, snake_case.
"""
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class NotePayload(BaseModel):
    """Cuerpo de creación/edición. La validación real (texto vacío, tags) vive en el servicio."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    note_text: Optional[str] = None
    note_html: Optional[str] = None
    # Cualquier cosa que no sea lista se trata como [] en el servicio
    tags: Any = None


def _utc(dt: Any) -> Any:
    if isinstance(dt, datetime) and dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


class NoteOut(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(alias="_id")
    user_id: str
    note_text: str
    note_html: str = ""
    summary: str = ""
    tags: List[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_doc(cls, doc: Dict[str, Any]) -> "NoteOut":
        return cls(
            id=str(doc["_id"]),
            user_id=str(doc.get("user_id")),
            note_text=doc.get("note_text") or "",
            note_html=doc.get("note_html") or "",
            summary=doc.get("summary") or "",
            tags=list(doc.get("tags") or []),
            created_at=_utc(doc.get("created_at")),
            updated_at=_utc(doc.get("updated_at")),
        )


class MessageOut(BaseModel):
    message: str
