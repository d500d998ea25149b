"""
Estado del editor de notas y del filtro de búsqueda (sin dependencia de UI).
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from smartnotes.client.api import ApiClient

MAX_TAGS = 10


def parse_tag_input(raw: str) -> List[str]:
    return [t.strip() for t in (raw or "").split(",") if t.strip()]


def merge_tags(current: List[str], new: List[str], limit: int = MAX_TAGS) -> List[str]:
    """Une sin duplicados conservando el orden de aparición; corta en `limit`."""
    out: List[str] = []
    for t in list(current or []) + list(new or []):
        if t not in out:
            out.append(t)
    return out[:limit]


@dataclass
class NoteFilter:
    query: str = ""
    active_tag: str = ""

    def clear_tag(self) -> None:
        """Acción "All"."""
        self.active_tag = ""

    def params(self) -> Dict[str, str]:
        return {"q": self.query.strip(), "tag": self.active_tag.strip()}


@dataclass
class NoteEditor:
    api: ApiClient
    note_text: str = ""
    note_html: str = ""
    tags: List[str] = field(default_factory=list)
    editing_id: str = ""
    # Transcripción parcial (aún no final) del dictado en curso
    interim: str = ""

    @property
    def is_editing(self) -> bool:
        return bool(self.editing_id)

    def commit_tag_input(self, raw: str) -> List[str]:
        parts = parse_tag_input(raw)
        if parts:
            self.tags = merge_tags(self.tags, parts)
        return self.tags

    def remove_tag_at(self, idx: int) -> None:
        self.tags = [t for i, t in enumerate(self.tags) if i != idx]

    def on_interim(self, text: str) -> None:
        self.interim = text or ""

    def on_final(self, text: str) -> None:
        """Segmento final del dictado: se agrega al cuerpo separado por espacio."""
        text = (text or "").strip()
        self.interim = ""
        if not text:
            return
        self.note_text = f"{self.note_text} {text}" if self.note_text else text

    def start_edit(self, note: Dict[str, Any]) -> None:
        self.editing_id = str(note.get("_id") or "")
        self.note_text = note.get("noteText") or ""
        self.note_html = note.get("noteHtml") or ""
        self.tags = list(note.get("tags") or [])

    def cancel(self) -> None:
        self.editing_id = ""
        self.note_text = ""
        self.note_html = ""
        self.tags = []
        self.interim = ""

    def save(self) -> Optional[Dict[str, Any]]:
        """Crea o actualiza según haya edición en curso; cuerpo vacío no hace nada."""
        if not self.note_text.strip():
            return None
        if self.editing_id:
            note = self.api.update_note(self.editing_id, self.note_text, self.note_html, self.tags)
        else:
            note = self.api.create_note(self.note_text, self.note_html, self.tags)
        self.cancel()
        return note
