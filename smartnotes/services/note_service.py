"""
Service layer for notes: normaliza la entrada, resume y delega en el repositorio.
"""
import logging
import re
from typing import Any, Dict, List, Optional, Tuple

from smartnotes.core.exceptions import NotFoundError, ValidationError
from smartnotes.repositories import note_repo as repo
from smartnotes.services.summarize_service import summarize_text

_log = logging.getLogger("smartnotes.notes")

MAX_TAGS = 10

_TAG_RE = re.compile(r"<[^>]+>")
_WS_RE = re.compile(r"\s+")


def strip_html(html: Optional[str]) -> str:
    """Quita etiquetas (cada una cuenta como espacio) y colapsa espacios."""
    return _WS_RE.sub(" ", _TAG_RE.sub(" ", str(html or ""))).strip()


def clean_tags(tags: Any) -> List[str]:
    """Tags no vacíos, recortados, máximo 10. Sin deduplicar (lo hace el cliente)."""
    if not isinstance(tags, list):
        return []
    out = [str(t).strip() for t in tags if t]
    return [t for t in out if t][:MAX_TAGS]


def normalize_note_input(note_text: Optional[str], note_html: Optional[str], tags: Any) -> Tuple[str, str, List[str]]:
    text = (note_text or "").strip()
    final_text = text if text else strip_html(note_html)
    if not final_text:
        raise ValidationError("noteText required")
    return final_text, note_html or "", clean_tags(tags)


def create_note(user_id: str, note_text: Optional[str], note_html: Optional[str], tags: Any) -> Dict[str, Any]:
    text, html, clean = normalize_note_input(note_text, note_html, tags)
    summary = summarize_text(text)
    note = repo.insert_note(user_id=user_id, note_text=text, note_html=html, summary=summary, tags=clean)
    _log.info("Nota creada id=%s user_id=%s tags=%s", note["_id"], user_id, len(clean))
    return note


def update_note(
    user_id: str, note_id: str, note_text: Optional[str], note_html: Optional[str], tags: Any
) -> Dict[str, Any]:
    text, html, clean = normalize_note_input(note_text, note_html, tags)
    summary = summarize_text(text)
    note = repo.update_owned_note(
        note_id,
        user_id,
        {"note_text": text, "note_html": html, "summary": summary, "tags": clean},
    )
    if note is None:
        raise NotFoundError("Note not found")
    return note


def delete_note(user_id: str, note_id: str) -> None:
    if repo.delete_owned_note(note_id, user_id) is None:
        raise NotFoundError("Note not found")
    _log.info("Nota eliminada id=%s user_id=%s", note_id, user_id)


def list_notes(user_id: str, q: Optional[str] = None, tag: Optional[str] = None) -> List[Dict[str, Any]]:
    return repo.list_notes(user_id, q=q, tag=tag)
