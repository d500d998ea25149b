"""
Endpoints de notas. Todas las rutas exigen bearer token y operan solo sobre
notas del usuario autenticado.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from smartnotes.api.deps import get_current_user_id
from smartnotes.api.schemas.note import MessageOut, NoteOut, NotePayload
from smartnotes.core.exceptions import AppError
from smartnotes.services import note_service as service

router = APIRouter(tags=["Note"])

_log = logging.getLogger("smartnotes.notes")


@router.get(
    "/notes",
    response_model=List[NoteOut],
    summary="Listar notas",
    description="Notas del usuario, filtradas por texto (q) y/o tag exacto, más recientes primero.",
)
def get_notes(
    q: Optional[str] = Query(default=None),
    tag: Optional[str] = Query(default=None),
    user_id: str = Depends(get_current_user_id),
):
    try:
        return [NoteOut.from_doc(d) for d in service.list_notes(user_id, q=q, tag=tag)]
    except AppError:
        raise
    except Exception:
        _log.exception("Listado de notas falló")
        raise HTTPException(status_code=500, detail="Failed to fetch notes")


@router.post(
    "/note",
    status_code=status.HTTP_201_CREATED,
    response_model=NoteOut,
    summary="Crear nota",
    description="Crea una nota; si noteText viene vacío se deriva de noteHtml. Incluye resumen.",
)
def create_note(payload: NotePayload, user_id: str = Depends(get_current_user_id)):
    try:
        doc = service.create_note(user_id, payload.note_text, payload.note_html, payload.tags)
        return NoteOut.from_doc(doc)
    except AppError:
        raise
    except Exception:
        _log.exception("Creación de nota falló")
        raise HTTPException(status_code=500, detail="Failed to create note")


@router.put(
    "/note/{note_id}",
    response_model=NoteOut,
    summary="Editar nota",
    description="Reemplaza texto/html/tags/resumen. 404 si no existe o no es del usuario.",
)
def update_note(note_id: str, payload: NotePayload, user_id: str = Depends(get_current_user_id)):
    try:
        doc = service.update_note(user_id, note_id, payload.note_text, payload.note_html, payload.tags)
        return NoteOut.from_doc(doc)
    except AppError:
        raise
    except Exception:
        _log.exception("Edición de nota falló id=%s", note_id)
        raise HTTPException(status_code=500, detail="Failed to update note")


@router.delete(
    "/note/{note_id}",
    response_model=MessageOut,
    summary="Eliminar nota",
)
def delete_note(note_id: str, user_id: str = Depends(get_current_user_id)):
    try:
        service.delete_note(user_id, note_id)
        return MessageOut(message="Deleted")
    except AppError:
        raise
    except Exception:
        _log.exception("Eliminación de nota falló id=%s", note_id)
        raise HTTPException(status_code=500, detail="Failed to delete note")
