"""
Notes feature: API routes for note management.
"""

from fastapi import APIRouter, Depends, status

from notekeeper.core.dependencies import get_current_user_id, get_note_store
from notekeeper.core.exceptions import (
    DuplicateNoteError,
    NoteNotFoundError,
    StorageWriteError,
    app_error_to_http,
)
from notekeeper.features.notes.schemas import NoteCategory, NoteCreate, NoteUpdate
from notekeeper.features.notes.service import NotesService
from notekeeper.features.notes.store import NoteStore

router = APIRouter(dependencies=[Depends(get_current_user_id)])


def get_notes_service(store: NoteStore = Depends(get_note_store)) -> NotesService:
    return NotesService(store)


@router.get("/")
async def list_notes(
    q: str | None = None,
    category: NoteCategory | None = None,
    service: NotesService = Depends(get_notes_service),
):
    """List notes newest first, filtered by keyword (title or content) and category."""
    notes = service.list_notes(query=q, category=category)
    return {"data": notes}


@router.get("/stats")
async def note_stats(service: NotesService = Depends(get_notes_service)):
    """Note count per category."""
    return {"data": service.stats()}


@router.post("/", status_code=status.HTTP_201_CREATED)
async def create_note(
    data: NoteCreate,
    service: NotesService = Depends(get_notes_service),
):
    """Create a new note."""
    try:
        note = service.create_note(data)
    except DuplicateNoteError as e:
        raise app_error_to_http(e, status.HTTP_409_CONFLICT)
    except StorageWriteError as e:
        raise app_error_to_http(e, status.HTTP_503_SERVICE_UNAVAILABLE)
    return {"data": note}


@router.get("/{note_id}")
async def get_note(note_id: str, service: NotesService = Depends(get_notes_service)):
    try:
        note = service.get_note(note_id)
    except NoteNotFoundError as e:
        raise app_error_to_http(e, status.HTTP_404_NOT_FOUND)
    return {"data": note}


@router.put("/{note_id}")
async def update_note(
    note_id: str,
    data: NoteUpdate,
    service: NotesService = Depends(get_notes_service),
):
    """Replace a note's title, content and category."""
    try:
        note = service.update_note(note_id, data)
    except NoteNotFoundError as e:
        raise app_error_to_http(e, status.HTTP_404_NOT_FOUND)
    except StorageWriteError as e:
        raise app_error_to_http(e, status.HTTP_503_SERVICE_UNAVAILABLE)
    return {"data": note}


@router.delete("/{note_id}")
async def delete_note(note_id: str, service: NotesService = Depends(get_notes_service)):
    """Delete a note permanently."""
    try:
        service.delete_note(note_id)
    except NoteNotFoundError as e:
        raise app_error_to_http(e, status.HTTP_404_NOT_FOUND)
    except StorageWriteError as e:
        raise app_error_to_http(e, status.HTTP_503_SERVICE_UNAVAILABLE)
    return {"message": "Note deleted"}
