"""
Text assist feature: API routes for analysis and rewrite.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from notekeeper.core.dependencies import (
    get_current_user_id,
    get_note_store,
    get_text_assist_client,
)
from notekeeper.core.exceptions import (
    NoteNotFoundError,
    RemoteCallError,
    StorageWriteError,
    app_error_to_http,
)
from notekeeper.features.assist.client import TextAssistClient
from notekeeper.features.assist.service import TextAssistService
from notekeeper.features.notes.service import NotesService
from notekeeper.features.notes.store import NoteStore

router = APIRouter(dependencies=[Depends(get_current_user_id)])


class ContentRequest(BaseModel):
    content: str


class TopicRequest(BaseModel):
    topic: str


def get_assist_service(
    client: TextAssistClient = Depends(get_text_assist_client),
) -> TextAssistService:
    return TextAssistService(client)


async def _run(call):
    try:
        return await call
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except RemoteCallError as e:
        raise app_error_to_http(e, status.HTTP_502_BAD_GATEWAY)


@router.post("/analyze")
async def analyze(data: ContentRequest, service: TextAssistService = Depends(get_assist_service)):
    """Summary, key points and suggestions for a piece of note content."""
    analysis = await _run(service.analyze(data.content))
    return {"data": {"analysis": analysis}}


@router.post("/improve")
async def improve(data: ContentRequest, service: TextAssistService = Depends(get_assist_service)):
    """Rewrite content for clarity. Nothing is stored."""
    improved = await _run(service.improve(data.content))
    return {"data": {"content": improved}}


@router.post("/ideas")
async def ideas(data: TopicRequest, service: TextAssistService = Depends(get_assist_service)):
    """Numbered list of note ideas for a topic."""
    suggestions = await _run(service.suggest_ideas(data.topic))
    return {"data": {"ideas": suggestions}}


@router.post("/notes/{note_id}/improve")
async def improve_note(
    note_id: str,
    service: TextAssistService = Depends(get_assist_service),
    store: NoteStore = Depends(get_note_store),
):
    """Rewrite a stored note and save the result."""
    try:
        note = await _run(service.improve_note(NotesService(store), note_id))
    except NoteNotFoundError as e:
        raise app_error_to_http(e, status.HTTP_404_NOT_FOUND)
    except StorageWriteError as e:
        raise app_error_to_http(e, status.HTTP_503_SERVICE_UNAVAILABLE)
    return {"data": note}
