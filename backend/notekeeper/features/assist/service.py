"""
Text assist feature: analysis and rewrite of note content.
"""

import logging

from notekeeper.features.assist.client import TextAssistClient
from notekeeper.features.assist.prompts import (
    build_analyze_prompt,
    build_improve_prompt,
    build_note_ideas_prompt,
)
from notekeeper.features.notes.schemas import Note
from notekeeper.features.notes.service import NotesService

logger = logging.getLogger(__name__)


def _require_text(value: str, what: str) -> str:
    if not value or not value.strip():
        raise ValueError(f"Please enter some {what}.")
    return value


class TextAssistService:
    """The two note transforms plus topic ideas, one remote call each."""

    def __init__(self, client: TextAssistClient):
        self.client = client

    async def analyze(self, content: str) -> str:
        """Summary, key points and suggestions for the given content."""
        _require_text(content, "content to analyze")
        return await self.client.complete(build_analyze_prompt(content))

    async def improve(self, content: str) -> str:
        """Rewritten content with the same meaning."""
        _require_text(content, "content to improve")
        return await self.client.complete(build_improve_prompt(content))

    async def suggest_ideas(self, topic: str) -> str:
        _require_text(topic, "topic")
        return await self.client.complete(build_note_ideas_prompt(topic))

    async def improve_note(self, notes: NotesService, note_id: str) -> Note:
        """Rewrite a stored note's content.

        The note is written back only after the remote call succeeded, so
        a failed rewrite leaves it untouched.
        """
        note = notes.get_note(note_id)
        improved = await self.improve(note.content)
        updated = notes.replace_content(note_id, improved)
        logger.info("Applied improved content to note %s", note_id)
        return updated
