"""
Notes feature: Service layer for note management.
"""

import time
from datetime import datetime, timezone

from notekeeper.features.notes.schemas import (
    CategoryStats,
    Note,
    NoteCategory,
    NoteCreate,
    NoteUpdate,
)
from notekeeper.features.notes.search import category_stats, filter_by_category, filter_notes
from notekeeper.features.notes.store import NoteStore


def generate_note_id() -> str:
    """Millisecond Unix timestamp as a string, e.g. '1760870400123'."""
    return str(time.time_ns() // 1_000_000)


class NotesService:
    """Note CRUD with keyword search, on top of the local note store."""

    def __init__(self, store: NoteStore):
        self.store = store

    def list_notes(
        self,
        query: str | None = None,
        category: NoteCategory | None = None,
    ) -> list[Note]:
        """List notes newest first, optionally filtered by keyword and category."""
        notes = self.store.list()
        notes = filter_by_category(notes, category)
        return filter_notes(notes, query)

    def get_note(self, note_id: str) -> Note:
        return self.store.get(note_id)

    def create_note(self, data: NoteCreate) -> Note:
        """Create a note with a fresh id and the current UTC time."""
        note_id = generate_note_id()
        taken = {n.id for n in self.store.list()}
        while note_id in taken:
            note_id = str(int(note_id) + 1)

        note = Note(
            id=note_id,
            date=datetime.now(timezone.utc),
            **data.model_dump(),
        )
        self.store.save(note)
        return note

    def update_note(self, note_id: str, data: NoteUpdate) -> Note:
        """Replace a note's editable fields. Id and creation date are kept."""
        current = self.store.get(note_id)
        note = Note(id=current.id, date=current.date, **data.model_dump())
        self.store.update(note)
        return note

    def replace_content(self, note_id: str, content: str) -> Note:
        current = self.store.get(note_id)
        note = Note.model_validate({**current.model_dump(), "content": content})
        self.store.update(note)
        return note

    def delete_note(self, note_id: str) -> None:
        self.store.delete(note_id)

    def stats(self) -> list[CategoryStats]:
        return category_stats(self.store.list())
