"""
Notes feature: local note store.

The whole collection lives as one JSON array under a single storage key.
Every mutation reads the entire array, changes it in memory and writes the
entire array back in one `set_item` call. There is no cache between calls,
so `list()` always reflects what is on disk.

Read policy: a missing key, an unparseable blob or a blob that is not an
array all read as "no notes". This keeps the app usable on corrupt state,
at the price of notes appearing to vanish, so every such read is logged at
ERROR and the raw data is copied to `<key>:quarantine` before the next
write replaces it. Records that do not validate as a Note are skipped the
same way. Entries already in the quarantine are not added twice. When the
storage handle itself fails to read, the data cannot be copied, so lists
stay empty and every write is refused with StorageWriteError.

Not-found policy: `delete`, `update` and `get` all raise NoteNotFoundError.

Concurrency: last writer wins. Two mutations that read the same snapshot
will each write their own version of the array and the earlier write is
lost. There is no lock or version stamp; callers re-list after mutating.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field

from pydantic import ValidationError

from notekeeper.core.exceptions import (
    DuplicateNoteError,
    NoteNotFoundError,
    StorageReadError,
    StorageWriteError,
)
from notekeeper.core.storage import KeyValueStorage
from notekeeper.features.notes.schemas import Note

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "@notes_app_storage"


@dataclass
class _Snapshot:
    notes: list[Note] = field(default_factory=list)
    # Raw data that could not be turned into notes, kept for quarantine.
    rejected: list = field(default_factory=list)
    # The storage read failed, so the stored value is unknown.
    unreadable: bool = False


class NoteStore:
    """CRUD over the note collection held in a key-value storage handle."""

    def __init__(self, storage: KeyValueStorage, key: str = DEFAULT_STORAGE_KEY):
        self.storage = storage
        self.key = key

    @property
    def quarantine_key(self) -> str:
        return f"{self.key}:quarantine"

    # ── Reads ────────────────────────────────────────────

    def _read(self) -> _Snapshot:
        try:
            raw = self.storage.get_item(self.key)
        except StorageReadError:
            logger.error("Notes unreadable under %s; treating as empty", self.key)
            return _Snapshot(unreadable=True)

        if not raw:
            logger.debug("No notes stored under %s", self.key)
            return _Snapshot()

        try:
            records = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error("Stored notes are not valid JSON (%s); treating as empty", e)
            return _Snapshot(rejected=[raw])

        if not isinstance(records, list):
            logger.error(
                "Stored notes are a %s, not an array; treating as empty",
                type(records).__name__,
            )
            return _Snapshot(rejected=[records])

        snapshot = _Snapshot()
        seen: set[str] = set()
        for record in records:
            try:
                note = Note.model_validate(record)
            except ValidationError as e:
                logger.warning("Skipping malformed note record: %s", e.errors()[0]["msg"])
                snapshot.rejected.append(record)
                continue
            if note.id in seen:
                logger.warning("Skipping duplicate note id %s", note.id)
                snapshot.rejected.append(record)
                continue
            seen.add(note.id)
            snapshot.notes.append(note)

        logger.debug("Loaded %d notes from %s", len(snapshot.notes), self.key)
        return snapshot

    def list(self) -> list[Note]:
        """Return all notes, newest first. Never raises on bad stored data."""
        return self._read().notes

    def get(self, note_id: str) -> Note:
        for note in self.list():
            if note.id == note_id:
                return note
        raise NoteNotFoundError(note_id)

    # ── Writes ───────────────────────────────────────────

    def _quarantine(self, rejected: list) -> None:
        existing: list = []
        try:
            raw = self.storage.get_item(self.quarantine_key)
        except StorageReadError as e:
            logger.error("Quarantine %s is unreadable; refusing to write", self.quarantine_key)
            raise StorageWriteError() from e
        if raw:
            try:
                existing = json.loads(raw)
            except json.JSONDecodeError:
                existing = [raw]
            if not isinstance(existing, list):
                existing = [existing]

        # A write that failed after quarantining leaves the entries in place.
        added = [entry for entry in rejected if entry not in existing]
        if not added:
            return
        self.storage.set_item(self.quarantine_key, json.dumps(existing + added))
        logger.warning(
            "Moved %d unreadable entries to %s", len(added), self.quarantine_key
        )

    def _write(self, snapshot: _Snapshot, notes: list[Note]) -> None:
        if snapshot.unreadable:
            logger.error("Notes under %s are unreadable; refusing to overwrite", self.key)
            raise StorageWriteError()
        if snapshot.rejected:
            self._quarantine(snapshot.rejected)
        payload = json.dumps([note.to_record() for note in notes])
        self.storage.set_item(self.key, payload)

    def save(self, note: Note) -> None:
        """Prepend a new note.

        Raises:
            DuplicateNoteError: a note with the same id is already stored.
            StorageWriteError: the storage write failed; nothing was saved.
        """
        snapshot = self._read()
        if any(n.id == note.id for n in snapshot.notes):
            raise DuplicateNoteError(note.id)
        self._write(snapshot, [note, *snapshot.notes])
        logger.info("Saved note %s (%d total)", note.id, len(snapshot.notes) + 1)

    def update(self, note: Note) -> None:
        """Replace the note with the same id, keeping its position."""
        snapshot = self._read()
        for i, existing in enumerate(snapshot.notes):
            if existing.id == note.id:
                notes = list(snapshot.notes)
                notes[i] = note
                self._write(snapshot, notes)
                logger.info("Updated note %s", note.id)
                return
        raise NoteNotFoundError(note.id)

    def delete(self, note_id: str) -> None:
        """Remove the note with the given id."""
        snapshot = self._read()
        notes = [n for n in snapshot.notes if n.id != note_id]
        if len(notes) == len(snapshot.notes):
            logger.warning("Note not found for deletion: %s", note_id)
            raise NoteNotFoundError(note_id)
        self._write(snapshot, notes)
        logger.info("Deleted note %s (%d left)", note_id, len(notes))
