"""
Notes feature: Note record and request models.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

TITLE_MAX_LENGTH = 100


class NoteCategory(str, Enum):
    PERSONAL = "Personal"
    ACADEMIC = "Academic"
    WORK = "Work"
    OTHERS = "Others"


class NoteFields(BaseModel):
    """Fields a user edits. Title and content are stripped and must not be blank."""
    title: str
    content: str
    category: NoteCategory | None = None

    @field_validator("title", "content")
    @classmethod
    def not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("title")
    @classmethod
    def title_fits(cls, value: str) -> str:
        # Runs after not_blank, so the limit applies to the stripped title.
        if len(value) > TITLE_MAX_LENGTH:
            raise ValueError(f"must be at most {TITLE_MAX_LENGTH} characters")
        return value


class Note(NoteFields):
    """A stored note. Records are replaced whole, never patched."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(min_length=1)
    date: datetime

    def to_record(self) -> dict:
        """JSON-ready dict; `category` is omitted when unset."""
        return self.model_dump(mode="json", exclude_none=True)


# ── Requests ─────────────────────────────────────────────
class NoteCreate(NoteFields):
    """Request to create a new note. Id and date are assigned server-side."""


class NoteUpdate(NoteFields):
    """Request to replace a note's editable fields."""


class CategoryStats(BaseModel):
    category: NoteCategory
    count: int
    # Display figure such as "0.02 GB", from a flat per-note estimate.
    size: str
