"""
Notes feature: in-memory search and category statistics.
"""

from collections.abc import Iterable

from notekeeper.features.notes.schemas import CategoryStats, Note, NoteCategory

# Flat per-note estimate used for the storage figure on the home screen.
GB_PER_NOTE = 0.01


def filter_notes(notes: Iterable[Note], query: str | None) -> list[Note]:
    """Case-insensitive substring match on title or content.

    A blank query matches everything. Input order is kept.
    """
    notes = list(notes)
    if query is None or not query.strip():
        return notes
    needle = query.lower()
    return [
        note for note in notes
        if needle in note.title.lower() or needle in note.content.lower()
    ]


def filter_by_category(notes: Iterable[Note], category: NoteCategory | None) -> list[Note]:
    if category is None:
        return list(notes)
    return [note for note in notes if note.category == category]


def category_stats(notes: Iterable[Note]) -> list[CategoryStats]:
    """Note count and estimated size for every category, zero counts included."""
    counts = {category: 0 for category in NoteCategory}
    for note in notes:
        if note.category is not None:
            counts[note.category] += 1
    return [
        CategoryStats(category=c, count=n, size=f"{n * GB_PER_NOTE:.2f} GB")
        for c, n in counts.items()
    ]
