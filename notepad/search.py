"""Client-side note search."""

from __future__ import annotations

from typing import Sequence

from notepad.models import Note


def matches(note: Note, query: str) -> bool:
    """True if *query* is a case-insensitive substring of the title, content or a tag."""
    q = query.casefold()
    return (
        q in note.title.casefold()
        or q in note.content.casefold()
        or any(q in tag.casefold() for tag in note.tags)
    )


def filter_notes(notes: Sequence[Note], query: str) -> list[Note]:
    """Return the notes matching *query*; an empty query matches everything.

    Always returns a new list, *notes* is left untouched.
    """
    if not query:
        return list(notes)
    return [n for n in notes if matches(n, query)]
