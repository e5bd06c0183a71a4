"""Note form: validation and submission rules shared by every consumer.

A form is raw user input. Submitting it either creates a note (no
``note_id``) or replaces an existing one. New notes whose title exactly
matches an already loaded note are dropped without error; this check runs
against the controller's last loaded list only, so it is best effort.
"""

from __future__ import annotations

import logging
from typing import Optional

from pydantic import BaseModel, Field

from notepad.controller import NoteController
from notepad.errors import ValidationError
from notepad.models import DEFAULT_COLOR, Note, is_valid_color, parse_tags

logger = logging.getLogger(__name__)


class NoteForm(BaseModel):
    """Raw note input as typed by a user."""

    model_config = {"populate_by_name": True}

    title: str = ""
    content: str = ""
    color_hex: str = Field(default=DEFAULT_COLOR, alias="colorHex")
    tags: str = Field(default="", description="Comma-separated tags")
    note_id: Optional[str] = Field(default=None, alias="id")

    @property
    def is_edit(self) -> bool:
        return bool(self.note_id)

    def validate_input(self) -> None:
        """Raise ValidationError if the form must not be submitted."""
        if not self.title.strip():
            raise ValidationError("title", "must not be blank")
        if not is_valid_color(self.color_hex):
            raise ValidationError("colorHex", f"invalid hex color {self.color_hex!r}")

    def to_note(self) -> Note:
        return Note(
            id=self.note_id or "",
            title=self.title,
            content=self.content,
            color_hex=self.color_hex,
            tags=parse_tags(self.tags),
        )

    async def submit(self, controller: NoteController) -> bool:
        """Validate and send the form through *controller*.

        Returns False when a new note was skipped because its title is
        already taken, True otherwise.
        """
        self.validate_input()
        note = self.to_note()
        if self.is_edit:
            await controller.update_note(note)
            return True
        if has_title(controller.notes.value, note.title):
            logger.info("Skipping new note, title already exists: '%s'", note.title)
            return False
        await controller.add_note(note)
        return True


def has_title(notes: list[Note], title: str) -> bool:
    return any(n.title == title for n in notes)
