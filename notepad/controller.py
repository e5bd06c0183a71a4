"""Note controller: the in-memory, observable view of all notes.

Every mutation goes to the store first and is followed by a full reload;
the list is never patched locally. Two mutations started concurrently are
not serialized against each other, so whichever reload finishes last
decides the final ``notes`` value.
"""

from __future__ import annotations

import logging
from typing import Awaitable

from notepad.errors import StorageError
from notepad.metrics import NOTES_LOADED
from notepad.models import Note
from notepad.state import Observable
from notepad.store import NoteStore

logger = logging.getLogger(__name__)


class NoteController:
    """Owns ``notes`` and sequences mutate-then-reload."""

    def __init__(self, store: NoteStore) -> None:
        self.store = store
        self.notes: Observable[list[Note]] = Observable([])
        self.error: Observable[StorageError | None] = Observable(None)

    @classmethod
    async def open(cls, store: NoteStore) -> NoteController:
        """Build a controller and populate ``notes`` with an initial reload."""
        controller = cls(store)
        await controller.reload()
        return controller

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def add_note(self, candidate: Note) -> None:
        """Create *candidate* (its id is ignored), then reload."""
        await self._guard(self.store.create(candidate))
        await self.reload()

    async def update_note(self, note: Note) -> None:
        """Replace the note stored at ``note.id``, then reload."""
        await self._guard(self.store.update(note))
        await self.reload()

    async def delete_note(self, note_id: str) -> None:
        await self._guard(self.store.delete(note_id))
        await self.reload()

    async def reload(self) -> None:
        """Fetch every note and replace ``notes`` wholesale."""
        notes = await self._guard(self.store.list_all())
        self.notes.set(notes)
        NOTES_LOADED.set(len(notes))
        if self.error.value is not None:
            self.error.set(None)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _guard(self, call: Awaitable):
        """Await a store call, publishing any StorageError before re-raising."""
        try:
            return await call
        except StorageError as exc:
            logger.warning("Note %s failed, keeping last loaded notes: %s", exc.operation, exc)
            self.error.set(exc)
            raise
