"""Note store: CRUD for notes against a remote document collection.

The store owns id assignment and the record format. Every operation is a
single round trip to the collection; any failure in transport or
(de)serialization surfaces as :class:`StorageError`.
"""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator
from uuid import uuid4

from notepad.collection import DocumentCollection, Record
from notepad.errors import StorageError, ValidationError
from notepad.metrics import STORE_DURATION, STORE_OPERATIONS
from notepad.models import Note

logger = logging.getLogger(__name__)


def to_record(note: Note) -> Record:
    """Flatten a note into the collection's record shape."""
    return note.model_dump(mode="json", by_alias=True)


def from_record(record: Record) -> Note:
    return Note.model_validate(record)


class NoteStore:
    """Durable note CRUD over a :class:`DocumentCollection`."""

    def __init__(self, collection: DocumentCollection) -> None:
        self._collection = collection

    async def create(self, note: Note) -> None:
        """Persist *note* under a freshly generated id.

        Any id already on *note* is ignored. A blank title is rejected
        before any I/O.
        """
        _require_title(note)
        new_id = str(uuid4())
        async with _track("create"):
            await self._collection.set(new_id, to_record(note.model_copy(update={"id": new_id})))
        logger.info("Created note %s — '%s'", new_id, note.title)

    async def update(self, note: Note) -> None:
        """Overwrite the whole record stored at ``note.id``.

        Last write wins. The id is not checked for existence, so updating
        an unknown id creates a record under that id.
        """
        if not note.id:
            raise ValueError("update requires a note with an assigned id")
        _require_title(note)
        async with _track("update"):
            await self._collection.set(note.id, to_record(note))
        logger.info("Updated note %s — '%s'", note.id, note.title)

    async def delete(self, note_id: str) -> None:
        """Remove the record at *note_id*. Unknown ids are not an error."""
        async with _track("delete"):
            await self._collection.delete(note_id)
        logger.info("Deleted note %s", note_id)

    async def list_all(self) -> list[Note]:
        """Return every note in the collection, in collection order."""
        async with _track("list_all"):
            records = await self._collection.get_all()
            notes = [from_record(r) for r in records]
        logger.debug("Listed %d notes", len(notes))
        return notes


def _require_title(note: Note) -> None:
    if not note.title.strip():
        raise ValidationError("title", "must not be blank")


@asynccontextmanager
async def _track(operation: str) -> AsyncIterator[None]:
    """Time a collection call and translate its failures to StorageError."""
    start = time.perf_counter()
    try:
        yield
    except Exception as exc:
        STORE_OPERATIONS.labels(operation=operation, status="error").inc()
        logger.error("Store %s failed: %s", operation, exc)
        raise StorageError(operation, str(exc)) from exc
    else:
        STORE_OPERATIONS.labels(operation=operation, status="success").inc()
    finally:
        STORE_DURATION.labels(operation=operation).observe(time.perf_counter() - start)
