"""Exception types raised by the notepad store, controller and forms."""

from __future__ import annotations


class NotepadError(Exception):
    """Base class for all notepad errors."""


class ValidationError(NotepadError):
    """A note submission was rejected before reaching the store.

    Raised for a blank title or a color that does not parse.
    """

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class StorageError(NotepadError):
    """A remote create/update/delete/list operation failed."""

    def __init__(self, operation: str, message: str) -> None:
        super().__init__(f"{operation} failed: {message}")
        self.operation = operation
