"""Shared fixtures for notepad tests."""

from __future__ import annotations

import pytest

from notepad.collection import InMemoryCollection
from notepad.controller import NoteController
from notepad.store import NoteStore


@pytest.fixture()
def collection() -> InMemoryCollection:
    return InMemoryCollection()


@pytest.fixture()
def store(collection: InMemoryCollection) -> NoteStore:
    return NoteStore(collection)


@pytest.fixture()
def controller(store: NoteStore) -> NoteController:
    """A controller that has not loaded anything yet."""
    return NoteController(store)
