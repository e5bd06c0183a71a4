"""Unit tests for notepad.store — note CRUD over a collection."""

from __future__ import annotations

import uuid
from unittest.mock import AsyncMock

import pytest

from notepad.collection import InMemoryCollection
from notepad.errors import StorageError, ValidationError
from notepad.models import Note
from notepad.store import NoteStore, from_record, to_record


def _failing_store(**methods) -> NoteStore:
    """A NoteStore whose collection raises from the given methods."""
    collection = AsyncMock()
    for name, exc in methods.items():
        getattr(collection, name).side_effect = exc
    return NoteStore(collection)


class TestRecords:
    def test_to_record_shape(self) -> None:
        note = Note(id="n1", title="T", content="C", color_hex="#123456", tags=["a"])
        assert to_record(note) == {
            "id": "n1",
            "title": "T",
            "content": "C",
            "colorHex": "#123456",
            "tags": ["a"],
        }

    def test_from_record_missing_fields_use_defaults(self) -> None:
        note = from_record({"id": "n1", "title": "T"})
        assert note.content == ""
        assert note.color_hex == "#FFFFFF"
        assert note.tags == []


class TestCreate:
    @pytest.mark.asyncio
    async def test_round_trip(self, store: NoteStore) -> None:
        note = Note(title="Groceries", content="milk", color_hex="#FFEB3B", tags=["home"])
        await store.create(note)

        [stored] = await store.list_all()
        assert stored.id
        assert stored.model_dump(exclude={"id"}) == note.model_dump(exclude={"id"})

    @pytest.mark.asyncio
    async def test_assigns_uuid4_ignoring_caller_id(self, store: NoteStore) -> None:
        await store.create(Note(id="caller-chosen", title="T"))

        [stored] = await store.list_all()
        assert stored.id != "caller-chosen"
        assert uuid.UUID(stored.id).version == 4

    @pytest.mark.asyncio
    async def test_ids_never_reused(self, store: NoteStore) -> None:
        for _ in range(5):
            await store.create(Note(title="Same"))
        ids = {n.id for n in await store.list_all()}
        assert len(ids) == 5

    @pytest.mark.asyncio
    async def test_invalid_color_still_written(self, store: NoteStore) -> None:
        await store.create(Note(title="T", color_hex="not-a-color"))
        [stored] = await store.list_all()
        assert stored.color_hex == "not-a-color"

    @pytest.mark.asyncio
    async def test_transport_failure_raises_storage_error(self) -> None:
        store = _failing_store(set=ConnectionError("lost"))
        with pytest.raises(StorageError) as info:
            await store.create(Note(title="T"))
        assert info.value.operation == "create"
        assert isinstance(info.value.__cause__, ConnectionError)


    @pytest.mark.asyncio
    async def test_blank_title_rejected(
        self, store: NoteStore, collection: InMemoryCollection
    ) -> None:
        with pytest.raises(ValidationError) as info:
            await store.create(Note(title="   "))
        assert info.value.field == "title"
        assert len(collection) == 0


class TestUpdate:
    @pytest.mark.asyncio
    async def test_overwrites_every_field(self, store: NoteStore) -> None:
        await store.create(Note(title="Old", content="old body", tags=["a", "b"]))
        [original] = await store.list_all()

        replacement = Note(id=original.id, title="New", color_hex="#000000")
        await store.update(replacement)

        notes = await store.list_all()
        assert len(notes) == 1
        assert notes[0] == replacement
        assert notes[0].content == ""
        assert notes[0].tags == []

    @pytest.mark.asyncio
    async def test_unknown_id_creates_record(self, store: NoteStore) -> None:
        await store.update(Note(id="ghost", title="T"))
        [stored] = await store.list_all()
        assert stored.id == "ghost"

    @pytest.mark.asyncio
    async def test_requires_id(self, store: NoteStore, collection: InMemoryCollection) -> None:
        with pytest.raises(ValueError):
            await store.update(Note(title="T"))
        assert len(collection) == 0

    @pytest.mark.asyncio
    async def test_transport_failure_raises_storage_error(self) -> None:
        store = _failing_store(set=TimeoutError("slow"))
        with pytest.raises(StorageError, match="update failed"):
            await store.update(Note(id="n1", title="T"))


    @pytest.mark.asyncio
    async def test_blank_title_rejected(self, store: NoteStore) -> None:
        await store.create(Note(title="Kept"))
        [note] = await store.list_all()

        with pytest.raises(ValidationError):
            await store.update(note.model_copy(update={"title": ""}))

        assert [n.title for n in await store.list_all()] == ["Kept"]


class TestDelete:
    @pytest.mark.asyncio
    async def test_removes_record(self, store: NoteStore) -> None:
        await store.create(Note(title="A"))
        await store.create(Note(title="B"))
        a = next(n for n in await store.list_all() if n.title == "A")

        await store.delete(a.id)

        assert [n.title for n in await store.list_all()] == ["B"]

    @pytest.mark.asyncio
    async def test_idempotent(self, store: NoteStore) -> None:
        await store.create(Note(title="A"))
        await store.create(Note(title="B"))
        a = next(n for n in await store.list_all() if n.title == "A")

        await store.delete(a.id)
        after_first = await store.list_all()
        await store.delete(a.id)

        assert await store.list_all() == after_first

    @pytest.mark.asyncio
    async def test_unknown_id_is_not_an_error(self, store: NoteStore) -> None:
        await store.delete("never-existed")
        assert await store.list_all() == []

    @pytest.mark.asyncio
    async def test_transport_failure_raises_storage_error(self) -> None:
        store = _failing_store(delete=ConnectionError("lost"))
        with pytest.raises(StorageError):
            await store.delete("n1")


class TestListAll:
    @pytest.mark.asyncio
    async def test_empty(self, store: NoteStore) -> None:
        assert await store.list_all() == []

    @pytest.mark.asyncio
    async def test_transport_failure_raises_storage_error(self) -> None:
        store = _failing_store(get_all=ConnectionError("lost"))
        with pytest.raises(StorageError) as info:
            await store.list_all()
        assert info.value.operation == "list_all"

    @pytest.mark.asyncio
    async def test_undecodable_record_fails_whole_list(self) -> None:
        collection = AsyncMock()
        collection.get_all.return_value = [
            {"id": "ok", "title": "Fine"},
            {"id": "bad", "title": "Broken", "tags": "not-a-list"},
        ]
        with pytest.raises(StorageError):
            await NoteStore(collection).list_all()
