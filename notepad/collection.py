"""Remote document collections that back the note store.

A collection is a flat keyed set of JSON-able records. ``RedisCollection``
keeps every record of a collection in one Redis hash, so ``get_all`` is a
single HGETALL round trip, and connects on first use if it is not connected
yet. ``InMemoryCollection`` is used by tests and by
``STORE_BACKEND=memory`` local runs.
"""

from __future__ import annotations

import copy
import json
import logging
from typing import Any, Optional, Protocol

import redis.asyncio as aioredis

logger = logging.getLogger(__name__)

KEY_PREFIX = "notepad:"

Record = dict[str, Any]


class DocumentCollection(Protocol):
    """What the note store needs from a remote collection."""

    async def set(self, key: str, record: Record) -> None: ...

    async def delete(self, key: str) -> None: ...

    async def get_all(self) -> list[Record]: ...


class RedisCollection:
    """Async Redis hash holding one JSON document per key."""

    def __init__(self, redis_url: str, name: str) -> None:
        self._redis_url = redis_url
        self._hash_key = f"{KEY_PREFIX}{name}"
        self._client: Optional[aioredis.Redis] = None

    @property
    def available(self) -> bool:
        """Whether the Redis connection is active."""
        return self._client is not None

    @property
    def hash_key(self) -> str:
        return self._hash_key

    async def connect(self) -> None:
        """Connect to Redis and verify the server answers."""
        client = aioredis.from_url(self._redis_url, decode_responses=True)
        try:
            await client.ping()
        except Exception:
            await client.aclose()
            raise
        self._client = client
        logger.info("Redis collection connected: %s (%s)", self._redis_url, self._hash_key)

    async def close(self) -> None:
        """Close the Redis connection."""
        if self._client:
            await self._client.aclose()
            self._client = None

    # ------------------------------------------------------------------
    # Collection operations
    # ------------------------------------------------------------------

    async def set(self, key: str, record: Record) -> None:
        client = await self._require_client()
        await client.hset(self._hash_key, key, json.dumps(record))

    async def delete(self, key: str) -> None:
        client = await self._require_client()
        await client.hdel(self._hash_key, key)

    async def get_all(self) -> list[Record]:
        client = await self._require_client()
        raw = await client.hgetall(self._hash_key)
        return [json.loads(value) for value in raw.values()]

    async def _require_client(self) -> aioredis.Redis:
        """Return the client, connecting first if startup could not."""
        if self._client is None:
            await self.connect()
        return self._client


class InMemoryCollection:
    """Dict-backed collection; records are copied in and out."""

    def __init__(self) -> None:
        self._records: dict[str, Record] = {}

    @property
    def available(self) -> bool:
        return True

    async def connect(self) -> None:
        logger.info("Using in-memory note collection")

    async def close(self) -> None:
        pass

    async def set(self, key: str, record: Record) -> None:
        self._records[key] = copy.deepcopy(record)

    async def delete(self, key: str) -> None:
        self._records.pop(key, None)

    async def get_all(self) -> list[Record]:
        return [copy.deepcopy(r) for r in self._records.values()]

    def __len__(self) -> int:
        return len(self._records)
