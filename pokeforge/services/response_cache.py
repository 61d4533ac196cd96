"""
Response caches for catalog data.

Two independent caches:
- SearchCache: in-memory, short TTL, bounded capacity. Keyed by the exact
  (query, page, page_size) tuple.
- SetsCache: one persisted blob holding the full set list, long TTL.

Both are constructed once per process and injected into the CatalogClient.
"""

import json
import logging
import time
from collections.abc import Callable
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from pokeforge.config import (
    SEARCH_CACHE_CAPACITY,
    SEARCH_CACHE_TTL_SECONDS,
    SETS_CACHE_TTL_SECONDS,
)
from pokeforge.db.operations import SETS_CACHE_KEY, delete_blob, get_blob, put_blob

logger = logging.getLogger(__name__)

SearchKey = tuple[str, int, int]


class SearchCache:
    """
    Time-boxed memoization of search responses.

    Expired entries are dropped when read. When a write pushes the cache past
    capacity, the single entry with the oldest write time is evicted. Reads
    do not refresh an entry's age.
    """

    def __init__(
        self,
        ttl: float = SEARCH_CACHE_TTL_SECONDS,
        capacity: int = SEARCH_CACHE_CAPACITY,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.ttl = ttl
        self.capacity = capacity
        self._clock = clock
        self._entries: dict[SearchKey, tuple[dict[str, Any], float]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: SearchKey) -> bool:
        return key in self._entries

    def get(self, key: SearchKey) -> dict[str, Any] | None:
        entry = self._entries.get(key)
        if entry is None:
            return None

        value, written_at = entry
        if self._clock() - written_at >= self.ttl:
            del self._entries[key]
            return None
        return value

    def put(self, key: SearchKey, value: dict[str, Any]) -> None:
        self._entries[key] = (value, self._clock())
        if len(self._entries) > self.capacity:
            oldest = min(self._entries, key=lambda k: self._entries[k][1])
            del self._entries[oldest]

    def clear(self) -> None:
        self._entries.clear()


class SetsCache:
    """
    Persisted cache of the catalog's set list.

    Stored as `{"data": [...], "time": <epoch ms>}` under a single blob key.
    Any read problem (missing row, bad JSON, wrong shape, database error) is
    a cache miss; write problems are logged and ignored.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        ttl: float = SETS_CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.ttl = ttl
        self._session_factory = session_factory
        self._clock = clock

    async def load(self) -> list[dict[str, Any]] | None:
        """Return the cached set list if present and fresh, else None."""
        try:
            async with self._session_factory() as session:
                raw = await get_blob(session, SETS_CACHE_KEY)
        except SQLAlchemyError as e:
            logger.warning("Could not read sets cache: %s", e)
            return None

        if raw is None:
            return None

        try:
            parsed = json.loads(raw)
            sets = parsed["data"]
            written_ms = float(parsed["time"])
        except (json.JSONDecodeError, KeyError, TypeError, ValueError):
            logger.warning("Ignoring corrupt sets cache")
            return None

        if not isinstance(sets, list):
            logger.warning("Ignoring corrupt sets cache")
            return None

        if self._clock() * 1000 - written_ms >= self.ttl * 1000:
            return None
        return sets

    async def store(self, sets: list[dict[str, Any]]) -> None:
        payload = json.dumps({"data": sets, "time": int(self._clock() * 1000)})
        try:
            async with self._session_factory() as session:
                await put_blob(session, SETS_CACHE_KEY, payload)
                await session.commit()
        except SQLAlchemyError as e:
            logger.warning("Could not write sets cache: %s", e)

    async def clear(self) -> None:
        try:
            async with self._session_factory() as session:
                await delete_blob(session, SETS_CACHE_KEY)
                await session.commit()
        except SQLAlchemyError as e:
            logger.warning("Could not clear sets cache: %s", e)
