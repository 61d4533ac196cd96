"""Tests for the search and sets caches."""

import json

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from pokeforge.db.operations import SETS_CACHE_KEY, get_blob, put_blob
from pokeforge.services.response_cache import SearchCache, SetsCache


class FakeClock:
    def __init__(self, now: float = 1_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


class TestSearchCache:
    def test_hit_within_ttl(self) -> None:
        clock = FakeClock()
        cache = SearchCache(ttl=300, clock=clock)
        cache.put(("q", 1, 20), {"data": []})

        clock.now += 299

        assert cache.get(("q", 1, 20)) == {"data": []}

    def test_expired_entry_is_dropped_on_read(self) -> None:
        clock = FakeClock()
        cache = SearchCache(ttl=300, clock=clock)
        cache.put(("q", 1, 20), {"data": []})

        clock.now += 300

        assert cache.get(("q", 1, 20)) is None
        assert ("q", 1, 20) not in cache

    def test_key_includes_pagination(self) -> None:
        cache = SearchCache()
        cache.put(("q", 1, 20), {"page": 1})

        assert cache.get(("q", 2, 20)) is None
        assert cache.get(("q", 1, 16)) is None

    def test_evicts_oldest_write_past_capacity(self) -> None:
        clock = FakeClock()
        cache = SearchCache(capacity=3, clock=clock)
        for i in range(3):
            cache.put((f"q{i}", 1, 20), {"i": i})
            clock.now += 1

        # Reading does not refresh age
        cache.get(("q0", 1, 20))
        cache.put(("q3", 1, 20), {"i": 3})

        assert len(cache) == 3
        assert ("q0", 1, 20) not in cache
        assert ("q1", 1, 20) in cache

    def test_rewrite_refreshes_timestamp(self) -> None:
        clock = FakeClock()
        cache = SearchCache(capacity=2, clock=clock)
        cache.put(("a", 1, 20), {})
        clock.now += 1
        cache.put(("b", 1, 20), {})
        clock.now += 1
        cache.put(("a", 1, 20), {"again": True})
        clock.now += 1
        cache.put(("c", 1, 20), {})

        assert ("b", 1, 20) not in cache
        assert cache.get(("a", 1, 20)) == {"again": True}


class TestSetsCache:
    async def test_miss_when_empty(self, session_factory) -> None:
        cache = SetsCache(session_factory)

        assert await cache.load() is None

    async def test_store_then_load(self, session_factory) -> None:
        cache = SetsCache(session_factory)
        sets = [{"id": "sv3", "name": "Obsidian Flames"}]

        await cache.store(sets)

        assert await cache.load() == sets

    async def test_stored_shape(self, session_factory, session) -> None:
        clock = FakeClock(now=1_700_000_000.0)
        cache = SetsCache(session_factory, clock=clock)

        await cache.store([{"id": "sv1"}])

        stored = json.loads(await get_blob(session, SETS_CACHE_KEY))
        assert stored == {"data": [{"id": "sv1"}], "time": 1_700_000_000_000}

    async def test_expires_after_ttl(self, session_factory) -> None:
        clock = FakeClock()
        cache = SetsCache(session_factory, ttl=86400, clock=clock)
        await cache.store([{"id": "sv1"}])

        clock.now += 86400

        assert await cache.load() is None

    async def test_corrupt_blob_is_a_miss(self, session_factory) -> None:
        async with session_factory() as session:
            await put_blob(session, SETS_CACHE_KEY, "{not json")
            await session.commit()

        assert await SetsCache(session_factory).load() is None

    async def test_wrong_shape_is_a_miss(self, session_factory) -> None:
        async with session_factory() as session:
            await put_blob(session, SETS_CACHE_KEY, json.dumps({"data": "x", "time": 1}))
            await session.commit()

        assert await SetsCache(session_factory).load() is None

    async def test_database_error_is_a_miss(self) -> None:
        """A store without tables behaves as an empty cache, even for writes."""
        engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
        factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
        cache = SetsCache(factory)

        await cache.store([{"id": "sv1"}])
        assert await cache.load() is None

        await engine.dispose()

    async def test_clear(self, session_factory) -> None:
        cache = SetsCache(session_factory)
        await cache.store([{"id": "sv1"}])

        await cache.clear()

        assert await cache.load() is None
