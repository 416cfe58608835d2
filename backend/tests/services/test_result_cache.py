"""Result Cache tests — two-tier behavior, expiry, corruption, and atomic replacement.

Tests cover:
    - In-process tier served first
    - Persisted tier reused only within TTL (and touched on reuse)
    - Expired or corrupt persisted slots purged eagerly
    - Failed persisted writes leave the previous collection intact
"""

import pytest

from goggles.core.domain_types import CACHE_TIMESTAMP_KEY, CACHE_TTL_MS, SEARCH_CACHE_KEY
from goggles.core.errors import DatabaseError
from goggles.services.result_cache import ResultCache


async def test_empty_store_yields_empty_cache(result_cache, memory_store):
    assert await result_cache.get() == []
    assert not result_cache.is_hydrated
    assert memory_store.values == {}


async def test_put_fills_both_tiers(result_cache, memory_store, seed_records, clock):
    await result_cache.put(seed_records)
    assert await result_cache.get() == seed_records
    assert memory_store.values[CACHE_TIMESTAMP_KEY] == str(clock.now)
    assert SEARCH_CACHE_KEY in memory_store.values


async def test_fresh_persisted_tier_hydrates_new_instance(seeded_cache, memory_store, clock, seed_records):
    clock.now += CACHE_TTL_MS - 1
    cache = ResultCache(memory_store, clock=clock)
    assert await cache.get() == seed_records
    assert cache.is_hydrated
    # reuse extends the expiry
    assert memory_store.values[CACHE_TIMESTAMP_KEY] == str(clock.now)


async def test_expired_persisted_tier_is_purged(seeded_cache, memory_store, clock):
    clock.now += CACHE_TTL_MS
    cache = ResultCache(memory_store, clock=clock)
    assert await cache.get() == []
    assert memory_store.values == {}


async def test_in_process_tier_served_even_after_ttl(seeded_cache, clock, seed_records):
    clock.now += CACHE_TTL_MS * 2
    assert await seeded_cache.get() == seed_records


@pytest.mark.parametrize("payload,timestamp", [
    ("{broken", "1700000000000"),
    ('[{"id": "x"}]', "1700000000000"),
    ('[]', "not-a-number"),
    (None, "1700000000000"),
])
async def test_corrupt_persisted_tier_degrades_to_empty(memory_store, clock, payload, timestamp):
    if payload is not None:
        memory_store.values[SEARCH_CACHE_KEY] = payload
    memory_store.values[CACHE_TIMESTAMP_KEY] = timestamp
    cache = ResultCache(memory_store, clock=clock)
    assert await cache.get() == []
    assert memory_store.values == {}


async def test_lookup_is_exact(seeded_cache):
    record = await seeded_cache.lookup("https://facelook.com/tanaka.taro")
    assert record.id == "fl-tanaka"
    assert await seeded_cache.lookup("https://facelook.com/") is None


async def test_failed_write_keeps_previous_collection(seeded_cache, memory_store, seed_records):
    memory_store.fail_writes = True
    with pytest.raises(DatabaseError):
        await seeded_cache.put(seed_records[:1])
    assert await seeded_cache.get() == seed_records


async def test_clear_empties_both_tiers(seeded_cache, memory_store):
    await seeded_cache.clear()
    assert await seeded_cache.get() == []
    assert memory_store.values == {}
    assert seeded_cache.fetched_at is None


async def test_unreadable_store_degrades_to_empty(clock):
    class BrokenStore:
        async def read(self, key):
            raise DatabaseError("connection refused", "execute")

        async def write(self, values):
            raise AssertionError("no write expected")

        async def delete(self, keys):
            raise AssertionError("no delete expected")

    cache = ResultCache(BrokenStore(), clock=clock)
    assert await cache.get() == []


class LockedDeleteStore:
    """Serves a fixed slot; every delete fails."""

    def __init__(self, payload, timestamp):
        self.values = {SEARCH_CACHE_KEY: payload, CACHE_TIMESTAMP_KEY: timestamp}

    async def read(self, key):
        return self.values.get(key)

    async def write(self, values):
        self.values.update(values)

    async def delete(self, keys):
        raise DatabaseError("locked", "delete")


@pytest.mark.parametrize("payload,timestamp", [
    ("not json", "123"),
    ('[]', "not-a-number"),
])
async def test_failed_purge_of_corrupt_slot_degrades_to_empty(clock, payload, timestamp):
    cache = ResultCache(LockedDeleteStore(payload, timestamp), clock=clock)
    assert await cache.get() == []
    assert not cache.is_hydrated


async def test_failed_purge_of_expired_slot_degrades_to_empty(seeded_cache, memory_store, clock):
    stale = LockedDeleteStore(
        memory_store.values[SEARCH_CACHE_KEY], memory_store.values[CACHE_TIMESTAMP_KEY],
    )
    clock.now += CACHE_TTL_MS
    cache = ResultCache(stale, clock=clock)
    assert await cache.get() == []


async def test_failed_touch_still_serves_persisted_records(seeded_cache, memory_store, clock, seed_records):
    fetched_at = seeded_cache.fetched_at
    memory_store.fail_writes = True
    clock.now += 1000
    cache = ResultCache(memory_store, clock=clock)
    assert await cache.get() == seed_records
    assert cache.fetched_at == fetched_at
