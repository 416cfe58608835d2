"""Result Cache — two-tier record store (in-process list + persisted slot) with expiry.

Invariants:
    - get() serves the in-process tier when it is non-empty
    - Otherwise the persisted tier is used only while now - fetched_at < ttl;
      a miss, an expired slot, or a corrupt slot returns [] and purges the slot
    - The in-process tier is replaced in one assignment, never partially written
    - put() writes the persisted tier before swapping the in-process tier, so a
      failed write leaves the previous collection intact
    - Reusing a valid persisted slot refreshes its timestamp (touch)

Design Decisions:
    - Serialization and freshness rules live in core/cache_policy.py; this class only
      sequences the IO around them
    - asyncio.Lock around hydration: concurrent resolutions share one load
    - A storage failure anywhere in hydration (read, purge, touch) is logged and
      never escapes get(): a failed read degrades to an empty cache, same as corruption
"""

import asyncio
import logging
import time
from typing import Callable

from goggles.core.cache_policy import (
    decode_slot, encode_records, encode_timestamp, is_fresh,
)
from goggles.core.content_record import ContentRecord, find_by_address
from goggles.core.domain_types import (
    CACHE_TIMESTAMP_KEY, CACHE_TTL_MS, SEARCH_CACHE_KEY,
)
from goggles.core.errors import DatabaseError
from goggles.core.repository_protocols import CacheSlotStore

logger = logging.getLogger(__name__)


def now_ms() -> int:
    return int(time.time() * 1000)


class ResultCache:
    def __init__(
        self,
        store: CacheSlotStore,
        ttl_ms: int = CACHE_TTL_MS,
        clock: Callable[[], int] = now_ms,
    ):
        self._store = store
        self._ttl_ms = ttl_ms
        self._clock = clock
        self._records: tuple[ContentRecord, ...] = ()
        self._fetched_at: int | None = None
        self._lock = asyncio.Lock()

    @property
    def is_hydrated(self) -> bool:
        return bool(self._records)

    @property
    def fetched_at(self) -> int | None:
        return self._fetched_at

    async def get(self) -> list[ContentRecord]:
        if self._records:
            return list(self._records)
        async with self._lock:
            if not self._records:
                await self._hydrate()
        return list(self._records)

    async def lookup(self, address: str) -> ContentRecord | None:
        return find_by_address(await self.get(), address)

    async def put(self, records: list[ContentRecord]) -> None:
        now = self._clock()
        payload = encode_records(records)
        await self._store.write({
            SEARCH_CACHE_KEY: payload,
            CACHE_TIMESTAMP_KEY: encode_timestamp(now),
        })
        self._records = tuple(records)
        self._fetched_at = now
        logger.info("Result cache stored", extra={"record_count": len(records)})

    async def touch(self) -> None:
        now = self._clock()
        await self._store.write({CACHE_TIMESTAMP_KEY: encode_timestamp(now)})
        self._fetched_at = now

    async def clear(self) -> None:
        self._records = ()
        self._fetched_at = None
        await self._purge()
        logger.info("Result cache cleared")

    async def _hydrate(self) -> None:
        try:
            payload = await self._store.read(SEARCH_CACHE_KEY)
            timestamp = await self._store.read(CACHE_TIMESTAMP_KEY)
        except DatabaseError as e:
            logger.warning(
                f"Persisted cache unreadable: {e.message}",
                extra={"error_code": e.code},
            )
            return
        if payload is None and timestamp is None:
            return

        decoded = decode_slot(payload, timestamp)
        if decoded is None:
            logger.warning("Persisted cache corrupt, purging")
            await self._discard_slot()
            return
        records, fetched_at = decoded
        if not is_fresh(fetched_at, self._clock(), self._ttl_ms):
            logger.info("Persisted cache expired, purging")
            await self._discard_slot()
            return

        self._records = tuple(records)
        self._fetched_at = fetched_at
        try:
            await self.touch()
        except DatabaseError as e:
            logger.warning(
                f"Persisted cache timestamp not refreshed: {e.message}",
                extra={"error_code": e.code},
            )
        logger.info(
            "Result cache hydrated from persisted tier",
            extra={"record_count": len(records)},
        )

    async def _purge(self) -> None:
        await self._store.delete([SEARCH_CACHE_KEY, CACHE_TIMESTAMP_KEY])

    async def _discard_slot(self) -> None:
        """Purge during hydration; a failed delete leaves the cache empty."""
        try:
            await self._purge()
        except DatabaseError as e:
            logger.warning(
                f"Persisted cache not purged: {e.message}",
                extra={"error_code": e.code},
            )
