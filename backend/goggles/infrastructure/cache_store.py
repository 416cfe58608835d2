"""SQL Cache Slot Store — CacheSlotStore implemented over the cache_slots table.

Invariants:
    - write() replaces every given key in a single transaction (never half-written)
    - read() of a missing key returns None
    - Sessions come from the DatabaseSessionManager, so errors surface as DatabaseError
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import delete, select

from goggles.infrastructure.database import DatabaseSessionManager
from goggles.models.cache_slot import CacheSlot

logger = logging.getLogger(__name__)


class SqlCacheSlotStore:
    def __init__(self, manager: DatabaseSessionManager):
        self._manager = manager

    async def read(self, key: str) -> str | None:
        async with self._manager.session() as db:
            result = await db.execute(
                select(CacheSlot.value).where(CacheSlot.key == key),
            )
            return result.scalar_one_or_none()

    async def write(self, values: dict[str, str]) -> None:
        now = datetime.now(timezone.utc)
        async with self._manager.session() as db:
            for key, value in values.items():
                slot = await db.get(CacheSlot, key)
                if slot is None:
                    db.add(CacheSlot(key=key, value=value, updated_at=now))
                else:
                    slot.value = value
                    slot.updated_at = now
            await db.commit()

    async def delete(self, keys: list[str]) -> None:
        async with self._manager.session() as db:
            await db.execute(delete(CacheSlot).where(CacheSlot.key.in_(keys)))
            await db.commit()
        logger.debug("Cache slots deleted: %s", ", ".join(keys))
