"""Cache Hydration — fills the result cache at startup without blocking requests.

Invariants:
    - A fresh persisted slot is reused; the seed file is read only on a miss
    - reload_cache always re-reads the seed file and replaces both tiers
    - Hydration failures are logged, never crash the process: searches then show
      the cache-unavailable page until a reload succeeds

Design Decisions:
    - Seed file read in a worker thread (asyncio.to_thread): the event loop keeps
      serving navigation while hydration races with it
"""

import asyncio
import logging

from goggles.core.errors import BrowserError
from goggles.services.result_cache import ResultCache
from goggles.services.seed_loader import load_seed_file

logger = logging.getLogger(__name__)


async def reload_cache(cache: ResultCache, seed_path: str, strict: bool = False) -> int:
    """Re-seed both tiers from the seed file. Returns the record count."""
    records = await asyncio.to_thread(load_seed_file, seed_path, strict)
    await cache.put(records)
    return len(records)


async def hydrate_cache(cache: ResultCache, seed_path: str, strict: bool = False) -> int:
    """Reuse a fresh persisted cache, else seed it. Returns the record count."""
    existing = await cache.get()
    if existing:
        return len(existing)
    return await reload_cache(cache, seed_path, strict)


async def _run_hydration(cache: ResultCache, seed_path: str, strict: bool) -> None:
    try:
        count = await hydrate_cache(cache, seed_path, strict)
        logger.info("Cache hydration finished", extra={"record_count": count})
    except BrowserError as e:
        logger.error(
            f"Cache hydration failed: {e.message}", extra={"error_code": e.code},
        )


def start_hydration(
    cache: ResultCache, seed_path: str, strict: bool = False,
) -> asyncio.Task:
    return asyncio.create_task(
        _run_hydration(cache, seed_path, strict), name="cache-hydration",
    )
