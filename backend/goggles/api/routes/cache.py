"""Cache Routes — inspect, re-seed, and clear the result cache.

Invariants:
    - reload replaces both tiers from the seed file (SeedValidationError → 400)
    - clear empties both tiers; the next search shows the cache-unavailable page
"""

import logging

from fastapi import APIRouter, Depends

from goggles.config import Settings, get_settings
from goggles.schemas.browser import CacheStatusResponse
from goggles.services.browser_session import BrowserSession, get_browser
from goggles.services.cache_hydration import reload_cache

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/cache", tags=["cache"])


async def _status(browser: BrowserSession) -> CacheStatusResponse:
    records = await browser.cache.get()
    return CacheStatusResponse(
        hydrated=browser.cache.is_hydrated,
        record_count=len(records),
        fetched_at=browser.cache.fetched_at,
    )


@router.get("", response_model=CacheStatusResponse)
async def cache_status(browser: BrowserSession = Depends(get_browser)):
    return await _status(browser)


@router.post("/reload", response_model=CacheStatusResponse)
async def reload(
    browser: BrowserSession = Depends(get_browser),
    settings: Settings = Depends(get_settings),
):
    """Re-seed the cache from the configured seed file."""
    count = await reload_cache(browser.cache, settings.seed_path, settings.seed_strict)
    logger.info("Cache reloaded", extra={"record_count": count})
    return await _status(browser)


@router.delete("", response_model=CacheStatusResponse)
async def clear(browser: BrowserSession = Depends(get_browser)):
    await browser.cache.clear()
    return await _status(browser)
