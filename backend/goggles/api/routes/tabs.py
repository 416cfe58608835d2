"""Tab Routes — open, close, activate tabs and configure capacity.

Invariants:
    - Every response carries the full tab list, so the client never patches state
    - Opening at capacity and closing the only tab are no-ops (changed=false), not errors
    - Unknown tab ids → TabNotFoundError (404 via the global handler)
"""

import logging

from fastapi import APIRouter, Depends, status

from goggles.schemas.browser import CapacityInput, TabListResponse
from goggles.services.browser_session import BrowserSession, get_browser

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/tabs", tags=["tabs"])


@router.get("", response_model=TabListResponse)
async def list_tabs(browser: BrowserSession = Depends(get_browser)):
    return TabListResponse.from_registry(browser.registry, changed=False)


@router.post(
    "", response_model=TabListResponse, status_code=status.HTTP_201_CREATED,
)
async def open_tab(browser: BrowserSession = Depends(get_browser)):
    """Open a Home tab and activate it (no-op at capacity)."""
    tab = browser.add_tab()
    if tab is not None:
        logger.info("Tab opened", extra={"tab_id": tab.id})
    return TabListResponse.from_registry(browser.registry, changed=tab is not None)


@router.delete("/{tab_id}", response_model=TabListResponse)
async def close_tab(tab_id: int, browser: BrowserSession = Depends(get_browser)):
    """Close a tab (no-op for the only tab)."""
    closed = browser.close_tab(tab_id)
    if closed:
        logger.info("Tab closed", extra={"tab_id": tab_id})
    return TabListResponse.from_registry(browser.registry, changed=closed)


@router.post("/{tab_id}/activate", response_model=TabListResponse)
async def activate_tab(tab_id: int, browser: BrowserSession = Depends(get_browser)):
    browser.activate_tab(tab_id)
    return TabListResponse.from_registry(browser.registry)


@router.put("/capacity", response_model=TabListResponse)
async def set_capacity(
    body: CapacityInput, browser: BrowserSession = Depends(get_browser),
):
    """Reconfigure tab capacity. Values below 1 clamp to 1; open tabs stay open."""
    browser.set_capacity(body.capacity)
    return TabListResponse.from_registry(browser.registry)
