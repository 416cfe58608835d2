"""Navigation Routes — address bar, search, history, paging, and archive viewer per tab.

Invariants:
    - Every route answers with the tab's resolved page view
    - Address-resolution failures come back as views (200), never as HTTP errors
    - Only unknown tabs and invalid request bodies produce error responses

Design Decisions:
    - Archive viewer routes live here: they are navigations of the same tab
"""

from fastapi import APIRouter, Depends

from goggles.core.page_view import PageView
from goggles.schemas.browser import (
    AddressInput, PageInput, PageViewResponse, SearchInput, SuggestionInput,
)
from goggles.services.browser_session import BrowserSession, get_browser

router = APIRouter(prefix="/api/v1/tabs/{tab_id}", tags=["navigation"])


def _respond(browser: BrowserSession, tab_id: int, view: PageView) -> PageViewResponse:
    tab = browser.registry.require(tab_id)
    return PageViewResponse.from_view(view, tab, browser.registry.active_id)


@router.get("/view", response_model=PageViewResponse)
async def current_view(tab_id: int, browser: BrowserSession = Depends(get_browser)):
    return _respond(browser, tab_id, await browser.view(tab_id))


@router.post("/navigate", response_model=PageViewResponse)
async def navigate(
    tab_id: int, body: AddressInput, browser: BrowserSession = Depends(get_browser),
):
    """Address bar submission. Keywords without a dot are not promoted to searches."""
    return _respond(browser, tab_id, await browser.navigate(tab_id, body.address))


@router.post("/search", response_model=PageViewResponse)
async def search(
    tab_id: int, body: SearchInput, browser: BrowserSession = Depends(get_browser),
):
    view = await browser.search(tab_id, body.query, body.skip_suggestion)
    return _respond(browser, tab_id, view)


@router.post("/suggestion", response_model=PageViewResponse)
async def accept_suggestion(
    tab_id: int, body: SuggestionInput, browser: BrowserSession = Depends(get_browser),
):
    """Search the suggested query with correction disabled."""
    return _respond(browser, tab_id, await browser.accept_suggestion(tab_id, body.query))


@router.post("/back", response_model=PageViewResponse)
async def back(tab_id: int, browser: BrowserSession = Depends(get_browser)):
    return _respond(browser, tab_id, await browser.back(tab_id))


@router.post("/forward", response_model=PageViewResponse)
async def forward(tab_id: int, browser: BrowserSession = Depends(get_browser)):
    return _respond(browser, tab_id, await browser.forward(tab_id))


@router.post("/home", response_model=PageViewResponse)
async def home(tab_id: int, browser: BrowserSession = Depends(get_browser)):
    return _respond(browser, tab_id, await browser.home(tab_id))


@router.post("/reload", response_model=PageViewResponse)
async def reload(tab_id: int, browser: BrowserSession = Depends(get_browser)):
    return _respond(browser, tab_id, await browser.reload(tab_id))


@router.put("/page", response_model=PageViewResponse)
async def set_page(
    tab_id: int, body: PageInput, browser: BrowserSession = Depends(get_browser),
):
    """Change the search results page (clamped to the available pages)."""
    return _respond(browser, tab_id, await browser.set_page(tab_id, body.page))


# ─── Archive viewer ──────────────────────────────────────────────

@router.post("/archive/search", response_model=PageViewResponse)
async def archive_search(
    tab_id: int, body: AddressInput, browser: BrowserSession = Depends(get_browser),
):
    """Open the archived snapshot of a URL (dated by the record, else the default)."""
    return _respond(browser, tab_id, await browser.archive_search(tab_id, body.address))


@router.post("/archive/home", response_model=PageViewResponse)
async def archive_home(tab_id: int, browser: BrowserSession = Depends(get_browser)):
    return _respond(browser, tab_id, await browser.archive_home(tab_id))
