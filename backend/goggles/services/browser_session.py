"""Browser Session — imperative shell around the pure browser core.

Invariants:
    - Tab state changes only through TabRegistry.dispatch (the reducer)
    - Every resolution awaits cache.get() lazily: hydration may still be running
    - A search completion is applied only to the tab and request that issued it;
      completions for closed tabs or superseded requests are dropped
    - Blank address or query submissions leave the tab untouched

Design Decisions:
    - One BrowserSession per process (single-user browser), held as a singleton
      initialized in the FastAPI lifespan, like the database manager
    - Core functions receive plain records and hosts; all awaiting happens here
"""

import logging

from goggles.core.address_codec import (
    BrowserHosts, DEFAULT_HOSTS, ParsedAddress, SearchResults, normalize_input,
    parse_address,
)
from goggles.core.archive_viewer import back_to_home, submit_archive_search
from goggles.core.domain_types import DEFAULT_ARCHIVE_DATE, RESULTS_PAGE_SIZE
from goggles.core.errors import CacheUnavailableError, TabNotFoundError
from goggles.core.location_resolver import ResolveContext, resolve
from goggles.core.page_view import PageView
from goggles.core.search_engine import SearchOutcome, search
from goggles.core.tab_registry import TabRegistry
from goggles.core.tab_state import (
    BeginSearch, GoBack, GoForward, GoHome, NavigateTo, Reload, SearchCompleted,
    SetPage, TabAction, TabState,
)
from goggles.services.result_cache import ResultCache

logger = logging.getLogger(__name__)


class BrowserSession:
    def __init__(
        self,
        registry: TabRegistry,
        cache: ResultCache,
        hosts: BrowserHosts = DEFAULT_HOSTS,
        page_size: int = RESULTS_PAGE_SIZE,
        default_archive_date: str = DEFAULT_ARCHIVE_DATE,
    ):
        self.registry = registry
        self.cache = cache
        self.hosts = hosts
        self.page_size = page_size
        self.default_archive_date = default_archive_date

    # ─── Tabs ────────────────────────────────────────────────────

    def add_tab(self) -> TabState | None:
        tab = self.registry.add_tab()
        if tab is None:
            logger.info(f"Tab capacity reached ({self.registry.capacity})")
        return tab

    def close_tab(self, tab_id: int) -> bool:
        return self.registry.close_tab(tab_id)

    def activate_tab(self, tab_id: int) -> TabState:
        return self.registry.switch_tab(tab_id)

    def set_capacity(self, capacity: int) -> int:
        return self.registry.set_capacity(capacity)

    def _dispatch(self, tab_id: int, action: TabAction) -> TabState:
        tab = self.registry.dispatch(tab_id, action)
        if tab is None:
            raise TabNotFoundError(tab_id)
        return tab

    # ─── Viewing ─────────────────────────────────────────────────

    async def view(self, tab_id: int) -> PageView:
        """Resolve what the tab currently shows."""
        tab = self.registry.require(tab_id)
        records = await self.cache.get()
        query = tab.search.query
        outcome = None
        if tab.search.results:
            outcome = SearchOutcome(tab.search.results, tab.search.suggestion)
        ctx = ResolveContext(
            records=tuple(records),
            query=query,
            page=tab.search.page,
            skip_suggestion=tab.search.skip_suggestion,
            outcome=outcome,
            hosts=self.hosts,
            page_size=self.page_size,
        )
        is_search = isinstance(tab.location, SearchResults)
        parsed = ParsedAddress(tab.location, query if is_search else None)
        return resolve(parsed, ctx)

    # ─── Navigation ──────────────────────────────────────────────

    async def navigate(self, tab_id: int, raw: str) -> PageView:
        """Address bar submission."""
        text = raw.strip()
        if not text:
            return await self.view(tab_id)
        parsed = parse_address(normalize_input(text), self.hosts)
        if isinstance(parsed.location, SearchResults) and parsed.query:
            return await self.search(tab_id, parsed.query)
        self._dispatch(tab_id, NavigateTo(parsed.location))
        logger.info("Tab navigated", extra={"tab_id": tab_id, "address": text})
        return await self.view(tab_id)

    async def search(
        self, tab_id: int, query: str, skip_suggestion: bool = False,
    ) -> PageView:
        """Search action: runs the engine and gates the completion by request id."""
        text = query.strip()
        if not text:
            return await self.view(tab_id)
        request_id = self.registry.begin_request(tab_id)
        self._dispatch(tab_id, BeginSearch(request_id, text, skip_suggestion))

        records = await self.cache.get()
        try:
            outcome = search(records, text, skip_suggestion, self.hosts)
        except CacheUnavailableError:
            outcome = SearchOutcome(results=())

        completed = self.registry.dispatch(
            tab_id, SearchCompleted(request_id, outcome.results, outcome.suggestion),
        )
        if completed is None:
            logger.info(
                "Search completion dropped for closed tab",
                extra={"tab_id": tab_id, "request_id": request_id},
            )
            raise TabNotFoundError(tab_id)
        logger.info(
            "Search completed",
            extra={
                "tab_id": tab_id, "request_id": request_id,
                "record_count": len(outcome.results),
            },
        )
        return await self.view(tab_id)

    async def accept_suggestion(self, tab_id: int, query: str) -> PageView:
        return await self.search(tab_id, query, skip_suggestion=True)

    async def back(self, tab_id: int) -> PageView:
        self._dispatch(tab_id, GoBack())
        return await self.view(tab_id)

    async def forward(self, tab_id: int) -> PageView:
        self._dispatch(tab_id, GoForward())
        return await self.view(tab_id)

    async def home(self, tab_id: int) -> PageView:
        self._dispatch(tab_id, GoHome())
        return await self.view(tab_id)

    async def reload(self, tab_id: int) -> PageView:
        self._dispatch(tab_id, Reload())
        return await self.view(tab_id)

    async def set_page(self, tab_id: int, page: int) -> PageView:
        self._dispatch(tab_id, SetPage(page, self.page_size))
        return await self.view(tab_id)

    # ─── Archive viewer ──────────────────────────────────────────

    async def archive_search(self, tab_id: int, raw: str) -> PageView:
        records = await self.cache.get()
        address = submit_archive_search(
            raw, records, self.hosts, self.default_archive_date,
        )
        if address is None:
            return await self.view(tab_id)
        return await self.navigate(tab_id, address)

    async def archive_home(self, tab_id: int) -> PageView:
        return await self.navigate(tab_id, back_to_home(self.hosts))


# Singleton (initialized on startup)
browser: BrowserSession | None = None


def init_browser(session: BrowserSession) -> BrowserSession:
    global browser
    browser = session
    return browser


def get_browser() -> BrowserSession:
    """FastAPI dependency for the process-wide browser."""
    if not browser:
        raise RuntimeError("Browser not initialized")
    return browser
