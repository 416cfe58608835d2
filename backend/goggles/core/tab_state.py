"""Tab State & Reducer — the only way a tab's state changes.

Invariants:
    - reduce_tab is pure: (state, action) -> new state, never mutates its input
    - title and address_bar_text are re-derived from the current location after
      every navigation action (they cannot drift from history)
    - A query change resets the result page to 1
    - SearchCompleted is applied only when its request_id equals pending_request_id;
      superseded or unknown completions return the state unchanged
    - SetPage clamps into [1, total_pages]

Design Decisions:
    - Actions are frozen dataclasses dispatched through an explicit dict keyed by type
      (every action → handler mapping visible in one place)
    - BrowserHosts passed per call: the reducer never reads settings
"""

from dataclasses import dataclass, field, replace
from typing import Callable

from goggles.core.address_codec import (
    BrowserHosts, DEFAULT_HOSTS, Home, Location, SearchResults, display_address,
)
from goggles.core.content_record import ContentRecord
from goggles.core.domain_types import RESULTS_PAGE_SIZE, RequestId, TabId
from goggles.core.navigation_history import NavigationHistory
from goggles.core.search_engine import SuggestionInfo
from goggles.core.search_pagination import clamp_page
from goggles.core.tab_title import derive_title


@dataclass(frozen=True)
class SearchState:
    query: str = ""
    results: tuple[ContentRecord, ...] = ()
    suggestion: SuggestionInfo | None = None
    page: int = 1
    skip_suggestion: bool = False


@dataclass(frozen=True)
class TabState:
    id: TabId
    history: NavigationHistory = field(default_factory=NavigationHistory.seeded)
    title: str = ""
    address_bar_text: str = ""
    search: SearchState = field(default_factory=SearchState)
    pending_request_id: RequestId | None = None
    reload_count: int = 0

    @property
    def location(self) -> Location:
        return self.history.current

    @classmethod
    def new(cls, tab_id: TabId, hosts: BrowserHosts = DEFAULT_HOSTS) -> "TabState":
        return _sync_chrome(cls(id=tab_id), hosts)


# ─── Actions ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class NavigateTo:
    location: Location
    query: str | None = None


@dataclass(frozen=True)
class GoBack:
    pass


@dataclass(frozen=True)
class GoForward:
    pass


@dataclass(frozen=True)
class GoHome:
    pass


@dataclass(frozen=True)
class Reload:
    pass


@dataclass(frozen=True)
class BeginSearch:
    request_id: RequestId
    query: str
    skip_suggestion: bool = False


@dataclass(frozen=True)
class SearchCompleted:
    request_id: RequestId
    results: tuple[ContentRecord, ...]
    suggestion: SuggestionInfo | None = None


@dataclass(frozen=True)
class SetPage:
    page: int
    page_size: int = RESULTS_PAGE_SIZE


@dataclass(frozen=True)
class SetAddressBarText:
    text: str


TabAction = (
    NavigateTo | GoBack | GoForward | GoHome | Reload
    | BeginSearch | SearchCompleted | SetPage | SetAddressBarText
)


# ─── Handlers ────────────────────────────────────────────────────

def _sync_chrome(state: TabState, hosts: BrowserHosts) -> TabState:
    location = state.location
    query = state.search.query if isinstance(location, SearchResults) else None
    return replace(
        state,
        title=derive_title(location, query, hosts),
        address_bar_text=display_address(location, query, hosts),
    )


def _with_query(search: SearchState, query: str, skip_suggestion: bool) -> SearchState:
    if query == search.query and skip_suggestion == search.skip_suggestion:
        return search
    return SearchState(query=query, page=1, skip_suggestion=skip_suggestion)


def _navigate(state: TabState, action: NavigateTo, hosts: BrowserHosts) -> TabState:
    search = state.search
    if isinstance(action.location, SearchResults) and action.query is not None:
        search = _with_query(search, action.query.strip(), search.skip_suggestion)
    history = state.history.navigate_to(action.location)
    return _sync_chrome(replace(state, history=history, search=search), hosts)


def _back(state: TabState, action: GoBack, hosts: BrowserHosts) -> TabState:
    return _sync_chrome(replace(state, history=state.history.back()), hosts)


def _forward(state: TabState, action: GoForward, hosts: BrowserHosts) -> TabState:
    return _sync_chrome(replace(state, history=state.history.forward()), hosts)


def _home(state: TabState, action: GoHome, hosts: BrowserHosts) -> TabState:
    return _navigate(state, NavigateTo(Home()), hosts)


def _reload(state: TabState, action: Reload, hosts: BrowserHosts) -> TabState:
    return _sync_chrome(replace(state, reload_count=state.reload_count + 1), hosts)


def _begin_search(state: TabState, action: BeginSearch, hosts: BrowserHosts) -> TabState:
    query = action.query.strip()
    search = _with_query(state.search, query, action.skip_suggestion)
    return _sync_chrome(
        replace(
            state,
            history=state.history.navigate_to(SearchResults()),
            search=search,
            pending_request_id=action.request_id,
        ),
        hosts,
    )


def _complete_search(
    state: TabState, action: SearchCompleted, hosts: BrowserHosts,
) -> TabState:
    if state.pending_request_id != action.request_id:
        return state
    search = replace(
        state.search, results=tuple(action.results), suggestion=action.suggestion,
    )
    return replace(state, search=search, pending_request_id=None)


def _set_page(state: TabState, action: SetPage, hosts: BrowserHosts) -> TabState:
    page = clamp_page(action.page, len(state.search.results), action.page_size)
    return replace(state, search=replace(state.search, page=page))


def _set_address_bar(
    state: TabState, action: SetAddressBarText, hosts: BrowserHosts,
) -> TabState:
    return replace(state, address_bar_text=action.text)


_HANDLERS: dict[type, Callable[[TabState, object, BrowserHosts], TabState]] = {
    NavigateTo: _navigate,
    GoBack: _back,
    GoForward: _forward,
    GoHome: _home,
    Reload: _reload,
    BeginSearch: _begin_search,
    SearchCompleted: _complete_search,
    SetPage: _set_page,
    SetAddressBarText: _set_address_bar,
}


def reduce_tab(
    state: TabState, action: TabAction, hosts: BrowserHosts = DEFAULT_HOSTS,
) -> TabState:
    """Apply one action. Raises TypeError for unknown action types."""
    handler = _HANDLERS.get(type(action))
    if handler is None:
        raise TypeError(f"Unknown tab action: {type(action).__name__}")
    return handler(state, action, hosts)
