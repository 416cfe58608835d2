"""Browser Schemas — Pydantic models for the tab, navigation, and cache API.

Invariants:
    - Request bodies are validated before reaching the browser session
    - Responses are built from core state via the from_* constructors, never by hand
      in route handlers

Design Decisions:
    - Capacity accepts any integer: clamping to >= 1 is browser behavior, not a
      request validation failure
    - Address input is not stripped here: the address codec owns trimming rules
"""

from pydantic import BaseModel, Field, field_validator

from goggles.core.address_codec import SearchResults
from goggles.core.page_view import PageView
from goggles.core.tab_registry import TabRegistry
from goggles.core.tab_state import TabState


# ─── Requests ────────────────────────────────────────────────────

class AddressInput(BaseModel):
    """Address bar or archive viewer submission."""
    address: str = Field(max_length=2048)


class SearchInput(BaseModel):
    """Search action — query stripped, must not be blank."""
    query: str = Field(min_length=1, max_length=500)
    skip_suggestion: bool = False

    @field_validator("query")
    @classmethod
    def strip_query(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("query cannot be empty or whitespace")
        return v


class SuggestionInput(BaseModel):
    """Accepting a suggested query."""
    query: str = Field(min_length=1, max_length=500)

    @field_validator("query")
    @classmethod
    def strip_query(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("query cannot be empty or whitespace")
        return v


class PageInput(BaseModel):
    page: int


class CapacityInput(BaseModel):
    capacity: int


# ─── Responses ───────────────────────────────────────────────────

class TabResponse(BaseModel):
    id: int
    title: str
    address_bar_text: str
    active: bool
    location_kind: str
    can_go_back: bool
    can_go_forward: bool
    query: str | None = None
    page: int = 1
    pending: bool = False

    @classmethod
    def from_state(cls, tab: TabState, active_id: int) -> "TabResponse":
        is_search = isinstance(tab.location, SearchResults)
        return cls(
            id=tab.id,
            title=tab.title,
            address_bar_text=tab.address_bar_text,
            active=tab.id == active_id,
            location_kind=tab.location.kind.value,
            can_go_back=tab.history.can_go_back,
            can_go_forward=tab.history.can_go_forward,
            query=tab.search.query if is_search else None,
            page=tab.search.page,
            pending=tab.pending_request_id is not None,
        )


class TabListResponse(BaseModel):
    tabs: list[TabResponse]
    active_id: int
    capacity: int
    changed: bool = True

    @classmethod
    def from_registry(cls, registry: TabRegistry, changed: bool = True) -> "TabListResponse":
        return cls(
            tabs=[TabResponse.from_state(t, registry.active_id) for t in registry.tabs],
            active_id=registry.active_id,
            capacity=registry.capacity,
            changed=changed,
        )


class SuggestionResponse(BaseModel):
    original: str
    suggested: str


class PageViewResponse(BaseModel):
    """What a tab shows: the resolved view plus the tab chrome."""
    tab: TabResponse
    kind: str
    address: str
    renderable: dict
    record_id: str | None = None
    banner_date: str | None = None
    error_code: str | None = None
    host: str | None = None
    suggestion: SuggestionResponse | None = None
    current_page: int | None = None
    total_pages: int | None = None
    total_results: int | None = None

    @classmethod
    def from_view(
        cls, view: PageView, tab: TabState, active_id: int,
    ) -> "PageViewResponse":
        suggestion = None
        if view.outcome and view.outcome.suggestion:
            suggestion = SuggestionResponse(**view.outcome.suggestion.to_dict())
        return cls(
            tab=TabResponse.from_state(tab, active_id),
            kind=view.kind.value,
            address=view.address,
            renderable=view.renderable,
            record_id=view.record.id if view.record else None,
            banner_date=view.banner_date,
            error_code=view.error_code,
            host=view.host,
            suggestion=suggestion,
            current_page=view.page.page if view.page else None,
            total_pages=view.page.total_pages if view.page else None,
            total_results=view.page.total_results if view.page else None,
        )


class CacheStatusResponse(BaseModel):
    hydrated: bool
    record_count: int
    fetched_at: int | None = None
