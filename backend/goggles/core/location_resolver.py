"""Location Resolver — turns a classified address into a PageView.

Invariants:
    - Pure: records arrive in ResolveContext, the caller awaits the cache beforehand
    - Home never consults records
    - Empty records on a search → CACHE_UNAVAILABLE view, never an empty result page
    - Expired records always resolve to the error view, whatever their template
    - External addresses walk EXTERNAL_STAGES in order; the first matching stage wins
    - Resolution errors become views; nothing here raises to the caller

Design Decisions:
    - Stage precedence lives in one explicit tuple of (name, predicate, handler),
      so reordering sources is a one-line change and the order is testable
    - Unknown templates fall back to the placeholder, same as unknown addresses
"""

import logging
from dataclasses import dataclass
from typing import Callable

from goggles.core.address_codec import (
    ArchiveSnapshot, BrowserHosts, DEFAULT_HOSTS, ExternalAddress, Home,
    ParsedAddress, SearchResults, display_address, guess_host, host_of,
    is_valid_url,
)
from goggles.core.archive_viewer import snapshot_state
from goggles.core.content_record import ContentRecord, find_by_address
from goggles.core.domain_types import MailEntry, PageKind, RESULTS_PAGE_SIZE
from goggles.core.errors import (
    CacheUnavailableError, DomainExpiredError, InvalidAddressError,
    SnapshotNotFoundError,
)
from goggles.core.page_view import PageView
from goggles.core.renderer_registry import (
    render_archive_home, render_archive_snapshot, render_cache_unavailable,
    render_error, render_home, render_mail, render_no_archive, render_placeholder,
    render_record, render_search_results,
)
from goggles.core.search_engine import SearchOutcome, search
from goggles.core.search_pagination import paginate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolveContext:
    """Everything resolution needs besides the address itself."""
    records: tuple[ContentRecord, ...] = ()
    query: str = ""
    page: int = 1
    skip_suggestion: bool = False
    outcome: SearchOutcome | None = None
    hosts: BrowserHosts = DEFAULT_HOSTS
    page_size: int = RESULTS_PAGE_SIZE


def mail_entries(hosts: BrowserHosts = DEFAULT_HOSTS) -> dict[str, MailEntry]:
    """Static registry of always-available mail entry points."""
    base = f"https://{hosts.mail_host}"
    return {
        base: MailEntry.SERVICE,
        f"{base}/": MailEntry.SERVICE,
        f"{base}/login": MailEntry.LOGIN,
    }


# ─── Fixed locations ─────────────────────────────────────────────

def _resolve_home(ctx: ResolveContext) -> PageView:
    return PageView(
        kind=PageKind.HOME,
        address=display_address(Home(), hosts=ctx.hosts),
        renderable=render_home(),
    )


def _resolve_search(ctx: ResolveContext) -> PageView:
    address = display_address(SearchResults(), ctx.query, ctx.hosts)
    try:
        outcome = ctx.outcome or search(
            list(ctx.records), ctx.query, ctx.skip_suggestion, ctx.hosts,
        )
    except CacheUnavailableError as e:
        logger.warning(
            "Search with empty cache",
            extra={"address": address, "error_code": e.code},
        )
        return PageView(
            kind=PageKind.CACHE_UNAVAILABLE,
            address=address,
            renderable=render_cache_unavailable(e.to_view()),
            error=e,
        )
    page = paginate(outcome.results, ctx.page, ctx.page_size)
    return PageView(
        kind=PageKind.SEARCH_RESULTS,
        address=address,
        renderable=render_search_results(page, outcome.suggestion),
        outcome=outcome,
        page=page,
    )


def _resolve_snapshot(location: ArchiveSnapshot, ctx: ResolveContext) -> PageView:
    address = display_address(location, hosts=ctx.hosts)
    state = snapshot_state(location.date, location.inner_address, ctx.records)
    inner = state.inner_address
    if not state.found:
        error = SnapshotNotFoundError(inner)
        return PageView(
            kind=PageKind.NO_ARCHIVE,
            address=address,
            renderable=render_no_archive(inner),
            error=error,
        )
    return PageView(
        kind=PageKind.ARCHIVE_SNAPSHOT,
        address=address,
        renderable=render_archive_snapshot(state.record, state.banner_date, inner),
        record=state.record,
        banner_date=state.banner_date,
    )


# ─── External address stages ─────────────────────────────────────

def _is_mail_entry(address: str, ctx: ResolveContext) -> bool:
    return address in mail_entries(ctx.hosts)


def _mail_view(address: str, ctx: ResolveContext) -> PageView:
    entry = mail_entries(ctx.hosts)[address]
    return PageView(kind=PageKind.MAIL, address=address, renderable=render_mail(entry))


def _is_cached(address: str, ctx: ResolveContext) -> bool:
    return find_by_address(ctx.records, address) is not None


def _cached_view(address: str, ctx: ResolveContext) -> PageView:
    record = find_by_address(ctx.records, address)
    if record.is_expired:
        error = DomainExpiredError(address, guess_host(address))
        return PageView(
            kind=PageKind.ERROR,
            address=address,
            renderable=render_error(error.to_view()),
            record=record,
            error=error,
        )
    renderable = render_record(record)
    if renderable is None:
        logger.warning(
            "Unknown template, showing placeholder",
            extra={"address": address, "template": record.template},
        )
        return _placeholder_view(address, ctx)
    return PageView(
        kind=PageKind.CONTENT, address=address, renderable=renderable, record=record,
    )


def _is_archive_host(address: str, ctx: ResolveContext) -> bool:
    host = host_of(address)
    return host is not None and host.lower() == ctx.hosts.archive_host.lower()


def _archive_home_view(address: str, ctx: ResolveContext) -> PageView:
    return PageView(
        kind=PageKind.ARCHIVE_HOME, address=address, renderable=render_archive_home(),
    )


def _is_invalid(address: str, ctx: ResolveContext) -> bool:
    return not is_valid_url(address)


def _invalid_view(address: str, ctx: ResolveContext) -> PageView:
    error = InvalidAddressError(address, guess_host(address))
    return PageView(
        kind=PageKind.ERROR,
        address=address,
        renderable=render_error(error.to_view()),
        error=error,
    )


def _always(address: str, ctx: ResolveContext) -> bool:
    return True


def _placeholder_view(address: str, ctx: ResolveContext) -> PageView:
    return PageView(
        kind=PageKind.PLACEHOLDER, address=address, renderable=render_placeholder(address),
    )


Stage = tuple[
    str,
    Callable[[str, ResolveContext], bool],
    Callable[[str, ResolveContext], PageView],
]

EXTERNAL_STAGES: tuple[Stage, ...] = (
    ("static", _is_mail_entry, _mail_view),
    ("cache", _is_cached, _cached_view),
    ("pattern", _is_archive_host, _archive_home_view),
    ("error", _is_invalid, _invalid_view),
    ("placeholder", _always, _placeholder_view),
)


def resolve_external(address: str, ctx: ResolveContext) -> PageView:
    for name, matches, handle in EXTERNAL_STAGES:
        if matches(address, ctx):
            logger.debug("Resolved by %s stage", name, extra={"address": address})
            return handle(address, ctx)
    return _placeholder_view(address, ctx)


# ─── Entry point ─────────────────────────────────────────────────

def resolve(parsed: ParsedAddress, ctx: ResolveContext) -> PageView:
    """Resolve a classified address into the view to show."""
    location = parsed.location
    if isinstance(location, Home):
        return _resolve_home(ctx)
    if isinstance(location, SearchResults):
        if parsed.query is not None and parsed.query != ctx.query:
            ctx = ResolveContext(
                records=ctx.records, query=parsed.query, page=1,
                skip_suggestion=ctx.skip_suggestion, hosts=ctx.hosts,
                page_size=ctx.page_size,
            )
        return _resolve_search(ctx)
    if isinstance(location, ArchiveSnapshot):
        return _resolve_snapshot(location, ctx)
    if isinstance(location, ExternalAddress):
        return resolve_external(location.raw, ctx)
    raise TypeError(f"Unknown location: {location!r}")
