"""Renderer Registry — closed Template → render function table plus the built-in page renderers.

Invariants:
    - RENDERERS covers exactly the Template enum (validate_renderer_table checks at startup)
    - render_record returns None for unknown templates; callers fall back to the placeholder
    - A renderable is always {"component": str, "props": dict} — the only contract with the UI

Design Decisions:
    - Explicit dict over getattr: every template → renderer mapping visible in one place
    - Record pages receive documentId + initialData (the UI fetches nothing else)
    - Static pages (no stored content) render with empty props
"""

from typing import Callable

from goggles.core.content_record import ContentRecord
from goggles.core.domain_types import MailEntry, Template
from goggles.core.errors import RendererRegistryError
from goggles.core.search_engine import SuggestionInfo
from goggles.core.search_pagination import ResultPage

Renderer = Callable[[ContentRecord], dict]


def _renderable(component: str, **props: object) -> dict:
    return {"component": component, "props": props}


def _document_page(record: ContentRecord) -> dict:
    return _renderable(
        record.template, documentId=record.id, initialData=record.to_dict(),
    )


def _static_page(record: ContentRecord) -> dict:
    return _renderable(record.template)


def _generic_page(record: ContentRecord) -> dict:
    return render_placeholder(record.address)


def _playback_page(record: ContentRecord) -> dict:
    return _renderable(Template.PLAYBACK_MACHINE.value, url=record.address)


# Every mapping explicit: adding a template requires editing this dict
RENDERERS: dict[Template, Renderer] = {
    Template.ABC_CORP: _static_page,
    Template.BBS_THREAD: _document_page,
    Template.CHIITA: _document_page,
    Template.COMPANY_REVIEW: _document_page,
    Template.DICTIONARY: _document_page,
    Template.ELEMENTARY_SCHOOL: _document_page,
    Template.FACELOOK_PROFILE: _document_page,
    Template.HIGH_SCHOOL: _document_page,
    Template.JUNIOR_HIGH_SCHOOL: _document_page,
    Template.KYET: _document_page,
    Template.LINKEDIN_PROFILE: _static_page,
    Template.NITTA_BLOG: _document_page,
    Template.NYAHOO_NEWS: _document_page,
    Template.NYAHOO_QUESTION: _document_page,
    Template.OSINTRICKS_HOME: _document_page,
    Template.PRODUCT_REVIEW_BLOG: _document_page,
    Template.RANKEDON_PROFILE: _document_page,
    Template.SCHOOL_REVIEW: _document_page,
    Template.SURNAME_FORTUNE: _document_page,
    Template.UNIVERSITY: _document_page,
    Template.USOPEDIA: _document_page,
    Template.YUHI_SHINBUN: _document_page,
    Template.GENERIC: _generic_page,
    Template.PLAYBACK_MACHINE: _playback_page,
}


def validate_renderer_table(table: dict[Template, Renderer] | None = None) -> None:
    """Raise RendererRegistryError unless the table covers exactly the Template enum."""
    table = RENDERERS if table is None else table
    keys = set(table)
    missing = sorted(t.value for t in Template if t not in keys)
    extra = sorted(str(k) for k in keys if not isinstance(k, Template))
    if missing or extra:
        raise RendererRegistryError(missing, extra)


def render_record(record: ContentRecord) -> dict | None:
    """Render a record by its template. None when the template is unknown."""
    kind = record.template_kind
    if kind is None:
        return None
    return RENDERERS[kind](record)


# ─── Built-in pages ──────────────────────────────────────────────

def render_home() -> dict:
    return _renderable("GogglesHomePage")


def render_search_results(
    page: ResultPage, suggestion: SuggestionInfo | None,
) -> dict:
    return _renderable(
        "GogglesSearchResultsPage",
        searchResults=[r.to_summary() for r in page.items],
        currentPage=page.page,
        totalPages=page.total_pages,
        totalResults=page.total_results,
        suggestionInfo=suggestion.to_dict() if suggestion else None,
    )


def render_placeholder(address: str) -> dict:
    return _renderable(Template.GENERIC.value, url=address)


def render_error(error_view: dict) -> dict:
    return _renderable("ErrorPage", **error_view)


def render_cache_unavailable(error_view: dict) -> dict:
    return _renderable("CacheUnavailablePage", **error_view)


def render_mail(entry: MailEntry) -> dict:
    return _renderable("GogglesMail", entry=entry.value)


def render_archive_home() -> dict:
    return _renderable(Template.PLAYBACK_MACHINE.value, mode="home")


def render_archive_snapshot(
    record: ContentRecord, banner_date: str, inner_address: str,
) -> dict:
    page = render_record(record) or render_placeholder(inner_address)
    return _renderable(
        Template.PLAYBACK_MACHINE.value,
        mode="snapshot", bannerDate=banner_date, url=inner_address, page=page,
    )


def render_no_archive(inner_address: str) -> dict:
    return _renderable(
        Template.PLAYBACK_MACHINE.value,
        mode="no_archive", url=inner_address,
        page=_renderable("NoArchivePage", url=inner_address),
    )
