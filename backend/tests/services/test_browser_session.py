"""Browser Session tests — navigation, search gating, and archive flow over a real cache.

Tests cover:
    - Address bar submissions for every location kind
    - Search with suggestion, suggestion acceptance, and the empty-cache view
    - Completion dropped when the tab closes mid-search
    - Lazy cache reads (hydration racing with navigation)
    - Archive viewer search and return to archive home
"""

import json

import pytest

from goggles.core.domain_types import CACHE_TIMESTAMP_KEY, PageKind, SEARCH_CACHE_KEY
from goggles.core.errors import TabNotFoundError
from goggles.core.tab_registry import TabRegistry
from goggles.services.browser_session import BrowserSession
from goggles.services.result_cache import ResultCache


async def test_new_tab_shows_home(browser):
    view = await browser.view(browser.registry.active_id)
    assert view.kind == PageKind.HOME


async def test_navigate_to_cached_record(browser):
    tab_id = browser.registry.active_id
    view = await browser.navigate(tab_id, "facelook.com/tanaka.taro")
    assert view.kind == PageKind.CONTENT
    assert view.record.id == "fl-tanaka"
    tab = browser.registry.get(tab_id)
    assert tab.title == "facelook.com"
    assert tab.address_bar_text == "https://facelook.com/tanaka.taro"


async def test_navigate_keyword_is_error_page(browser):
    view = await browser.navigate(browser.registry.active_id, "facelook")
    assert view.kind == PageKind.ERROR
    assert view.error_code == "INVALID_ADDRESS"


async def test_navigate_blank_is_noop(browser):
    tab_id = browser.registry.active_id
    view = await browser.navigate(tab_id, "   ")
    assert view.kind == PageKind.HOME
    assert browser.registry.get(tab_id).history.length == 1


async def test_navigate_search_address_runs_search(browser):
    tab_id = browser.registry.active_id
    view = await browser.navigate(tab_id, "https://www.goggles.com/search?q=nitta")
    assert view.kind == PageKind.SEARCH_RESULTS
    assert [r.id for r in view.page.items] == ["nitta"]
    assert browser.registry.get(tab_id).title == "nitta"


async def test_expired_domain_is_error_page(browser):
    view = await browser.navigate(browser.registry.active_id, "https://tanaka-bakery.example/")
    assert view.kind == PageKind.ERROR
    assert view.error_code == "DOMAIN_EXPIRED"


async def test_search_suggestion_then_accept(browser):
    tab_id = browser.registry.active_id
    view = await browser.search(tab_id, "faceloko")
    assert view.outcome.suggestion.suggested == "facelook"

    view = await browser.accept_suggestion(tab_id, "facelook")
    assert view.outcome.suggestion is None
    assert [r.id for r in view.page.items] == ["fl-tanaka"]
    tab = browser.registry.get(tab_id)
    assert tab.pending_request_id is None
    assert tab.search.skip_suggestion is True


async def test_search_with_empty_cache_shows_cache_unavailable(memory_store, clock):
    session = BrowserSession(TabRegistry(), ResultCache(memory_store, clock=clock))
    view = await session.search(session.registry.active_id, "nitta")
    assert view.kind == PageKind.CACHE_UNAVAILABLE


async def test_view_reads_cache_lazily(memory_store, clock, seed_records):
    cache = ResultCache(memory_store, clock=clock)
    session = BrowserSession(TabRegistry(), cache)
    tab_id = session.registry.active_id
    await session.navigate(tab_id, "https://facelook.com/tanaka.taro")
    assert (await session.view(tab_id)).kind == PageKind.PLACEHOLDER

    await cache.put(seed_records)
    assert (await session.view(tab_id)).kind == PageKind.CONTENT


async def test_search_completion_for_closed_tab_is_dropped(seeded_cache):
    registry = TabRegistry()
    registry.add_tab()
    doomed = registry.active_id

    class ClosingCache:
        async def get(self):
            registry.close_tab(doomed)
            return await seeded_cache.get()

    session = BrowserSession(registry, ClosingCache())
    with pytest.raises(TabNotFoundError):
        await session.search(doomed, "nitta")
    assert registry.get(doomed) is None
    assert len(registry.tabs) == 1


async def test_back_forward_and_home(browser):
    tab_id = browser.registry.active_id
    await browser.navigate(tab_id, "https://facelook.com/tanaka.taro")
    await browser.search(tab_id, "nitta")

    assert (await browser.back(tab_id)).kind == PageKind.CONTENT
    assert (await browser.back(tab_id)).kind == PageKind.HOME
    assert (await browser.forward(tab_id)).kind == PageKind.CONTENT
    assert (await browser.forward(tab_id)).kind == PageKind.SEARCH_RESULTS
    assert (await browser.home(tab_id)).kind == PageKind.HOME
    assert browser.registry.get(tab_id).history.length == 4


async def test_set_page_clamps(browser):
    tab_id = browser.registry.active_id
    await browser.search(tab_id, "tanaka")
    view = await browser.set_page(tab_id, 5)
    assert view.page.page == 1


async def test_reload_keeps_view(browser):
    tab_id = browser.registry.active_id
    await browser.navigate(tab_id, "https://facelook.com/tanaka.taro")
    view = await browser.reload(tab_id)
    assert view.kind == PageKind.CONTENT
    assert browser.registry.get(tab_id).reload_count == 1


async def test_archive_search_uses_record_date(browser):
    tab_id = browser.registry.active_id
    view = await browser.archive_search(tab_id, "nitta-blog.example/2024/03/hike")
    assert view.kind == PageKind.ARCHIVE_SNAPSHOT
    assert view.banner_date == "2024-03-15"
    assert view.address == (
        "https://playback.archive/web/20240315/https://nitta-blog.example/2024/03/hike"
    )


async def test_archive_search_without_snapshot(browser):
    view = await browser.archive_search(browser.registry.active_id, "unknown.example")
    assert view.kind == PageKind.NO_ARCHIVE
    assert view.address.startswith("https://playback.archive/web/20240101/")


async def test_archive_home(browser):
    view = await browser.archive_home(browser.registry.active_id)
    assert view.kind == PageKind.ARCHIVE_HOME
    assert browser.registry.active.title == "playback.archive"


async def test_unknown_tab_raises(browser):
    with pytest.raises(TabNotFoundError):
        await browser.back(42)


async def test_numeric_archived_date_in_persisted_slot_degrades_to_empty(memory_store, clock):
    item = {"id": "n", "url": "https://a.example/x", "template": "NittaBlogPage",
            "archivedDate": 20240315}
    memory_store.values[SEARCH_CACHE_KEY] = json.dumps([item])
    memory_store.values[CACHE_TIMESTAMP_KEY] = str(clock.now)
    session = BrowserSession(TabRegistry(), ResultCache(memory_store, clock=clock))
    view = await session.navigate(
        session.registry.active_id,
        "https://playback.archive/web/20240101/https://a.example/x",
    )
    assert view.kind == PageKind.NO_ARCHIVE
    assert memory_store.values == {}
