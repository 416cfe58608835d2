"""Browser API route tests — tabs, navigation, archive, cache, health over httpx.

Invariants:
    - Resolution failures are 200 responses carrying an error view
    - Unknown tabs → 404 with the structured error envelope
    - Invalid bodies → 400 with field details
"""

import json

from goggles.config import Settings, get_settings
from goggles.main import app

from tests.services.seed_data import SEED_ITEMS


# --- Tabs ------------------------------------------------------------------------

async def test_list_tabs_starts_with_home_tab(client):
    res = await client.get("/api/v1/tabs")
    assert res.status_code == 200
    data = res.json()
    assert len(data["tabs"]) == 1
    assert data["tabs"][0]["title"] == "Goggles"
    assert data["tabs"][0]["active"] is True
    assert data["capacity"] == 3


async def test_open_tabs_until_capacity(client):
    for _ in range(2):
        res = await client.post("/api/v1/tabs")
        assert res.status_code == 201
        assert res.json()["changed"] is True
    res = await client.post("/api/v1/tabs")
    assert res.json()["changed"] is False
    assert len(res.json()["tabs"]) == 3


async def test_close_only_tab_is_noop(client):
    tab_id = (await client.get("/api/v1/tabs")).json()["active_id"]
    res = await client.delete(f"/api/v1/tabs/{tab_id}")
    assert res.status_code == 200
    assert res.json()["changed"] is False


async def test_close_and_activate(client):
    first = (await client.get("/api/v1/tabs")).json()["active_id"]
    second = (await client.post("/api/v1/tabs")).json()["active_id"]
    res = await client.post(f"/api/v1/tabs/{first}/activate")
    assert res.json()["active_id"] == first
    res = await client.delete(f"/api/v1/tabs/{second}")
    assert [t["id"] for t in res.json()["tabs"]] == [first]


async def test_capacity_clamps_to_one(client):
    res = await client.put("/api/v1/tabs/capacity", json={"capacity": 0})
    assert res.json()["capacity"] == 1


async def test_unknown_tab_returns_404(client):
    res = await client.post("/api/v1/tabs/999/back")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "TAB_NOT_FOUND"


# --- Navigation ------------------------------------------------------------------

async def test_navigate_to_record(client):
    res = await client.post(
        "/api/v1/tabs/1/navigate", json={"address": "https://facelook.com/tanaka.taro"},
    )
    assert res.status_code == 200
    data = res.json()
    assert data["kind"] == "content"
    assert data["record_id"] == "fl-tanaka"
    assert data["renderable"]["component"] == "FacelookProfilePage"
    assert data["tab"]["title"] == "facelook.com"
    assert data["tab"]["can_go_back"] is True


async def test_invalid_address_is_error_view_not_http_error(client):
    res = await client.post("/api/v1/tabs/1/navigate", json={"address": "facelook"})
    assert res.status_code == 200
    data = res.json()
    assert data["kind"] == "error"
    assert data["error_code"] == "INVALID_ADDRESS"
    assert data["renderable"]["props"]["diagnostic"] == "ERR_NAME_NOT_RESOLVED"


async def test_search_with_suggestion_and_accept(client):
    res = await client.post("/api/v1/tabs/1/search", json={"query": "faceloko"})
    data = res.json()
    assert data["kind"] == "search_results"
    assert data["suggestion"] == {"original": "faceloko", "suggested": "facelook"}

    res = await client.post("/api/v1/tabs/1/suggestion", json={"query": "facelook"})
    data = res.json()
    assert data["suggestion"] is None
    assert data["total_results"] == 1
    assert data["tab"]["query"] == "facelook"


async def test_blank_query_is_validation_error(client):
    res = await client.post("/api/v1/tabs/1/search", json={"query": "   "})
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["details"][0]["field"] == "body.query"


async def test_history_routes(client):
    await client.post("/api/v1/tabs/1/navigate", json={"address": "a.example/x"})
    assert (await client.post("/api/v1/tabs/1/back")).json()["kind"] == "home"
    assert (await client.post("/api/v1/tabs/1/forward")).json()["kind"] == "placeholder"
    assert (await client.post("/api/v1/tabs/1/reload")).json()["kind"] == "placeholder"
    assert (await client.post("/api/v1/tabs/1/home")).json()["kind"] == "home"


async def test_page_route_clamps(client):
    await client.post("/api/v1/tabs/1/search", json={"query": "tanaka"})
    res = await client.put("/api/v1/tabs/1/page", json={"page": 7})
    assert res.json()["current_page"] == 1
    assert res.json()["total_pages"] == 1


async def test_view_route(client):
    res = await client.get("/api/v1/tabs/1/view")
    assert res.json()["kind"] == "home"
    assert res.json()["address"] == "https://www.goggles.com"


# --- Archive ---------------------------------------------------------------------

async def test_archive_search_and_home(client):
    res = await client.post(
        "/api/v1/tabs/1/archive/search",
        json={"address": "https://nitta-blog.example/2024/03/hike"},
    )
    data = res.json()
    assert data["kind"] == "archive_snapshot"
    assert data["banner_date"] == "2024-03-15"
    assert data["renderable"]["props"]["mode"] == "snapshot"

    res = await client.post("/api/v1/tabs/1/archive/home")
    assert res.json()["kind"] == "archive_home"


# --- Cache & health --------------------------------------------------------------

async def test_clear_cache_then_search_is_unavailable(client):
    res = await client.delete("/api/v1/cache")
    assert res.json() == {"hydrated": False, "record_count": 0, "fetched_at": None}
    res = await client.post("/api/v1/tabs/1/search", json={"query": "nitta"})
    assert res.json()["kind"] == "cache_unavailable"


async def test_reload_cache_from_seed_file(client, tmp_path):
    path = tmp_path / "seed.json"
    path.write_text(json.dumps(SEED_ITEMS[:2]), encoding="utf-8")
    app.dependency_overrides[get_settings] = lambda: Settings(seed_path=str(path))

    await client.delete("/api/v1/cache")
    res = await client.post("/api/v1/cache/reload")
    assert res.status_code == 200
    assert res.json()["record_count"] == 2


async def test_reload_with_missing_seed_file_is_400(client, tmp_path):
    app.dependency_overrides[get_settings] = lambda: Settings(
        seed_path=str(tmp_path / "absent.json"),
    )
    res = await client.post("/api/v1/cache/reload")
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "SEED_VALIDATION_ERROR"


async def test_health_and_readiness(client):
    assert (await client.get("/api/v1/health/")).status_code == 200
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 200
    assert res.json()["checks"] == {"database": "healthy", "cache": "hydrated"}


async def test_readiness_fails_with_empty_cache(client):
    await client.delete("/api/v1/cache")
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 503
    assert res.json()["checks"]["cache"] == "empty"
