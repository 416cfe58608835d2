"""Service test fixtures — in-memory slot store, async SQLite DB, browser session, API client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - The browser singleton and db_manager are patched for route tests and restored after
    - Clock is injectable so cache expiry is tested without sleeping

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for the slot table
    - db_manager patched with a manager bound to the test engine: the slot store
      and readiness probe use db_manager directly
    - httpx ASGITransport does not run the lifespan, so fixtures build the browser
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

import goggles.infrastructure.database as db_module
import goggles.services.browser_session as browser_module
from goggles.core.content_record import ContentRecord
from goggles.core.errors import DatabaseError
from goggles.core.tab_registry import TabRegistry
from goggles.db.base import Base
from goggles.infrastructure.cache_store import SqlCacheSlotStore
from goggles.infrastructure.database import DatabaseSessionManager
from goggles.main import app
from goggles.services.browser_session import BrowserSession
from goggles.services.result_cache import ResultCache
import goggles.models  # noqa: F401
from tests.services.seed_data import SEED_ITEMS


class FakeClock:
    def __init__(self, now: int = 1_700_000_000_000):
        self.now = now

    def __call__(self) -> int:
        return self.now


class MemorySlotStore:
    """CacheSlotStore over a dict; can be told to fail writes."""

    def __init__(self):
        self.values: dict[str, str] = {}
        self.fail_writes = False
        self.writes = 0

    async def read(self, key: str) -> str | None:
        return self.values.get(key)

    async def write(self, values: dict[str, str]) -> None:
        if self.fail_writes:
            raise DatabaseError("disk full", "commit")
        self.writes += 1
        self.values.update(values)

    async def delete(self, keys: list[str]) -> None:
        for key in keys:
            self.values.pop(key, None)


@pytest.fixture
def seed_records() -> list[ContentRecord]:
    return [ContentRecord.from_dict(item) for item in SEED_ITEMS]


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def memory_store():
    return MemorySlotStore()


@pytest.fixture
def result_cache(memory_store, clock):
    return ResultCache(memory_store, clock=clock)


@pytest.fixture
async def seeded_cache(result_cache, seed_records):
    await result_cache.put(seed_records)
    return result_cache


@pytest.fixture
def browser(seeded_cache):
    return BrowserSession(TabRegistry(capacity=3), seeded_cache)


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
def test_manager(test_engine, test_session_factory):
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = test_session_factory
    return manager


@pytest.fixture
def sql_store(test_manager):
    return SqlCacheSlotStore(test_manager)


@pytest.fixture
async def api_browser(sql_store, seed_records):
    cache = ResultCache(sql_store)
    await cache.put(seed_records)
    return BrowserSession(TabRegistry(capacity=3), cache)


@pytest.fixture
async def client(test_manager, api_browser):
    """FastAPI test client with the database manager and browser singleton patched."""
    original_manager = db_module.db_manager
    original_browser = browser_module.browser
    db_module.db_manager = test_manager
    browser_module.browser = api_browser

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
    browser_module.browser = original_browser
