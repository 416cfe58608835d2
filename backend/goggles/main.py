"""Goggles Browser API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map BrowserError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Renderer table validated before anything is served
    - Database, result cache, and browser session initialized in the lifespan;
      cache hydration runs in the background and may race with navigation

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
"""

import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from goggles.api.error_handlers import register_error_handlers
from goggles.api.routes import cache, health, navigation, tabs
from goggles.config import get_settings
from goggles.core.renderer_registry import validate_renderer_table
from goggles.core.tab_registry import TabRegistry
from goggles.infrastructure.cache_store import SqlCacheSlotStore
from goggles.infrastructure.database import init_db
from goggles.infrastructure.observability import setup_logging
from goggles.services.browser_session import BrowserSession, init_browser
from goggles.services.cache_hydration import start_hydration
from goggles.services.result_cache import ResultCache

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    validate_renderer_table()

    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.database_url.startswith("sqlite"):
        await manager.create_tables()

    result_cache = ResultCache(SqlCacheSlotStore(manager), ttl_ms=settings.cache_ttl_ms)
    init_browser(BrowserSession(
        TabRegistry(settings.max_tabs, settings.hosts),
        result_cache,
        hosts=settings.hosts,
        page_size=settings.results_page_size,
        default_archive_date=settings.default_archive_date,
    ))
    hydration = start_hydration(result_cache, settings.seed_path, settings.seed_strict)
    logger.info("Goggles browser API started")
    yield
    logger.info("Goggles browser API shutting down")
    if not hydration.done():
        hydration.cancel()
        try:
            await hydration
        except asyncio.CancelledError:
            pass
    await manager.dispose()


app = FastAPI(
    title="Goggles Browser API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(tabs.router)
app.include_router(navigation.router)
app.include_router(cache.router)

register_error_handlers(app)
