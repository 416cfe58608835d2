"""Health & Readiness Probes — liveness and readiness endpoints.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 if the database is unreachable or the result
      cache has not been hydrated yet (readiness)
"""

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

import goggles.infrastructure.database as db_module
import goggles.services.browser_session as browser_module

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "goggles-browser-api",
        "version": "1.0.0",
    }


@router.get("/ready")
async def readiness_check():
    """Readiness probe: database connectivity and cache hydration."""
    manager = db_module.db_manager
    db_ok = await manager.health_check() if manager else False
    browser = browser_module.browser
    cache_ok = bool(browser and (await browser.cache.get()))
    checks = {
        "database": "healthy" if db_ok else "unavailable",
        "cache": "hydrated" if cache_ok else "empty",
    }
    if not (db_ok and cache_ok):
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "checks": checks},
        )
    return {"status": "ready", "checks": checks}
