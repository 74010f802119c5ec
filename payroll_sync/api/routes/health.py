"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 if the database (and, on imisanzu, Redis) is unreachable

Design Decisions:
    - One router for both services: readiness checks whichever handles app.state holds
"""

import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check(request: Request):
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": request.app.title,
        "version": request.app.version,
    }


@router.get("/ready")
async def readiness_check(request: Request):
    """Readiness probe — database and, where configured, cache connectivity."""
    checks = {}
    db_manager = getattr(request.app.state, "db_manager", None)
    db_ok = await db_manager.health_check() if db_manager else False
    checks["database"] = "healthy" if db_ok else "unavailable"

    cache_store = getattr(request.app.state, "cache_store", None)
    if cache_store is not None:
        cache_ok = await cache_store.health_check()
        checks["cache"] = "healthy" if cache_ok else "unavailable"

    if any(v != "healthy" for v in checks.values()):
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "checks": checks},
        )
    return {"status": "ready", "checks": checks}
