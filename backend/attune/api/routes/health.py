"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 if the SQL backend is configured but unreachable

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes from load balancer
    - Memory backend is always ready (no external dependency)
"""

import logging
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from attune import __version__
from attune.api.dependencies import get_container
from attune.infrastructure import database
from attune.services.container import ServiceContainer

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check(container: ServiceContainer = Depends(get_container)):
    """Basic liveness probe. Returns 200 if the process is up."""
    settings = container.settings
    return {
        "status": "healthy",
        "service": "attune-api",
        "version": __version__,
        "features": {
            "collapse_engine": True,
            "environmental_orchestrator": settings.enable_environmental_orchestrator,
            "anchor_sync": settings.enable_anchor_sync,
        },
    }


@router.get("/ready")
async def readiness_check(container: ServiceContainer = Depends(get_container)):
    """Readiness probe — includes database connectivity when SQL-backed."""
    if container.settings.store_backend != "sql":
        return {"status": "ready", "checks": {"store": "memory"}}
    manager = database.db_manager
    db_ok = await manager.health_check() if manager else False
    if not db_ok:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "database_unavailable",
            },
        )
    return {"status": "ready", "checks": {"database": "healthy"}}
