"""Health Probes — liveness plus readiness of the storage and admission layers.

Invariants:
    - GET /health/ answers 200 whenever the process can serve a request
    - GET /health/ready answers 503 unless the database responds AND the
      rate-window reset loop is running (without it, budgets never refill)
    - Probes bypass rate admission and never report per-client state
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from notes_api.api.dependencies import get_rate_limiter
from notes_api.infrastructure import database
from notes_api.services.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def liveness():
    return {"status": "alive"}


@router.get("/ready")
async def readiness(limiter: RateLimiter = Depends(get_rate_limiter)):
    manager = database.db_manager
    db_ok = await manager.health_check() if manager else False
    checks = {
        "database": "ok" if db_ok else "unavailable",
        "rate_window_reset": "running" if limiter.reset_loop_running else "stopped",
    }
    body = {
        "status": "ready",
        "checks": checks,
        "rate_limit": {
            "limit": limiter.limit,
            "window_seconds": limiter.window_seconds,
        },
    }
    if not db_ok or not limiter.reset_loop_running:
        logger.warning("Readiness check failed", extra={"error_code": "NOT_READY"})
        body["status"] = "not_ready"
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=body,
        )
    return body
