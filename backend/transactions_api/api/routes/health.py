"""Health & Readiness Probes - liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /api/health always returns 200 if the process is up (liveness)
    - GET /api/health/ready returns 503 if the database is unreachable (readiness)
"""

import logging

from fastapi import APIRouter, Request, status

from transactions_api.api.responses import error_response, success_response
from transactions_api.config import get_settings

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("")
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    settings = get_settings()
    return success_response({
        "service": "transactions-api",
        "version": settings.api_version,
    })


@router.get("/ready")
async def readiness_check(request: Request):
    """Readiness probe - includes database connectivity."""
    manager = getattr(request.app.state, "db_manager", None)
    db_ok = await manager.health_check() if manager else False
    if not db_ok:
        return error_response(
            "Database unavailable", status.HTTP_503_SERVICE_UNAVAILABLE,
        )
    return success_response({"checks": {"database": "healthy"}})
