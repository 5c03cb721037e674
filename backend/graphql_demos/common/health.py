"""Health & Readiness Probes — liveness and readiness routers for the API services.

Invariants:
    - GET {prefix}/ always returns 200 if process is up (liveness)
    - GET {prefix}/ready returns 503 if database is unreachable (readiness)
    - The manager is looked up per request, so a manager swapped in after import is honoured
"""

import logging
from typing import Callable

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from graphql_demos.common.database import DatabaseSessionManager

logger = logging.getLogger(__name__)


def build_health_router(
    service: str,
    version: str,
    manager_getter: Callable[[], DatabaseSessionManager | None],
    prefix: str = "/api/health",
) -> APIRouter:
    """Build liveness/readiness routes bound to a service's session manager."""
    router = APIRouter(prefix=prefix, tags=["health"])

    @router.get("/", status_code=status.HTTP_200_OK)
    async def health_check():
        """Basic liveness probe. Returns 200 if the process is up."""
        return {"status": "healthy", "service": service, "version": version}

    @router.get("/ready")
    async def readiness_check():
        """Readiness probe — includes database connectivity."""
        manager = manager_getter()
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

    return router
