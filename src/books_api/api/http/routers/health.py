"""Health check endpoints router for monitoring service availability."""

from typing import Any

from fastapi import APIRouter, Depends
from starlette.responses import JSONResponse

from src.books_api.api.http.deps import get_database_service
from src.books_api.core.services import DbSessionService

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health() -> dict[str, str]:
    """Liveness probe.

    Returns 200 as long as the process is serving requests. It does not
    touch the database.
    """
    return {"status": "ok"}


@router.get("/ready", response_model=None)
def readiness(
    database_service: DbSessionService = Depends(get_database_service),
) -> dict[str, Any] | JSONResponse:
    """Readiness probe: 200 when the database answers, 503 otherwise."""
    db_healthy = database_service.health_check()
    response = {
        "status": "ready" if db_healthy else "not_ready",
        "checks": {"database": {"status": "healthy" if db_healthy else "unhealthy"}},
    }
    if not db_healthy:
        return JSONResponse(status_code=503, content=response)
    return response
