"""Health check endpoints router for monitoring service availability."""

from typing import Any

from fastapi import APIRouter, Depends
from starlette.responses import JSONResponse

from src.catalog.api.http.deps import get_database_service
from src.catalog.core.services import DbSessionService

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
def health() -> dict[str, str]:
    """Liveness check: 200 as long as the process is up, no dependency checks."""
    return {"status": "healthy", "service": "catalog"}


@router.get("/database", response_model=None)
def database_health(
    database_service: DbSessionService = Depends(get_database_service),
) -> dict[str, Any] | JSONResponse:
    """Database connectivity check; 503 when the store cannot be reached."""
    healthy = database_service.health_check()
    body: dict[str, Any] = {
        "status": "healthy" if healthy else "unhealthy",
        "dialect": database_service.engine.dialect.name,
    }
    if healthy:
        body["pool"] = database_service.get_pool_status()
        return body
    return JSONResponse(status_code=503, content=body)
