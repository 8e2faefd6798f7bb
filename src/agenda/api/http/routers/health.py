"""Health check endpoints router for monitoring service availability."""

from typing import Any

from fastapi import APIRouter, Request
from starlette.responses import JSONResponse

from src.agenda.api.http.app_data import ApplicationDependencies
from src.agenda.core.storage.session_storage import get_session_storage
from src.agenda.runtime.context import get_config

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health() -> dict[str, str]:
    """Liveness probe; does not check dependencies."""
    return {"status": "healthy", "service": "agenda"}


@router.get("/ready", response_model=None)
async def readiness(request: Request) -> dict[str, Any] | JSONResponse:
    """Readiness check: 200 when the database answers, 503 otherwise.

    Session storage is reported but never fails the check, since it falls
    back to memory outside production.
    """
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    config = get_config()

    checks: dict[str, Any] = {}
    db_healthy = app_deps.database_service.health_check()
    checks["database"] = {
        "status": "healthy" if db_healthy else "unhealthy",
        "type": "sqlite" if config.database.url.startswith("sqlite") else "postgresql",
    }

    storage = await get_session_storage()
    checks["session_storage"] = {
        "status": "healthy" if storage.is_available() else "degraded",
        "type": "redis" if config.redis.enabled else "in-memory",
    }

    response = {
        "status": "ready" if db_healthy else "not_ready",
        "environment": config.app.environment,
        "checks": checks,
    }
    if not db_healthy:
        return JSONResponse(status_code=503, content=response)
    return response
