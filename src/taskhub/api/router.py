"""Top-level routing: health checks plus the versioned API."""

from typing import Literal

import structlog
from fastapi import APIRouter, Request, Response, status
from pydantic import BaseModel

from taskhub.core.auth.routes import router as auth_router
from taskhub.modules import discover_modules


logger = structlog.get_logger()


class HealthResponse(BaseModel):
    status: Literal["alive", "ready", "unavailable"]


health_router = APIRouter(prefix="/health", tags=["health"])


@health_router.get("/live", response_model=HealthResponse, summary="Liveness check")
async def liveness() -> HealthResponse:
    return HealthResponse(status="alive")


@health_router.get(
    "/ready",
    response_model=HealthResponse,
    summary="Readiness check",
    responses={503: {"model": HealthResponse}},
)
async def readiness(request: Request, response: Response) -> HealthResponse:
    """503 while the database cannot be reached."""
    try:
        await request.app.state.database.ping()
    except Exception as exc:  # noqa: BLE001
        logger.warning("readiness_failed", error_type=type(exc).__name__)
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return HealthResponse(status="unavailable")
    return HealthResponse(status="ready")


v1_router = APIRouter(prefix="/api/v1")
v1_router.include_router(auth_router)
for module_router in discover_modules():
    v1_router.include_router(module_router)

api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(v1_router)
