"""Health endpoint router composition."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from appstore.config import AppSettings


def api_create_health_router(settings: AppSettings) -> APIRouter:
    """Create health-check router reporting application liveness.

    Args:
        settings: Runtime settings used for the environment label.

    Returns:
        APIRouter: Router exposing `/health` endpoint.

    Raises:
        ValueError: Raised when settings is invalid.
    """

    if settings is None:
        raise ValueError("settings must not be None")

    router = APIRouter(tags=["health"])

    @router.get("/health")
    def api_health_status() -> JSONResponse:
        payload = {
            "status": "ok",
            "app": "up",
            "environment": settings.environment_name,
        }
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    return router
