"""FastAPI application factory for the app catalog service.

This module defines API application composition used by the runtime.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from appstore.adapters import RegistryClientPort
from appstore.catalog import AppCatalogPort
from appstore.config import AppSettings

from .routers import api_create_apps_router, api_create_health_router, api_create_repositories_router

logger = logging.getLogger(__name__)


def create_api_application(
    settings: AppSettings,
    app_catalog: AppCatalogPort,
    registry_client: RegistryClientPort,
) -> FastAPI:
    """Create the FastAPI application instance for the service.

    Args:
        settings: Validated application settings used for runtime metadata.
        app_catalog: Catalog service backing the apps endpoint.
        registry_client: Registry client backing repository diagnostics.

    Returns:
        FastAPI: Framework application instance with all routers mounted.

    Raises:
        ValueError: Raised when a router dependency is invalid.
    """
    application = FastAPI(
        title="App Store Service API",
        version="1.0.0",
        description="API for fetching app info from a Docker Registry",
        docs_url="/api-docs",
        redoc_url=None,
    )

    @application.get("/", tags=["foundation"])
    def foundation_index() -> dict[str, str]:
        """Return a minimal service identification payload.

        Returns:
            dict[str, str]: Service name, status and environment label.
        """

        return {
            "service": "app-store-service",
            "status": "ready",
            "environment": settings.environment_name,
        }

    @application.exception_handler(StarletteHTTPException)
    async def api_http_exception_handler(request: Request, error: StarletteHTTPException) -> JSONResponse:
        """Render framework HTTP errors with the service error envelope.

        Args:
            request: Incoming request.
            error: Framework HTTP exception.

        Returns:
            JSONResponse: Error payload with the original status code.
        """

        if error.status_code == status.HTTP_404_NOT_FOUND:
            logger.warning("404 - Not Found - %s", request.url.path)
            payload = {
                "status": "error",
                "code": "NOT_FOUND",
                "message": f"no route for path={request.url.path}",
            }
        else:
            payload = {
                "status": "error",
                "code": "HTTP_ERROR",
                "message": str(error.detail),
            }
        return JSONResponse(content=payload, status_code=error.status_code, headers=error.headers)

    application.include_router(api_create_health_router(settings=settings))
    application.include_router(api_create_apps_router(app_catalog=app_catalog))
    application.include_router(api_create_repositories_router(registry_client=registry_client))

    return application
