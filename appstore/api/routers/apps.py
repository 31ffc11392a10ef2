"""Apps API router composition for the catalog listing."""

from __future__ import annotations

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from appstore.catalog import AppCatalogPort


class AppPayload(BaseModel):
    """Response schema of one catalog entry."""

    name: str = Field(examples=["My Awesome App"])
    location: str = Field(examples=["my-namespace/my-awesome-app"])
    description: str = Field(examples=["This is a fantastic application."])
    pictureUrl: str = Field(examples=["https://example.com/app.png"])


def api_create_apps_router(app_catalog: AppCatalogPort) -> APIRouter:
    """Create apps router exposing the catalog listing.

    Args:
        app_catalog: Catalog-layer service.

    Returns:
        APIRouter: Router exposing `/api/apps`.

    Raises:
        ValueError: Raised when app_catalog is invalid.
    """

    if app_catalog is None:
        raise ValueError("app_catalog must not be None")

    router = APIRouter(prefix="/api", tags=["Apps"])

    @router.get(
        "/apps",
        response_model=list[AppPayload],
        summary="Retrieve a list of all applications",
        description="Fetches all apps from the configured Docker registry.",
    )
    async def api_apps_list() -> JSONResponse:
        """List every app of the configured namespace.

        Upstream registry failures never surface here; they shrink or empty
        the list instead.

        Returns:
            JSONResponse: JSON array of app payloads.
        """

        records = await app_catalog.catalog_fetch_all()
        payload = [record.to_payload() for record in records]
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    return router
