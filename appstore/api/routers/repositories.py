"""Repository diagnostics router for probing registry access."""

from __future__ import annotations

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from appstore.adapters import RegistryClientPort


def api_create_repositories_router(registry_client: RegistryClientPort) -> APIRouter:
    """Create router exposing per-repository access diagnostics.

    Args:
        registry_client: Adapter-layer registry client.

    Returns:
        APIRouter: Router exposing `/api/repositories/{namespace}/{repository}/access`.

    Raises:
        ValueError: Raised when registry_client is invalid.
    """

    if registry_client is None:
        raise ValueError("registry_client must not be None")

    router = APIRouter(prefix="/api/repositories", tags=["Repositories"])

    @router.get("/{namespace}/{repository}/access")
    async def api_repository_access(namespace: str, repository: str) -> JSONResponse:
        """Report existence, tags and manifest reachability of one repository.

        Args:
            namespace: Registry namespace.
            repository: Repository name within the namespace.

        Returns:
            JSONResponse: Access report payload.
        """

        report = await registry_client.registry_test_repository_access(f"{namespace}/{repository}")
        return JSONResponse(content=report.to_payload(), status_code=status.HTTP_200_OK)

    return router
