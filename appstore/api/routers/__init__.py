"""API router package for endpoint composition."""

from .apps import api_create_apps_router
from .health import api_create_health_router
from .repositories import api_create_repositories_router

__all__ = ["api_create_apps_router", "api_create_health_router", "api_create_repositories_router"]
