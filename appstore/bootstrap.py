"""Application bootstrap wiring for startup validation and dependency assembly."""

from fastapi import FastAPI

from appstore.adapters import DockerRegistryClient
from appstore.api import create_api_application
from appstore.catalog import CatalogAggregatorConfig, RegistryCatalogAggregator
from appstore.config import AppSettings, config_configure_logging, config_load_settings


def bootstrap_create_registry_client(settings: AppSettings) -> DockerRegistryClient:
    """Build the registry client from validated settings.

    Args:
        settings: Validated runtime settings.

    Returns:
        DockerRegistryClient: Client bound to the configured upstream services.
    """

    return DockerRegistryClient(
        namespace=settings.docker_hub_namespace,
        hub_api_base_url=settings.docker_hub_api_base_url,
        registry_api_base_url=settings.registry_api_base_url,
        auth_url=settings.registry_auth_url,
        auth_service=settings.registry_auth_service,
        page_size=settings.registry_page_size,
        request_timeout_seconds=settings.registry_request_timeout_seconds,
    )


def bootstrap_create_catalog_aggregator(
    settings: AppSettings,
    registry_client: DockerRegistryClient | None = None,
) -> RegistryCatalogAggregator:
    """Build the catalog aggregator for HTTP and CLI surfaces.

    Args:
        settings: Validated runtime settings.
        registry_client: Optional prebuilt registry client to share.

    Returns:
        RegistryCatalogAggregator: Fully wired catalog aggregator instance.
    """

    return RegistryCatalogAggregator(
        registry_client=registry_client or bootstrap_create_registry_client(settings),
        config=CatalogAggregatorConfig(
            namespace=settings.docker_hub_namespace,
            placeholder_description=settings.catalog_placeholder_description,
            placeholder_picture_url=settings.catalog_placeholder_picture_url,
            unavailable_description=settings.catalog_unavailable_description,
        ),
    )


def bootstrap_create_application(settings: AppSettings | None = None) -> FastAPI:
    """Assemble the runtime application after validating startup configuration.

    Args:
        settings: Optional preloaded settings; loaded from environment when omitted.

    Returns:
        FastAPI: Fully initialized FastAPI application instance.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    resolved_settings = settings or config_load_settings()
    config_configure_logging(resolved_settings.log_level)
    registry_client = bootstrap_create_registry_client(resolved_settings)
    app_catalog = bootstrap_create_catalog_aggregator(resolved_settings, registry_client=registry_client)
    return create_api_application(
        settings=resolved_settings,
        app_catalog=app_catalog,
        registry_client=registry_client,
    )
