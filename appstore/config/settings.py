"""Typed runtime settings with dotenv support and startup validation."""

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .logging_setup import SUPPORTED_LOG_LEVELS


class SettingsLoadError(RuntimeError):
    """Raised when runtime settings cannot be loaded or validated."""


class AppSettings(BaseSettings):
    """Application settings for API runtime and registry access configuration.

    Environment variable names map directly to field names in uppercase.
    Example: `docker_hub_namespace` reads from `DOCKER_HUB_NAMESPACE`.

    Attributes:
        environment_name: Runtime environment label.
        application_host: Host interface for web server binding.
        application_port: Web server port.
        log_level: Root log verbosity level name.
        docker_hub_namespace: Registry namespace whose repositories are listed as apps.
        docker_hub_api_base_url: Base URL of the catalog API (repositories and tags).
        registry_api_base_url: Base URL of the Registry protocol API (manifests and blobs).
        registry_auth_url: Token endpoint issuing anonymous pull tokens.
        registry_auth_service: Service name sent to the token endpoint.
        registry_page_size: Page size used for repository and tag listings.
        registry_request_timeout_seconds: Transport timeout applied to every upstream call.
        catalog_placeholder_description: Description used when no metadata provides one.
        catalog_placeholder_picture_url: Picture URL used when no label provides one.
        catalog_unavailable_description: Description of the minimal record built after a failure.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    environment_name: str = Field(default="development")
    application_host: str = Field(default="0.0.0.0")
    application_port: int = Field(default=3000, ge=1, le=65535)
    log_level: str = Field(default="INFO")
    docker_hub_namespace: str = Field(default="library", min_length=1)
    docker_hub_api_base_url: str = Field(default="https://hub.docker.com/v2")
    registry_api_base_url: str = Field(default="https://registry-1.docker.io/v2")
    registry_auth_url: str = Field(default="https://auth.docker.io/token")
    registry_auth_service: str = Field(default="registry.docker.io")
    registry_page_size: int = Field(default=100, ge=1, le=100)
    registry_request_timeout_seconds: float = Field(default=30.0, gt=0)
    catalog_placeholder_description: str = Field(default="No description provided.")
    catalog_placeholder_picture_url: str = Field(default="https://via.placeholder.com/150")
    catalog_unavailable_description: str = Field(default="Repository information unavailable.")

    @field_validator(
        "docker_hub_namespace",
        "docker_hub_api_base_url",
        "registry_api_base_url",
        "registry_auth_url",
        "registry_auth_service",
        "catalog_placeholder_description",
        "catalog_placeholder_picture_url",
        "catalog_unavailable_description",
    )
    @classmethod
    def _validate_non_empty_string(cls, value: str) -> str:
        stripped_value = value.strip()
        if not stripped_value:
            raise ValueError("value must not be blank")
        return stripped_value

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        normalized_level = value.strip().upper()
        if normalized_level not in SUPPORTED_LOG_LEVELS:
            raise ValueError(f"unsupported log level={value}")
        return normalized_level


def config_load_settings() -> AppSettings:
    """Load and validate runtime settings from environment and dotenv.

    Returns:
        AppSettings: Validated runtime settings object.

    Raises:
        SettingsLoadError: Raised when settings are invalid.
    """

    try:
        return AppSettings()
    except ValidationError as error:
        raise SettingsLoadError(
            f"Startup configuration validation failed. Update .env or environment variables. Details: {error}"
        ) from error
