"""Adapter layer package for container registry integration boundaries."""

from .docker_registry import DockerRegistryClient
from .interfaces import RegistryClientPort
from .registry_errors import (
	RegistryAuthenticationError,
	RegistryClientError,
	RegistryConnectionError,
	RegistryHTTPStatusError,
	RegistryPayloadError,
	RegistryTagNotFoundError,
	RegistryTimeoutError,
)

__all__ = [
	"DockerRegistryClient",
	"RegistryAuthenticationError",
	"RegistryClientError",
	"RegistryClientPort",
	"RegistryConnectionError",
	"RegistryHTTPStatusError",
	"RegistryPayloadError",
	"RegistryTagNotFoundError",
	"RegistryTimeoutError",
]
