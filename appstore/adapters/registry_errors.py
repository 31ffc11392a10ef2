"""Project-native typed exceptions for registry client failures."""

from __future__ import annotations

from typing import Sequence


class RegistryClientError(Exception):
    """Base exception for adapter-level registry failures.

    Attributes:
        status_code: Optional upstream HTTP status code.
        url: Optional upstream URL the failure relates to.
    """

    def __init__(self, message: str, status_code: int | None = None, url: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class RegistryConnectionError(RegistryClientError, ConnectionError):
    """Transport-level connectivity failure during registry communication."""


class RegistryTimeoutError(RegistryClientError, TimeoutError):
    """Transport timeout while waiting for a registry response."""


class RegistryHTTPStatusError(RegistryClientError):
    """Upstream answered with a status the calling operation does not handle."""


class RegistryPayloadError(RegistryClientError, ValueError):
    """Upstream body is not the JSON document the operation expects."""


class RegistryAuthenticationError(RegistryClientError):
    """Pull token could not be obtained from the token service."""


class RegistryTagNotFoundError(RegistryClientError, LookupError):
    """Manifest is missing for a tag that the tag listing reported.

    Attributes:
        repository: Repository name.
        tag: Requested tag.
        available_tags: Tags reported by the tag listing.
    """

    def __init__(self, repository: str, tag: str, available_tags: Sequence[str], url: str | None = None):
        super().__init__(
            f"Tag '{tag}' not found for repository {repository}. Available tags: {', '.join(available_tags)}",
            status_code=404,
            url=url,
        )
        self.repository = repository
        self.tag = tag
        self.available_tags = tuple(available_tags)
