"""Typed domain models shared across runtime layers.

This module provides immutable data contracts for registry metadata and the
app records served by the catalog API.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


@dataclass(frozen=True)
class RepositoryName:
    """Value object identifying one `<namespace>/<repo>` repository.

    Attributes:
        value: Non-blank repository name.
    """

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValueError("repository name must not be blank")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class RepositoryInfo:
    """Summary metadata reported by the catalog API for one repository.

    Attributes:
        name: Display name reported upstream, possibly empty.
        description: Short description reported upstream, possibly empty.
        star_count: Upstream star counter.
        pull_count: Upstream pull counter.
        last_updated: Upstream last update timestamp text.
        is_private: Whether the repository is private.
        available_tags: Tag names in registry-reported order.
    """

    name: str | None = None
    description: str | None = None
    star_count: int | None = None
    pull_count: int | None = None
    last_updated: str | None = None
    is_private: bool | None = None
    available_tags: tuple[str, ...] = ()

    @property
    def has_tags(self) -> bool:
        """Return whether the repository reports at least one tag."""

        return len(self.available_tags) > 0


@dataclass(frozen=True)
class ImageManifest:
    """Registry manifest reduced to the fields the catalog reads.

    Attributes:
        tag: Tag the manifest was resolved for.
        media_type: Manifest media type when reported.
        config_digest: Content digest of the config blob, when referenced.
        document: Raw manifest document.
    """

    tag: str
    media_type: str | None = None
    config_digest: str | None = None
    document: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ImageConfig:
    """Image config blob reduced to its label set.

    Attributes:
        digest: Content digest the blob was fetched by.
        labels: Label key/value mapping, empty when the blob carries none.
    """

    digest: str
    labels: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class AppRecord:
    """App entry served by the catalog API.

    Attributes:
        name: Display name.
        location: Repository the app is pulled from.
        description: Human-readable description.
        picture_url: Picture URL for catalog rendering.
    """

    name: str
    location: RepositoryName
    description: str
    picture_url: str

    def to_payload(self) -> dict[str, str]:
        """Serialize record to the public JSON shape.

        Returns:
            dict[str, str]: Payload with `name`, `location`, `description` and `pictureUrl`.
        """

        return {
            "name": self.name,
            "location": self.location.value,
            "description": self.description,
            "pictureUrl": self.picture_url,
        }


@dataclass(frozen=True)
class RepositoryAccessReport:
    """Diagnostic result of probing one repository end to end.

    Attributes:
        repository: Probed repository name.
        exists: Whether the repository exists upstream.
        tags: Tags discovered for the repository.
        error: Failure description, None when the manifest was reachable.
    """

    repository: str
    exists: bool
    tags: tuple[str, ...] = ()
    error: str | None = None

    def to_payload(self) -> dict[str, object]:
        return {
            "repository": self.repository,
            "exists": self.exists,
            "tags": list(self.tags),
            "error": self.error,
        }

