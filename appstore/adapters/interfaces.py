"""Typed interfaces for adapter-layer responsibilities."""

from __future__ import annotations

from typing import Protocol

from appstore.domain import ImageConfig, ImageManifest, RepositoryAccessReport, RepositoryInfo


class RegistryClientPort(Protocol):
    """Port definition for reading repository metadata from a container registry."""

    async def registry_list_repositories(self, namespace: str | None = None) -> list[str]:
        """List every repository of a namespace as `<namespace>/<repo>` names.

        Args:
            namespace: Namespace to list, defaults to the configured namespace.

        Returns:
            list[str]: All repository names, or an empty list when any page fails.
        """

    async def registry_get_repository_info(self, repository: str) -> RepositoryInfo | None:
        """Fetch summary metadata and tag names for one repository.

        Args:
            repository: Repository name.

        Returns:
            RepositoryInfo | None: Summary metadata, None when missing or unreadable.
        """

    async def registry_get_tags(self, repository: str) -> list[str]:
        """Fetch tag names in registry order.

        Args:
            repository: Repository name.

        Returns:
            list[str]: Tag names, empty when none exist or the fetch failed.
        """

    async def registry_get_manifest(self, repository: str, tag: str | None = None) -> ImageManifest | None:
        """Fetch the manifest for a tag, resolving the default tag when omitted.

        Args:
            repository: Repository name.
            tag: Optional explicit tag.

        Returns:
            ImageManifest | None: Manifest, None when the repository has no tags.

        Raises:
            RegistryTagNotFoundError: Raised when the resolved tag has no manifest.
            RegistryClientError: Raised for other transport or upstream failures.
        """

    async def registry_get_config(self, repository: str, digest: str) -> ImageConfig | None:
        """Fetch the config blob referenced by a manifest digest.

        Args:
            repository: Repository name.
            digest: Config blob content digest.

        Returns:
            ImageConfig | None: Config labels, None when the blob is not a JSON object.

        Raises:
            RegistryClientError: Raised for transport or upstream failures.
        """

    async def registry_get_auth_token(self, repository: str) -> str:
        """Obtain a short-lived pull token scoped to one repository.

        Args:
            repository: Repository name.

        Returns:
            str: Bearer token.

        Raises:
            RegistryAuthenticationError: Raised when no token is issued.
        """

    async def registry_check_repository_exists(self, repository: str) -> bool:
        """Return whether the catalog API knows the repository."""

    async def registry_get_manifest_with_any_tag(self, repository: str) -> tuple[ImageManifest, str] | None:
        """Fetch the manifest of the default tag together with the tag used."""

    async def registry_test_repository_access(self, repository: str) -> RepositoryAccessReport:
        """Probe existence, tags and manifest access without raising."""
