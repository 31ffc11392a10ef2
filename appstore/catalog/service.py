"""Catalog aggregator resolving each repository into an app record.

Every repository is resolved concurrently through the same short-circuiting
chain: repository info, default tag manifest, config blob, labels. Each stage
that comes back empty ends the chain with the richest record the earlier
stages allow, and failures stay inside the repository that raised them.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Mapping

from appstore.adapters import RegistryClientError, RegistryClientPort
from appstore.domain import (
    LABEL_DESCRIPTION,
    LABEL_PICTURE_URL,
    LABEL_TITLE,
    AppRecord,
    ImageConfig,
    RepositoryInfo,
    RepositoryName,
)

from .interfaces import AppCatalogPort

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CatalogAggregatorConfig:
    """Configuration values for catalog aggregation.

    Attributes:
        namespace: Registry namespace whose repositories become apps.
        placeholder_description: Description used when no metadata provides one.
        placeholder_picture_url: Picture URL used when no label provides one.
        unavailable_description: Description of the minimal record built after a failure.
    """

    namespace: str
    placeholder_description: str = "No description provided."
    placeholder_picture_url: str = "https://via.placeholder.com/150"
    unavailable_description: str = "Repository information unavailable."


class RegistryCatalogAggregator(AppCatalogPort):
    """Concrete catalog built from registry repository metadata."""

    def __init__(self, registry_client: RegistryClientPort, config: CatalogAggregatorConfig):
        """Initialize catalog aggregator dependencies.

        Args:
            registry_client: Adapter for upstream registry reads.
            config: Aggregation configuration.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when dependencies or config values are invalid.
        """

        if registry_client is None:
            raise ValueError("registry_client must not be None")
        if not config.namespace.strip():
            raise ValueError("config.namespace must not be blank")
        if not config.placeholder_description.strip():
            raise ValueError("config.placeholder_description must not be blank")
        if not config.placeholder_picture_url.strip():
            raise ValueError("config.placeholder_picture_url must not be blank")
        if not config.unavailable_description.strip():
            raise ValueError("config.unavailable_description must not be blank")

        self._registry_client = registry_client
        self._config = config

    async def catalog_fetch_all(self) -> list[AppRecord]:
        """Resolve every listed repository concurrently and keep listing order.

        Returns:
            list[AppRecord]: Records for repositories that were not omitted.

        Raises:
            RuntimeError: This implementation does not raise on upstream failures.
        """

        try:
            listed_repositories = await self._registry_client.registry_list_repositories(self._config.namespace)
        except Exception as error:  # pylint: disable=broad-exception-caught
            logger.error("Failed to fetch the app catalog namespace=%s: %s", self._config.namespace, error)
            return []

        repositories = list(dict.fromkeys(listed_repositories))
        if not repositories:
            logger.info("No repositories listed namespace=%s", self._config.namespace)
            return []

        resolved_records = await asyncio.gather(
            *(self.catalog_resolve_one(repository) for repository in repositories)
        )
        records = [record for record in resolved_records if record is not None]
        logger.info(
            "Built app catalog namespace=%s listed=%d returned=%d",
            self._config.namespace,
            len(repositories),
            len(records),
        )
        return records

    async def catalog_resolve_one(self, repository: str) -> AppRecord | None:
        """Resolve one repository, isolating any failure to this repository.

        Args:
            repository: Repository name.

        Returns:
            AppRecord | None: Full, fallback or minimal record; None when omitted.

        Raises:
            RuntimeError: This implementation does not raise on resolution failures.
        """

        try:
            return await self._catalog_resolve_chain(repository)
        except Exception as error:  # pylint: disable=broad-exception-caught
            logger.error("Failed to process repository=%s: %s", repository, error)

        try:
            return self._catalog_build_minimal_record(repository)
        except ValueError as error:
            logger.error("Failed to create minimal app record repository=%r: %s", repository, error)
            return None

    async def _catalog_resolve_chain(self, repository: str) -> AppRecord | None:
        repository_info = await self._registry_client.registry_get_repository_info(repository)
        if repository_info is None:
            logger.warning("Repository not found, skipping repository=%s", repository)
            return None

        if not repository_info.has_tags:
            logger.info("Repository has no tags, using repository info repository=%s", repository)
            return self._catalog_build_info_record(repository, repository_info)

        labels = await self._catalog_fetch_labels(repository)
        if labels is None:
            return self._catalog_build_info_record(repository, repository_info)

        return self._catalog_build_labeled_record(repository, repository_info, labels)

    async def _catalog_fetch_labels(self, repository: str) -> Mapping[str, str] | None:
        """Fetch labels of the default tag's image.

        Args:
            repository: Repository name.

        Returns:
            Mapping[str, str] | None: Labels, None when manifest, digest or config is missing.

        Raises:
            RegistryClientError: Raised when the manifest fetch fails.
        """

        manifest = await self._registry_client.registry_get_manifest(repository)
        if manifest is None:
            logger.warning("Could not get manifest, using repository info repository=%s", repository)
            return None
        if not manifest.config_digest:
            logger.warning(
                "Manifest has no config digest, using repository info repository=%s tag=%s",
                repository,
                manifest.tag,
            )
            return None

        image_config = await self._catalog_fetch_config(repository, manifest.config_digest)
        if image_config is None:
            logger.warning("Could not get config, using repository info repository=%s", repository)
            return None
        return image_config.labels or {}

    async def _catalog_fetch_config(self, repository: str, digest: str) -> ImageConfig | None:
        try:
            return await self._registry_client.registry_get_config(repository, digest)
        except RegistryClientError as error:
            logger.warning("Config blob unavailable repository=%s digest=%s: %s", repository, digest, error)
            return None

    def _catalog_build_info_record(self, repository: str, repository_info: RepositoryInfo) -> AppRecord:
        return AppRecord(
            name=repository_info.name or repository,
            location=RepositoryName(repository),
            description=repository_info.description or self._config.placeholder_description,
            picture_url=self._config.placeholder_picture_url,
        )

    def _catalog_build_labeled_record(
        self,
        repository: str,
        repository_info: RepositoryInfo,
        labels: Mapping[str, str],
    ) -> AppRecord:
        """Build a record preferring image labels over repository info.

        Args:
            repository: Repository name, always used as location.
            repository_info: Catalog API summary metadata.
            labels: Image labels from the config blob.

        Returns:
            AppRecord: Record with label-derived fields where present.

        Raises:
            ValueError: Raised when the repository name is blank.
        """

        return AppRecord(
            name=labels.get(LABEL_TITLE) or repository_info.name or repository,
            location=RepositoryName(repository),
            description=(
                labels.get(LABEL_DESCRIPTION)
                or repository_info.description
                or self._config.placeholder_description
            ),
            picture_url=labels.get(LABEL_PICTURE_URL) or self._config.placeholder_picture_url,
        )

    def _catalog_build_minimal_record(self, repository: str) -> AppRecord:
        return AppRecord(
            name=repository,
            location=RepositoryName(repository),
            description=self._config.unavailable_description,
            picture_url=self._config.placeholder_picture_url,
        )
