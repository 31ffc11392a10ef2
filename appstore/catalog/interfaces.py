"""Typed interfaces for catalog-layer responsibilities."""

from __future__ import annotations

from typing import Protocol

from appstore.domain import AppRecord


class AppCatalogPort(Protocol):
    """Port definition for building the app catalog."""

    async def catalog_fetch_all(self) -> list[AppRecord]:
        """Build app records for every repository of the configured namespace.

        Returns:
            list[AppRecord]: Records in repository listing order, empty when listing fails.
        """

    async def catalog_resolve_one(self, repository: str) -> AppRecord | None:
        """Build the app record for one repository.

        Args:
            repository: Repository name.

        Returns:
            AppRecord | None: Record, or None when the repository is omitted.
        """
