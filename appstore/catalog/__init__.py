"""Catalog layer package turning registry repositories into app records."""

from .interfaces import AppCatalogPort
from .service import CatalogAggregatorConfig, RegistryCatalogAggregator

__all__ = ["AppCatalogPort", "CatalogAggregatorConfig", "RegistryCatalogAggregator"]
