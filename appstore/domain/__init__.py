"""Domain models used across application layer boundaries."""

from .models import (
    AppRecord,
    ImageConfig,
    ImageManifest,
    RepositoryAccessReport,
    RepositoryInfo,
    RepositoryName,
)
from .labels import (
    LABEL_DESCRIPTION,
    LABEL_PICTURE_URL,
    LABEL_TITLE,
    domain_select_default_tag,
)

__all__ = [
    "AppRecord",
    "ImageConfig",
    "ImageManifest",
    "LABEL_DESCRIPTION",
    "LABEL_PICTURE_URL",
    "LABEL_TITLE",
    "RepositoryAccessReport",
    "RepositoryInfo",
    "RepositoryName",
    "domain_select_default_tag",
]
