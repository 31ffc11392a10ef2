"""Image label keys and tag selection rules shared by client and catalog."""

from __future__ import annotations

from typing import Final, Sequence

LABEL_TITLE: Final[str] = "org.opencontainers.image.title"
LABEL_DESCRIPTION: Final[str] = "org.opencontainers.image.description"
LABEL_PICTURE_URL: Final[str] = "com.app-store.picture-url"

DEFAULT_TAG: Final[str] = "latest"


def domain_select_default_tag(tags: Sequence[str]) -> str | None:
    """Pick the tag used when no explicit tag is requested.

    `latest` wins when listed; otherwise the first tag in registry order.

    Args:
        tags: Tag names in registry-reported order.

    Returns:
        str | None: Selected tag, or None when no tags exist.
    """

    if not tags:
        return None
    if DEFAULT_TAG in tags:
        return DEFAULT_TAG
    return tags[0]
