"""Tests for domain value objects, record serialization and tag selection."""

import dataclasses

import pytest

from appstore.domain import AppRecord, RepositoryInfo, RepositoryName, domain_select_default_tag


def test_domain_repository_name_keeps_value() -> None:
    repository_name = RepositoryName("acme/web")

    assert repository_name.value == "acme/web"
    assert str(repository_name) == "acme/web"


@pytest.mark.parametrize("raw_value", ["", "   ", None])
def test_domain_repository_name_rejects_blank_values(raw_value: object) -> None:
    with pytest.raises(ValueError, match="must not be blank"):
        RepositoryName(raw_value)  # type: ignore[arg-type]


def test_domain_app_record_is_immutable_and_serializes_public_shape() -> None:
    """Serialize app records with camel-cased picture field and raw location.

    Returns:
        None: Assertions validate payload shape and immutability.

    Raises:
        AssertionError: Raised when serialization contract changes.
    """

    record = AppRecord(
        name="Web",
        location=RepositoryName("acme/web"),
        description="Customer portal",
        picture_url="https://cdn.example.com/web.png",
    )

    assert record.to_payload() == {
        "name": "Web",
        "location": "acme/web",
        "description": "Customer portal",
        "pictureUrl": "https://cdn.example.com/web.png",
    }
    with pytest.raises(dataclasses.FrozenInstanceError):
        record.name = "Other"  # type: ignore[misc]


def test_domain_repository_info_reports_tag_presence() -> None:
    assert RepositoryInfo(name="web").has_tags is False
    assert RepositoryInfo(name="web", available_tags=("v1",)).has_tags is True


@pytest.mark.parametrize(
    ("tags", "expected_tag"),
    [
        ([], None),
        (["v1", "latest", "v2"], "latest"),
        (["v2", "v10", "v1"], "v2"),
        (("stable",), "stable"),
    ],
)
def test_domain_select_default_tag(tags: list[str], expected_tag: str | None) -> None:
    assert domain_select_default_tag(tags) == expected_tag
