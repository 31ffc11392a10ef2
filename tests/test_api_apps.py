"""End-to-end API tests for the apps catalog over a scripted registry upstream.

These tests wire the real registry client and catalog aggregator behind the
FastAPI application and only replace the network with an httpx mock transport.
"""

from __future__ import annotations

import httpx
from fastapi.testclient import TestClient

from appstore.api.application import create_api_application
from appstore.bootstrap import bootstrap_create_application, bootstrap_create_catalog_aggregator
from appstore.config import AppSettings

HUB = "hub.docker.com/v2"
AUTH = "auth.docker.io/token"


def _build_test_client(registry_upstream) -> TestClient:
    """Build API test client backed by the scripted upstream.

    Args:
        registry_upstream: Scripted upstream fixture.

    Returns:
        TestClient: Client for the fully wired application.

    Raises:
        RuntimeError: Raised if application creation fails.
    """

    settings = AppSettings(_env_file=None, docker_hub_namespace="acme", environment_name="test")
    registry_client = registry_upstream.client()
    app_catalog = bootstrap_create_catalog_aggregator(settings, registry_client=registry_client)
    application = create_api_application(
        settings=settings,
        app_catalog=app_catalog,
        registry_client=registry_client,
    )
    return TestClient(application)


def test_api_apps_returns_label_named_records(registry_upstream) -> None:
    """Return one record per tagged repository named from its title label.

    Args:
        registry_upstream: Scripted upstream fixture.

    Returns:
        None: Assertions validate status code and payload.

    Raises:
        AssertionError: Raised when label mapping is incorrect.
    """

    registry_upstream.publish_listing("acme", ["web", "worker"])
    registry_upstream.publish_tagged_image(
        "acme/web",
        labels={
            "org.opencontainers.image.title": "Web Portal",
            "org.opencontainers.image.description": "Customer-facing portal",
            "com.app-store.picture-url": "https://cdn.example.com/web.png",
        },
    )
    registry_upstream.publish_tagged_image(
        "acme/worker",
        labels={"org.opencontainers.image.title": "Background Worker"},
        tags=["1.2.0", "1.1.0"],
    )

    response = _build_test_client(registry_upstream).get("/api/apps")

    assert response.status_code == 200
    assert response.json() == [
        {
            "name": "Web Portal",
            "location": "acme/web",
            "description": "Customer-facing portal",
            "pictureUrl": "https://cdn.example.com/web.png",
        },
        {
            "name": "Background Worker",
            "location": "acme/worker",
            "description": "worker from hub",
            "pictureUrl": "https://via.placeholder.com/150",
        },
    ]


def test_api_apps_untagged_repository_uses_placeholders(registry_upstream) -> None:
    registry_upstream.publish_listing("acme", ["draft"])
    registry_upstream.publish_tagged_image("acme/draft", labels=None, tags=[], info={"name": "draft"})

    response = _build_test_client(registry_upstream).get("/api/apps")

    assert response.status_code == 200
    assert response.json() == [
        {
            "name": "draft",
            "location": "acme/draft",
            "description": "No description provided.",
            "pictureUrl": "https://via.placeholder.com/150",
        }
    ]
    assert all(request.url.host != "registry-1.docker.io" for request in registry_upstream.requests)


def test_api_apps_listing_transport_error_returns_empty_array(registry_upstream) -> None:
    registry_upstream.fail(f"{HUB}/repositories/acme/", httpx.ConnectError("connection refused"))

    response = _build_test_client(registry_upstream).get("/api/apps")

    assert response.status_code == 200
    assert response.json() == []


def test_api_apps_token_retry_matches_anonymous_fetch(registry_upstream, registry_upstream_factory) -> None:
    """Produce identical records whether the manifest needed a pull token or not.

    Args:
        registry_upstream: Scripted upstream fixture for the anonymous run.
        registry_upstream_factory: Factory building a second, independent upstream.

    Returns:
        None: Assertions validate identical payloads and one token request.

    Raises:
        AssertionError: Raised when token retry changes the outcome.
    """

    labels = {"org.opencontainers.image.title": "Web Portal"}

    registry_upstream.publish_listing("acme", ["web"])
    manifest_key = registry_upstream.publish_tagged_image("acme/web", labels=labels)
    anonymous_payload = _build_test_client(registry_upstream).get("/api/apps").json()

    protected_upstream = registry_upstream_factory()
    protected_upstream.publish_listing("acme", ["web"])
    protected_upstream.reply(manifest_key, 401, {"errors": [{"code": "UNAUTHORIZED"}]})
    protected_upstream.publish_tagged_image("acme/web", labels=labels)
    protected_upstream.reply(AUTH, 200, {"token": "pull-token"})
    protected_response = _build_test_client(protected_upstream).get("/api/apps")

    assert protected_response.status_code == 200
    assert protected_response.json() == anonymous_payload
    assert len(protected_upstream.requests_for(AUTH)) == 1
    assert protected_upstream.requests_for(manifest_key)[-1].headers["Authorization"] == "Bearer pull-token"


def test_api_apps_missing_repository_is_omitted(registry_upstream) -> None:
    registry_upstream.publish_listing("acme", ["ghost", "web"])
    registry_upstream.publish_tagged_image("acme/web", labels={"org.opencontainers.image.title": "Web"})

    response = _build_test_client(registry_upstream).get("/api/apps")

    assert [entry["location"] for entry in response.json()] == ["acme/web"]


def test_api_repository_access_report(registry_upstream) -> None:
    registry_upstream.publish_tagged_image("acme/web", labels={}, tags=["v1"])

    response = _build_test_client(registry_upstream).get("/api/repositories/acme/web/access")

    assert response.status_code == 200
    assert response.json() == {"repository": "acme/web", "exists": True, "tags": ["v1"], "error": None}


def test_api_unknown_route_returns_not_found_envelope(registry_upstream) -> None:
    response = _build_test_client(registry_upstream).get("/api/unknown")

    assert response.status_code == 404
    assert response.json()["code"] == "NOT_FOUND"


def test_api_health_and_docs_are_served(registry_upstream) -> None:
    test_client = _build_test_client(registry_upstream)

    health_response = test_client.get("/health")
    docs_response = test_client.get("/api-docs")
    schema_response = test_client.get("/openapi.json")

    assert health_response.json() == {"status": "ok", "app": "up", "environment": "test"}
    assert docs_response.status_code == 200
    assert "/api/apps" in schema_response.json()["paths"]


def test_api_bootstrap_application_mounts_catalog_routes() -> None:
    settings = AppSettings(_env_file=None, docker_hub_namespace="acme", log_level="warning")

    application = bootstrap_create_application(settings)

    served_paths = set(TestClient(application).get("/openapi.json").json()["paths"])
    assert {"/api/apps", "/api/repositories/{namespace}/{repository}/access", "/health"} <= served_paths
