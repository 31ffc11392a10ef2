"""Shared fixtures simulating the registry upstream services over httpx."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx
import pytest

from appstore.adapters import DockerRegistryClient


@dataclass(frozen=True)
class _ScriptedReply:
    status_code: int
    payload: Any = None
    error: Exception | None = None


class FakeRegistryUpstream:
    """Scripted catalog, registry and token services keyed by `host + path`.

    Each key holds a queue of replies; the last reply repeats once the queue is
    down to one entry. Unknown keys answer 404.
    """

    HUB = "hub.docker.com/v2"
    REGISTRY = "registry-1.docker.io/v2"
    AUTH = "auth.docker.io/token"

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._routes: dict[str, list[_ScriptedReply]] = {}

    def reply(self, key: str, status_code: int, payload: Any = None) -> FakeRegistryUpstream:
        self._routes.setdefault(key, []).append(_ScriptedReply(status_code=status_code, payload=payload))
        return self

    def fail(self, key: str, error: Exception) -> FakeRegistryUpstream:
        self._routes.setdefault(key, []).append(_ScriptedReply(status_code=0, error=error))
        return self

    def requests_for(self, key: str) -> list[httpx.Request]:
        return [request for request in self.requests if f"{request.url.host}{request.url.path}" == key]

    def client(self, **overrides: Any) -> DockerRegistryClient:
        options: dict[str, Any] = {"namespace": "acme"}
        options.update(overrides)
        return DockerRegistryClient(transport=httpx.MockTransport(self), **options)

    def publish_listing(self, namespace: str, names: list[str]) -> None:
        self.reply(
            f"{self.HUB}/repositories/{namespace}/",
            200,
            {"count": len(names), "next": None, "results": [{"name": name} for name in names]},
        )

    def publish_tagged_image(
        self,
        repository: str,
        labels: dict[str, str] | None,
        tags: list[str] | None = None,
        info: dict[str, Any] | None = None,
    ) -> str:
        """Script every endpoint needed to resolve one repository.

        Args:
            repository: `<namespace>/<repo>` name.
            labels: Config labels, None to publish a config without labels.
            tags: Tag names, defaults to `["latest"]`.
            info: Repository info payload override.

        Returns:
            str: Manifest key of the selected tag.
        """

        resolved_tags = tags if tags is not None else ["latest"]
        digest = f"sha256:{repository.replace('/', '-')}"
        short_name = repository.split("/", 1)[1]
        self.reply(
            f"{self.HUB}/repositories/{repository}/",
            200,
            info or {"name": short_name, "description": f"{short_name} from hub"},
        )
        self.reply(
            f"{self.HUB}/repositories/{repository}/tags/",
            200,
            {"results": [{"name": tag} for tag in resolved_tags]},
        )
        selected_tag = "latest" if "latest" in resolved_tags else (resolved_tags or ["latest"])[0]
        manifest_key = f"{self.REGISTRY}/{repository}/manifests/{selected_tag}"
        if not resolved_tags:
            return manifest_key

        self.reply(manifest_key, 200, {"schemaVersion": 2, "config": {"digest": digest}})
        config_section: dict[str, Any] = {}
        if labels is not None:
            config_section["Labels"] = labels
        self.reply(f"{self.REGISTRY}/{repository}/blobs/{digest}", 200, {"config": config_section})
        return manifest_key

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = f"{request.url.host}{request.url.path}"
        queue = self._routes.get(key)
        if not queue:
            return httpx.Response(404, json={"message": "object not found"})

        scripted = queue.pop(0) if len(queue) > 1 else queue[0]
        if scripted.error is not None:
            raise scripted.error
        if isinstance(scripted.payload, bytes):
            return httpx.Response(scripted.status_code, content=scripted.payload)
        if scripted.payload is None:
            return httpx.Response(scripted.status_code)
        return httpx.Response(scripted.status_code, json=scripted.payload)


@pytest.fixture
def registry_upstream() -> FakeRegistryUpstream:
    """Return a fresh scripted registry upstream."""

    return FakeRegistryUpstream()


@pytest.fixture
def registry_upstream_factory() -> type[FakeRegistryUpstream]:
    """Return the upstream class for tests that need several independent upstreams."""

    return FakeRegistryUpstream
