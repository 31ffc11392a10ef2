"""Docker Hub and Registry protocol client for repository metadata retrieval."""

from __future__ import annotations

import logging
from typing import Any, Final
from urllib.parse import urlencode

import httpx

from appstore.domain import (
    ImageConfig,
    ImageManifest,
    RepositoryAccessReport,
    RepositoryInfo,
    domain_select_default_tag,
)

from .interfaces import RegistryClientPort
from .registry_errors import (
    RegistryAuthenticationError,
    RegistryClientError,
    RegistryConnectionError,
    RegistryHTTPStatusError,
    RegistryPayloadError,
    RegistryTagNotFoundError,
    RegistryTimeoutError,
)

logger = logging.getLogger(__name__)


class DockerRegistryClient(RegistryClientPort):
    """Client for the Docker Hub catalog API and the Registry protocol API.

    The catalog API lists repositories and tags. The Registry protocol API serves
    manifests and config blobs, trying anonymous access first and retrying once
    with a repository-scoped pull token after a 401. Tokens are never cached.
    """

    _USER_AGENT: Final[str] = "app-store-service/1.0 (Python/httpx)"
    _MANIFEST_ACCEPT: Final[str] = ", ".join(
        (
            "application/vnd.docker.distribution.manifest.v2+json",
            "application/vnd.docker.distribution.manifest.list.v2+json",
            "application/vnd.oci.image.manifest.v1+json",
        )
    )
    _CONFIG_ACCEPT: Final[str] = ", ".join(
        (
            "application/vnd.docker.container.image.v1+json",
            "application/vnd.oci.image.config.v1+json",
        )
    )

    def __init__(
        self,
        namespace: str,
        hub_api_base_url: str = "https://hub.docker.com/v2",
        registry_api_base_url: str = "https://registry-1.docker.io/v2",
        auth_url: str = "https://auth.docker.io/token",
        auth_service: str = "registry.docker.io",
        page_size: int = 100,
        request_timeout_seconds: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize registry client.

        Args:
            namespace: Default namespace for repository listing.
            hub_api_base_url: Catalog API base URL.
            registry_api_base_url: Registry protocol API base URL.
            auth_url: Token endpoint URL.
            auth_service: Service name requested from the token endpoint.
            page_size: Page size for repository and tag listings.
            request_timeout_seconds: HTTP request timeout in seconds.
            transport: Optional httpx transport, used to route requests in tests.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when required config values are invalid.
        """

        normalized_namespace = namespace.strip()
        normalized_hub_api_base_url = hub_api_base_url.strip()
        normalized_registry_api_base_url = registry_api_base_url.strip()
        normalized_auth_url = auth_url.strip()
        normalized_auth_service = auth_service.strip()

        if not normalized_namespace:
            raise ValueError("namespace must not be blank")
        if not normalized_hub_api_base_url:
            raise ValueError("hub_api_base_url must not be blank")
        if not normalized_registry_api_base_url:
            raise ValueError("registry_api_base_url must not be blank")
        if not normalized_auth_url:
            raise ValueError("auth_url must not be blank")
        if not normalized_auth_service:
            raise ValueError("auth_service must not be blank")
        if page_size < 1:
            raise ValueError("page_size must be >= 1")
        if request_timeout_seconds <= 0:
            raise ValueError("request_timeout_seconds must be > 0")

        self._namespace = normalized_namespace
        self._hub_api_base_url = normalized_hub_api_base_url.rstrip("/")
        self._registry_api_base_url = normalized_registry_api_base_url.rstrip("/")
        self._auth_url = normalized_auth_url
        self._auth_service = normalized_auth_service
        self._page_size = page_size
        self._request_timeout_seconds = request_timeout_seconds
        self._transport = transport

    async def registry_list_repositories(self, namespace: str | None = None) -> list[str]:
        """Page through the namespace listing following each page's `next` link.

        Args:
            namespace: Namespace to list, defaults to the configured namespace.

        Returns:
            list[str]: `<namespace>/<repo>` names from every page, or an empty
            list when any page fails.

        Raises:
            RuntimeError: This implementation does not raise on upstream failures.
        """

        resolved_namespace = (namespace or self._namespace).strip()
        logger.info("Fetching repositories for namespace=%s", resolved_namespace)

        query = urlencode({"page_size": self._page_size})
        next_url: str | None = f"{self._hub_api_base_url}/repositories/{resolved_namespace}/?{query}"
        repositories: list[str] = []
        visited_urls: set[str] = set()
        try:
            while next_url:
                if next_url in visited_urls:
                    logger.warning("Stopping pagination at repeated page url=%s", next_url)
                    break
                visited_urls.add(next_url)
                logger.info("Fetching repository page url=%s", next_url)
                response = await self._registry_http_get(url=next_url)
                self._registry_raise_for_status(response)
                payload = self._registry_read_json_object(response)
                for entry in payload.get("results") or []:
                    repository_name = entry.get("name") if isinstance(entry, dict) else None
                    if not repository_name:
                        logger.warning("Skipping listing entry without name namespace=%s", resolved_namespace)
                        continue
                    repositories.append(f"{resolved_namespace}/{repository_name}")
                next_url = payload.get("next") or None
                if next_url is not None and not isinstance(next_url, str):
                    raise RegistryPayloadError(
                        "Repository listing `next` link is not a string",
                        status_code=response.status_code,
                        url=str(response.request.url),
                    )
        except RegistryClientError as error:
            logger.error("Failed to fetch repositories for namespace=%s: %s", resolved_namespace, error)
            return []

        logger.info("Fetched %d repositories for namespace=%s", len(repositories), resolved_namespace)
        return repositories

    async def registry_get_repository_info(self, repository: str) -> RepositoryInfo | None:
        """Fetch summary metadata and the tag listing for one repository.

        Args:
            repository: Repository name.

        Returns:
            RepositoryInfo | None: Summary metadata, None on 404 or any failure.

        Raises:
            RuntimeError: This implementation does not raise on upstream failures.
        """

        logger.info("Fetching repository info repository=%s", repository)
        url = f"{self._hub_api_base_url}/repositories/{repository}/"
        try:
            response = await self._registry_http_get(url=url)
            if response.status_code == 404:
                logger.warning("Repository does not exist repository=%s", repository)
                return None
            self._registry_raise_for_status(response)
            payload = self._registry_read_json_object(response)
        except RegistryClientError as error:
            logger.error("Failed to fetch repository info repository=%s: %s", repository, error)
            return None

        tags = await self.registry_get_tags(repository)
        return RepositoryInfo(
            name=payload.get("name"),
            description=payload.get("description"),
            star_count=payload.get("star_count"),
            pull_count=payload.get("pull_count"),
            last_updated=payload.get("last_updated"),
            is_private=payload.get("is_private"),
            available_tags=tuple(tags),
        )

    async def registry_get_tags(self, repository: str) -> list[str]:
        """Fetch one page of tag names in registry order.

        A missing repository and a failed fetch both yield an empty list.

        Args:
            repository: Repository name.

        Returns:
            list[str]: Tag names.

        Raises:
            RuntimeError: This implementation does not raise on upstream failures.
        """

        query = urlencode({"page_size": self._page_size})
        url = f"{self._hub_api_base_url}/repositories/{repository}/tags/?{query}"
        try:
            response = await self._registry_http_get(url=url)
            if response.status_code == 404:
                logger.info("No tags found repository=%s", repository)
                return []
            self._registry_raise_for_status(response)
            payload = self._registry_read_json_object(response)
        except RegistryClientError as error:
            logger.error("Failed to get tags repository=%s: %s", repository, error)
            return []

        return [
            str(entry["name"])
            for entry in payload.get("results") or []
            if isinstance(entry, dict) and entry.get("name")
        ]

    async def registry_get_manifest(self, repository: str, tag: str | None = None) -> ImageManifest | None:
        """Fetch the image manifest for a tag.

        When tag is omitted the default tag is resolved from the tag listing:
        `latest` when present, otherwise the first listed tag.

        Args:
            repository: Repository name.
            tag: Optional explicit tag.

        Returns:
            ImageManifest | None: Parsed manifest, None when no tags exist.

        Raises:
            RegistryTagNotFoundError: Raised when the registry has no manifest for the tag.
            RegistryClientError: Raised for transport, auth and unexpected status failures.
        """

        listed_tags: list[str] | None = None
        if tag is None:
            listed_tags = await self.registry_get_tags(repository)
            selected_tag = domain_select_default_tag(listed_tags)
            if selected_tag is None:
                logger.warning("No tags found, cannot fetch manifest repository=%s", repository)
                return None
            tag = selected_tag
            logger.info("No tag specified repository=%s, using tag=%s", repository, tag)

        url = f"{self._registry_api_base_url}/{repository}/manifests/{tag}"
        logger.info("Fetching manifest repository=%s tag=%s", repository, tag)
        try:
            response = await self._registry_get_with_token_retry(
                repository=repository,
                url=url,
                accept=self._MANIFEST_ACCEPT,
            )
            if response.status_code == 404:
                available_tags = listed_tags if listed_tags is not None else await self.registry_get_tags(repository)
                raise RegistryTagNotFoundError(repository=repository, tag=tag, available_tags=available_tags, url=url)
            self._registry_raise_for_status(response)
            document = self._registry_read_json_object(response)
        except RegistryClientError as error:
            logger.error(
                "Failed to fetch manifest repository=%s tag=%s status=%s: %s",
                repository,
                tag,
                error.status_code,
                error,
            )
            raise

        config_section = document.get("config")
        config_digest = config_section.get("digest") if isinstance(config_section, dict) else None
        return ImageManifest(
            tag=tag,
            media_type=document.get("mediaType"),
            config_digest=config_digest or None,
            document=document,
        )

    async def registry_get_config(self, repository: str, digest: str) -> ImageConfig | None:
        """Fetch the config blob referenced by a manifest and extract its labels.

        Args:
            repository: Repository name.
            digest: Config blob content digest.

        Returns:
            ImageConfig | None: Config labels, None when the blob is not a JSON object.

        Raises:
            RegistryClientError: Raised for transport, auth and non-success status failures.
        """

        url = f"{self._registry_api_base_url}/{repository}/blobs/{digest}"
        logger.info("Fetching config blob repository=%s digest=%s", repository, digest)
        try:
            response = await self._registry_get_with_token_retry(
                repository=repository,
                url=url,
                accept=self._CONFIG_ACCEPT,
            )
            self._registry_raise_for_status(response)
            document = self._registry_read_json(response)
        except RegistryClientError as error:
            logger.error(
                "Failed to fetch config blob repository=%s digest=%s status=%s: %s",
                repository,
                digest,
                error.status_code,
                error,
            )
            raise

        if not isinstance(document, dict):
            logger.warning("Config blob is not a JSON object repository=%s digest=%s", repository, digest)
            return None

        config_section = document.get("config")
        raw_labels = config_section.get("Labels") if isinstance(config_section, dict) else None
        labels: dict[str, str] = {}
        if isinstance(raw_labels, dict):
            labels = {str(key): str(value) for key, value in raw_labels.items() if value is not None}
        return ImageConfig(digest=digest, labels=labels)

    async def registry_get_auth_token(self, repository: str) -> str:
        """Request an anonymous pull token scoped to one repository.

        Args:
            repository: Repository name.

        Returns:
            str: Bearer token.

        Raises:
            RegistryAuthenticationError: Raised when the token service fails or returns no token.
            RegistryClientError: Raised for transport failures.
        """

        query = urlencode({"service": self._auth_service, "scope": f"repository:{repository}:pull"})
        url = f"{self._auth_url}?{query}"
        logger.info("Requesting auth token repository=%s", repository)
        try:
            response = await self._registry_http_get(url=url)
            if not response.is_success:
                raise RegistryAuthenticationError(
                    f"Token service returned HTTP {response.status_code}",
                    status_code=response.status_code,
                    url=url,
                )
            payload = self._registry_read_json_object(response)
            token = payload.get("token")
            if not isinstance(token, str) or not token:
                raise RegistryAuthenticationError("No token received from token service", url=url)
        except RegistryClientError as error:
            logger.error("Failed to get auth token repository=%s: %s", repository, error)
            raise

        logger.info("Obtained auth token repository=%s", repository)
        return token

    async def registry_check_repository_exists(self, repository: str) -> bool:
        """Return whether the catalog API knows the repository.

        Args:
            repository: Repository name.

        Returns:
            bool: True on a success status, False on 404 or any failure.
        """

        url = f"{self._hub_api_base_url}/repositories/{repository}/"
        try:
            response = await self._registry_http_get(url=url)
        except RegistryClientError as error:
            logger.error("Error checking repository existence repository=%s: %s", repository, error)
            return False

        if response.status_code == 404:
            logger.warning("Repository does not exist repository=%s", repository)
            return False
        if not response.is_success:
            logger.error(
                "Error checking repository existence repository=%s status=%s",
                repository,
                response.status_code,
            )
            return False
        return True

    async def registry_get_manifest_with_any_tag(self, repository: str) -> tuple[ImageManifest, str] | None:
        """Fetch the manifest of the default tag together with the tag used.

        Args:
            repository: Repository name.

        Returns:
            tuple[ImageManifest, str] | None: Manifest and tag, None when no tags exist.

        Raises:
            RegistryClientError: Raised when the manifest fetch fails.
        """

        tags = await self.registry_get_tags(repository)
        selected_tag = domain_select_default_tag(tags)
        if selected_tag is None:
            logger.warning("No tags found, cannot get manifest repository=%s", repository)
            return None

        logger.info(
            "Using tag=%s repository=%s available_tags=%s",
            selected_tag,
            repository,
            ", ".join(tags),
        )
        manifest = await self.registry_get_manifest(repository, selected_tag)
        if manifest is None:
            return None
        return manifest, selected_tag

    async def registry_test_repository_access(self, repository: str) -> RepositoryAccessReport:
        """Probe existence, tags and manifest access for one repository.

        Args:
            repository: Repository name.

        Returns:
            RepositoryAccessReport: Access report; failures are reported, not raised.
        """

        try:
            return await self._registry_probe_repository_access(repository)
        except Exception as error:  # pylint: disable=broad-exception-caught
            logger.error("Repository access check failed repository=%s: %s", repository, error)
            return RepositoryAccessReport(repository=repository, exists=False, error=str(error))

    async def _registry_probe_repository_access(self, repository: str) -> RepositoryAccessReport:
        exists = await self.registry_check_repository_exists(repository)
        if not exists:
            return RepositoryAccessReport(repository=repository, exists=False, error="Repository does not exist")

        tags = tuple(await self.registry_get_tags(repository))
        if not tags:
            return RepositoryAccessReport(repository=repository, exists=True, error="No tags found")

        tag_to_test = domain_select_default_tag(tags)
        try:
            await self.registry_get_manifest(repository, tag_to_test)
        except Exception as error:  # pylint: disable=broad-exception-caught
            logger.error("Manifest access failed repository=%s tag=%s: %s", repository, tag_to_test, error)
            return RepositoryAccessReport(
                repository=repository,
                exists=True,
                tags=tags,
                error=f"Failed to access manifest: {error}",
            )
        return RepositoryAccessReport(repository=repository, exists=True, tags=tags)

    async def _registry_get_with_token_retry(self, repository: str, url: str, accept: str) -> httpx.Response:
        """GET anonymously, then once more with a fresh pull token after a 401.

        Args:
            repository: Repository the token is scoped to.
            url: Registry protocol URL.
            accept: Accept header value.

        Returns:
            httpx.Response: Final upstream response.

        Raises:
            RegistryClientError: Raised for transport or token failures.
        """

        headers = {"Accept": accept}
        response = await self._registry_http_get(url=url, headers=headers)
        if response.status_code != 401:
            return response

        logger.info("Repository requires authentication, retrying with token repository=%s", repository)
        token = await self.registry_get_auth_token(repository)
        return await self._registry_http_get(url=url, headers={**headers, "Authorization": f"Bearer {token}"})

    async def _registry_http_get(self, url: str, headers: dict[str, str] | None = None) -> httpx.Response:
        """Execute one HTTP GET and return the response regardless of status.

        Args:
            url: Absolute URL.
            headers: Optional extra request headers.

        Returns:
            httpx.Response: Upstream response with body loaded.

        Raises:
            RegistryTimeoutError: Raised when the transport times out.
            RegistryConnectionError: Raised for other transport failures.
        """

        try:
            async with httpx.AsyncClient(
                transport=self._transport,
                timeout=self._request_timeout_seconds,
                follow_redirects=True,
                headers={"User-Agent": self._USER_AGENT},
            ) as client:
                return await client.get(url, headers=headers)
        except httpx.TimeoutException as error:
            raise RegistryTimeoutError("Registry transport request timed out", url=url) from error
        except httpx.HTTPError as error:
            raise RegistryConnectionError(f"Registry transport request failed: {error}", url=url) from error
        except httpx.InvalidURL as error:
            raise RegistryConnectionError(f"Registry request URL is invalid: {error}", url=url) from error

    def _registry_raise_for_status(self, response: httpx.Response) -> None:
        if response.is_success:
            return
        raise RegistryHTTPStatusError(
            f"Registry upstream returned HTTP {response.status_code}",
            status_code=response.status_code,
            url=str(response.request.url),
        )

    def _registry_read_json(self, response: httpx.Response) -> Any:
        """Decode response body as JSON.

        Args:
            response: Upstream response.

        Returns:
            Any: Decoded JSON value.

        Raises:
            RegistryPayloadError: Raised when the body is not valid JSON.
        """

        try:
            return response.json()
        except ValueError as error:
            raise RegistryPayloadError(
                "Registry response body is not valid JSON",
                status_code=response.status_code,
                url=str(response.request.url),
            ) from error

    def _registry_read_json_object(self, response: httpx.Response) -> dict[str, Any]:
        document = self._registry_read_json(response)
        if not isinstance(document, dict):
            raise RegistryPayloadError(
                "Registry response body is not a JSON object",
                status_code=response.status_code,
                url=str(response.request.url),
            )
        return document
