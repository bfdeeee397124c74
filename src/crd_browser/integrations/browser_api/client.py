"""Browser API client."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx
import structlog
from pydantic import ValidationError
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)
from tenacity.wait import wait_base

from crd_browser.integrations.browser_api.exceptions import (
    BrowserAPIError,
    BrowserConnectionError,
    BrowserNotFoundError,
    MalformedPayloadError,
)
from crd_browser.integrations.browser_api.models import ResourceKind, ResourceObject

if TYPE_CHECKING:
    from crd_browser.integrations.browser_api.config import BrowserConfig

logger = structlog.get_logger()

NAMESPACES_ENDPOINT = "/api/namespaces"
HEALTH_ENDPOINT = "/healthz"
READY_ENDPOINT = "/readyz"
CACHE_STATUS_ENDPOINT = "/api/cache/status"


class BrowserAPIClient:
    """Async HTTP client for the resource browser backend.

    Every request is a GET against a JSON API. Connection failures are
    retried; HTTP errors are translated into BrowserAPIError subclasses
    and 2xx bodies of the wrong shape into MalformedPayloadError.

    Example:
        ```python
        from crd_browser.integrations.browser_api import (
            BrowserAPIClient,
            BrowserConfig,
        )

        config = BrowserConfig.load()
        async with BrowserAPIClient(config) as client:
            for kind in await client.list_resource_kinds():
                print(kind.name)
        ```
    """

    def __init__(self, config: BrowserConfig) -> None:
        """Initialize the client.

        Args:
            config: Browser configuration with connection settings.
        """
        self.config = config
        self._retry_wait: wait_base = wait_exponential(multiplier=1, min=1, max=10)
        self._client = httpx.AsyncClient(
            base_url=config.connection.base_url,
            timeout=httpx.Timeout(config.connection.timeout),
            verify=config.connection.verify_ssl,
            headers={"Accept": "application/json"},
        )
        logger.debug(
            "Browser API client initialized",
            base_url=config.connection.base_url,
            catalog_path=config.catalog_path,
        )

    async def __aenter__(self) -> BrowserAPIClient:
        """Async context manager entry."""
        return self

    async def __aexit__(self, *args: object) -> None:
        """Async context manager exit."""
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def _request(self, method: str, endpoint: str, **kwargs: Any) -> Any:
        """Make a request, retrying connection failures.

        Args:
            method: HTTP method.
            endpoint: API endpoint.
            **kwargs: Additional arguments for httpx.

        Returns:
            Decoded JSON body.

        Raises:
            BrowserConnectionError: On connection failure after retries.
            BrowserNotFoundError: On 404 response.
            BrowserAPIError: On other non-2xx responses.
            MalformedPayloadError: If the 2xx body is not JSON.
        """
        retrying = AsyncRetrying(
            retry=retry_if_exception_type(BrowserConnectionError),
            stop=stop_after_attempt(self.config.connection.retries + 1),
            wait=self._retry_wait,
            reraise=True,
        )
        return await retrying(self._send, method, endpoint, **kwargs)

    async def _send(self, method: str, endpoint: str, **kwargs: Any) -> Any:
        try:
            response = await self._client.request(method, endpoint, **kwargs)
        except httpx.TimeoutException as e:
            logger.warning("Browser API timeout", endpoint=endpoint, error=str(e))
            raise BrowserConnectionError(
                "Request to browser API timed out",
                endpoint=endpoint,
                original_error=e,
            ) from e
        except httpx.TransportError as e:
            logger.warning("Browser API connection error", endpoint=endpoint, error=str(e))
            raise BrowserConnectionError(
                f"Failed to connect to browser API: {e}",
                endpoint=endpoint,
                original_error=e,
            ) from e

        if response.status_code >= 400:
            body = self._decode_error_body(response)
            server_error = body.get("error") if isinstance(body, dict) else None
            detail = server_error if isinstance(server_error, str) and server_error else None
            message = f"Browser API error: {detail or f'HTTP {response.status_code}'}"
            logger.debug(
                "Browser API error response",
                endpoint=endpoint,
                status_code=response.status_code,
                error=detail,
            )
            if response.status_code == 404:
                raise BrowserNotFoundError(message, response_body=body, endpoint=endpoint)
            raise BrowserAPIError(
                message,
                status_code=response.status_code,
                response_body=body,
                endpoint=endpoint,
            )

        try:
            return response.json()
        except ValueError as e:
            raise MalformedPayloadError(
                "Response body is not valid JSON",
                endpoint=endpoint,
                status_code=response.status_code,
            ) from e

    @staticmethod
    def _decode_error_body(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return response.text or None

    @staticmethod
    def _expect_list(data: Any, endpoint: str, expected: str) -> list[Any]:
        if not isinstance(data, list):
            raise MalformedPayloadError(expected=expected, response_body=data, endpoint=endpoint)
        return data

    def _expect_strings(self, data: Any, endpoint: str) -> list[str]:
        items = self._expect_list(data, endpoint, "a list of strings")
        if not all(isinstance(item, str) for item in items):
            raise MalformedPayloadError(
                expected="a list of strings", response_body=data, endpoint=endpoint
            )
        return items

    async def list_resource_kinds(self) -> list[ResourceKind]:
        """List every resource kind the backend exposes.

        Returns:
            Resource kinds in the order the backend returned them.

        Raises:
            MalformedPayloadError: If the payload is not a list of kinds.
        """
        endpoint = self.config.catalog_path
        logger.debug("Listing resource kinds", endpoint=endpoint)
        data = await self._request("GET", endpoint)
        items = self._expect_list(data, endpoint, "a list of resource kinds")
        try:
            kinds = [ResourceKind.model_validate(item) for item in items]
        except ValidationError as e:
            raise MalformedPayloadError(
                expected="a list of resource kinds",
                response_body=data,
                endpoint=endpoint,
            ) from e
        logger.debug("Listed resource kinds", count=len(kinds))
        return kinds

    async def list_namespaces(self) -> list[str]:
        """List cluster namespaces.

        Returns:
            Namespace names.
        """
        logger.debug("Listing namespaces")
        data = await self._request("GET", NAMESPACES_ENDPOINT)
        return self._expect_strings(data, NAMESPACES_ENDPOINT)

    async def list_objects(
        self,
        kind: ResourceKind,
        namespace: str | None = None,
    ) -> list[ResourceObject]:
        """List live objects of a resource kind.

        Args:
            kind: Resource kind to list.
            namespace: Restrict to one namespace; None lists all.

        Returns:
            Objects as decoded JSON documents.
        """
        endpoint = f"{kind.api_path}/objects"
        params = {"namespace": namespace} if namespace else None
        logger.debug("Listing objects", endpoint=endpoint, namespace=namespace)
        data = await self._request("GET", endpoint, params=params)
        items = self._expect_list(data, endpoint, "a list of objects")
        if not all(isinstance(item, dict) for item in items):
            raise MalformedPayloadError(
                expected="a list of objects", response_body=data, endpoint=endpoint
            )
        logger.debug("Listed objects", endpoint=endpoint, count=len(items))
        return items

    async def list_resource_namespaces(self, kind: ResourceKind) -> list[str]:
        """List the namespaces that hold objects of a resource kind.

        Args:
            kind: Resource kind to inspect.

        Returns:
            Namespace names; empty for cluster-scoped kinds.
        """
        endpoint = f"{kind.api_path}/namespaces"
        logger.debug("Listing resource namespaces", endpoint=endpoint)
        data = await self._request("GET", endpoint)
        return self._expect_strings(data, endpoint)

    async def check_health(self) -> dict[str, Any]:
        """Fetch the backend health document.

        Returns:
            Health payload (``status``, ``service``, ``timestamp``).
        """
        data = await self._request("GET", HEALTH_ENDPOINT)
        if not isinstance(data, dict):
            raise MalformedPayloadError(
                expected="a health object", response_body=data, endpoint=HEALTH_ENDPOINT
            )
        return data

    async def check_ready(self) -> bool:
        """Check whether the backend reports itself ready.

        Returns:
            True if ready, False if the backend answers 503.
        """
        try:
            await self._request("GET", READY_ENDPOINT)
        except BrowserAPIError as e:
            if e.status_code == 503:
                return False
            raise
        return True

    async def check_cache_status(self) -> dict[str, Any]:
        """Fetch the backend's informer cache summary.

        Returns:
            Cache payload (``preloadComplete``, ``readyResources``,
            ``totalInformers``, ``totalObjects``, ``uptime``).
        """
        data = await self._request("GET", CACHE_STATUS_ENDPOINT)
        if not isinstance(data, dict):
            raise MalformedPayloadError(
                expected="a cache status object",
                response_body=data,
                endpoint=CACHE_STATUS_ENDPOINT,
            )
        return data
