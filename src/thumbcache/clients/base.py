"""Base async HTTP client with connection pooling.

HTTP clients in thumbcache inherit from this base to get consistent behavior:
- Async/await for non-blocking I/O
- Connection pooling for concurrent lookups
- One round trip per call. A failure is raised immediately, never retried
- Failures mapped onto the thumbcache error taxonomy

Usage:
    class MyAPIClient(BaseAsyncClient):
        def __init__(self, base_url: str):
            super().__init__(base_url=base_url)

        async def get_data(self, name: str) -> dict:
            return await self.get("/data", params={"name": name})
"""

import logging
from typing import Any

import httpx

from thumbcache.errors import BadResponseError, DependencyError, ExternalAPIError

logger = logging.getLogger(__name__)

_SUCCESS_STATUS = 200
_BODY_PREVIEW = 500  # chars of response body kept on errors


class BaseAsyncClient:
    """Base async HTTP client.

    Args:
        base_url: Base URL for all API requests
        headers: Default headers for all requests
        timeout: Request timeout in seconds (default: 30)
    """

    def __init__(
        self,
        base_url: str,
        headers: dict[str, str] | None = None,
        timeout: float = 30.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.headers = headers or {}
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "BaseAsyncClient":
        """Async context manager entry."""
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=self.headers,
            timeout=self.timeout,
            limits=httpx.Limits(max_keepalive_connections=5, max_connections=10),
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def _request(
        self,
        method: str,
        endpoint: str,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Make a single HTTP request and decode its JSON object body.

        Args:
            method: HTTP method (GET, POST, etc.)
            endpoint: API endpoint path (relative to base_url)
            params: Query parameters

        Returns:
            Parsed JSON response as dictionary

        Raises:
            DependencyError: On timeouts and network failures
            ExternalAPIError: If the status is not 200
            BadResponseError: If the body is not a JSON object
        """
        if not self._client:
            raise RuntimeError("Client not initialized. Use async with context manager.")

        if not endpoint.startswith("/"):
            endpoint = f"/{endpoint}"

        logger.debug("%s %s%s params=%s", method, self.base_url, endpoint, params)

        try:
            response = await self._client.request(method=method, url=endpoint, params=params)
        except httpx.TransportError as e:
            logger.error("Transport error for %s: %s", endpoint, e)
            raise DependencyError(f"Request to {endpoint} failed: {e}") from e

        logger.debug("Response: %d for %s", response.status_code, endpoint)

        if response.status_code != _SUCCESS_STATUS:
            error_body = response.text[:_BODY_PREVIEW]
            logger.error("API error: %d %s - %s", response.status_code, endpoint, error_body)
            raise ExternalAPIError(
                message=f"API request failed: {response.status_code}",
                status_code=response.status_code,
                response_body=error_body,
            )

        try:
            data = response.json()
        except ValueError as e:
            logger.error("Failed to parse JSON response: %s", e)
            raise BadResponseError(
                f"Invalid JSON response: {e}",
                response_body=response.text[:_BODY_PREVIEW],
            ) from e

        if not isinstance(data, dict):
            raise BadResponseError(
                f"Expected a JSON object, got {type(data).__name__}",
                response_body=response.text[:_BODY_PREVIEW],
            )
        return data

    async def get(
        self,
        endpoint: str,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Convenience method for GET requests."""
        return await self._request("GET", endpoint, params=params)
