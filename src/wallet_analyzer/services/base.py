"""Base API client for provider adapters.

This module provides BaseAPIClient, a thin async HTTP client that
classifies transport and HTTP failures into ExternalServiceError.
Requests are attempted once: the analytics poll cadence is the only
retry mechanism in the system.
"""

from typing import Any

import httpx
import structlog

from wallet_analyzer.core.exceptions import ExternalServiceError

log = structlog.get_logger(__name__)


class BaseAPIClient:
    """Base API client with lazy httpx initialization.

    Provides:
    - Lazy client initialization (created on first request)
    - Uniform error classification (4xx, 5xx, transport)
    - Proper resource cleanup

    Attributes:
        service: Short service name used in errors and logs.
        base_url: Base URL for all requests.
        timeout: Request timeout in seconds.
        headers: Default headers for all requests.

    Example:
        client = BaseAPIClient(
            service="example",
            base_url="https://api.example.com",
            headers={"Authorization": "Bearer token"},
        )
        response = await client.get("/endpoint")
        await client.close()
    """

    def __init__(
        self,
        base_url: str,
        service: str | None = None,
        timeout: float = 30.0,
        headers: dict[str, str] | None = None,
    ) -> None:
        """Initialize BaseAPIClient.

        Args:
            base_url: Base URL for all requests.
            service: Service name for errors (default: base_url).
            timeout: Request timeout in seconds (default: 30).
            headers: Default headers for all requests.
        """
        self.base_url = base_url
        self.service = service or base_url
        self.timeout = timeout
        self.headers = headers or {}
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the httpx client (lazy initialization)."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers=self.headers,
            )
            log.debug("httpx_client_created", base_url=self.base_url)
        return self._client

    async def close(self) -> None:
        """Close the httpx client and release resources."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            log.debug("httpx_client_closed", base_url=self.base_url)

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Make a single HTTP request.

        Args:
            method: HTTP method (GET, POST).
            path: Request path (appended to base_url).
            **kwargs: Additional arguments passed to httpx.request.

        Returns:
            httpx.Response on success.

        Raises:
            ExternalServiceError: On any HTTP error status or transport failure.
        """
        client = await self._get_client()
        log.debug("request_attempt", service=self.service, method=method, path=path)

        try:
            response = await client.request(method, path, **kwargs)
            response.raise_for_status()
            return response

        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            level = log.warning if status_code < 500 else log.error
            level(
                "request_http_error",
                service=self.service,
                method=method,
                path=path,
                status_code=status_code,
            )
            raise ExternalServiceError(
                service=self.service,
                message=f"HTTP {status_code}: {_error_detail(e.response)}",
                status_code=status_code,
            ) from e

        except (httpx.TimeoutException, httpx.RequestError) as e:
            log.error(
                "request_connection_error",
                service=self.service,
                method=method,
                path=path,
                error=str(e) or type(e).__name__,
            )
            raise ExternalServiceError(
                service=self.service,
                message=f"Request failed: {str(e) or type(e).__name__}",
            ) from e

    async def get(self, path: str, **kwargs: Any) -> httpx.Response:
        """Make a GET request."""
        return await self._request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> httpx.Response:
        """Make a POST request."""
        return await self._request("POST", path, **kwargs)

    async def _json(self, response: httpx.Response) -> Any:
        """Decode a JSON body, raising ExternalServiceError on garbage."""
        try:
            return response.json()
        except ValueError as e:
            raise ExternalServiceError(
                service=self.service,
                message=f"Invalid JSON response: {response.text[:100]}",
                status_code=response.status_code,
            ) from e


def _error_detail(response: httpx.Response) -> str:
    """Best-effort extraction of a provider error message."""
    try:
        payload = response.json()
    except ValueError:
        return response.text[:200] or response.reason_phrase
    if isinstance(payload, dict):
        error = payload.get("error") or payload.get("description") or payload.get("message")
        if isinstance(error, dict):
            error = error.get("message")
        if error:
            return str(error)
    return response.reason_phrase
