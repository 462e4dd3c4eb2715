"""Internal HTTP layer for the lab client.

Both the sync and async clients share one set of rules, kept on
_RequestPolicy:
- which responses are retried and how long to wait between attempts
- how transport failures become client exceptions
- how error bodies map to the exception hierarchy

This is an internal module and should not be imported directly by users.
"""

import asyncio
import time
from typing import Any, Literal

import httpx

from client.exceptions import (
    APIError,
    ConflictError,
    ConnectionError,
    LabClientError,
    NotFoundError,
    ServerError,
    TimeoutError,
    ValidationError,
)

HttpMethod = Literal["GET", "POST", "DELETE"]

# Gateway errors are transient; a 500 from the lab itself is not retried
RETRYABLE_STATUS_CODES = frozenset({502, 503, 504})

DEFAULT_RETRY_BACKOFF_BASE = 0.5  # seconds
DEFAULT_RETRY_BACKOFF_MAX = 30.0  # seconds

_STATUS_EXCEPTIONS: dict[int, type[APIError]] = {
    404: NotFoundError,
    409: ConflictError,
    422: ValidationError,
}


def _parse_error_response(response: httpx.Response) -> tuple[str, str | None, dict | None]:
    """Extract (message, error_type, details) from an error response.

    The lab API answers errors with {"error": <label>, "detail": <message>}.
    FastAPI's own request validation answers with a list under "detail".
    Anything else falls back to the raw body text.

    Args:
        response: The HTTP response to parse.

    Returns:
        A tuple of (message, error_type, details).
    """
    try:
        body = response.json()
    except ValueError:
        text = response.text.strip()
        return (text or f"HTTP {response.status_code} error"), None, None

    if not isinstance(body, dict):
        return str(body), None, None

    detail = body.get("detail")
    if isinstance(detail, list):
        messages = [
            f"{err.get('loc', ['unknown'])[-1]}: {err.get('msg', 'invalid')}"
            for err in detail
        ]
        return "; ".join(messages), "validation_error", {"errors": detail}

    extras = {
        key: value for key, value in body.items() if key not in ("error", "detail")
    }
    if isinstance(detail, str):
        return detail, body.get("error"), extras or None
    if "error" in body:
        return str(body["error"]), None, extras or None
    return str(body), None, None


def _raise_for_status(response: httpx.Response) -> None:
    """Raise the client exception matching an error status.

    Args:
        response: The HTTP response to check.

    Raises:
        NotFoundError: For HTTP 404 responses.
        ConflictError: For HTTP 409 responses.
        ValidationError: For HTTP 422 responses.
        ServerError: For HTTP 5xx responses.
        APIError: For any other non-success status.
    """
    if response.is_success:
        return

    message, error_type, details = _parse_error_response(response)
    try:
        response_body = response.json()
    except ValueError:
        response_body = response.text

    status_code = response.status_code
    exc_class = _STATUS_EXCEPTIONS.get(status_code)
    if exc_class is not None:
        raise exc_class(message=message, details=details, response_body=response_body)
    if status_code >= 500:
        raise ServerError(
            message=message,
            status_code=status_code,
            details=details,
            response_body=response_body,
        )
    raise APIError(
        message=message,
        status_code=status_code,
        error_type=error_type,
        details=details,
        response_body=response_body,
    )


def _calculate_backoff(attempt: int, base: float = DEFAULT_RETRY_BACKOFF_BASE) -> float:
    """Exponential backoff delay for a retry attempt.

    Args:
        attempt: The retry attempt number (0-indexed).
        base: Base delay in seconds.

    Returns:
        base * 2^attempt, capped at DEFAULT_RETRY_BACKOFF_MAX.
    """
    return min(base * (2**attempt), DEFAULT_RETRY_BACKOFF_MAX)


def _decode(response: httpx.Response) -> Any:
    _raise_for_status(response)
    if response.content:
        return response.json()
    return None


class _RequestPolicy:
    """Retry and error-translation rules shared by both HTTP clients.

    Attributes:
        base_url: The base URL for all API requests.
        timeout: Request timeout in seconds.
        retry_enabled: Whether to retry on transient failures.
        max_retries: Maximum number of retry attempts.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float,
        retry_enabled: bool,
        max_retries: int,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.retry_enabled = retry_enabled
        self.max_retries = max_retries

    @property
    def attempts(self) -> int:
        return self.max_retries + 1 if self.retry_enabled else 1

    def _should_retry_status(self, response: httpx.Response, attempt: int) -> bool:
        return (
            self.retry_enabled
            and response.status_code in RETRYABLE_STATUS_CODES
            and attempt < self.attempts - 1
        )

    def _translate(self, exc: httpx.TransportError, path: str) -> LabClientError:
        url = f"{self.base_url}{path}"
        if isinstance(exc, httpx.TimeoutException):
            return TimeoutError(
                message=f"Request to {url} timed out",
                timeout=self.timeout,
                url=url,
            )
        return ConnectionError(message=f"Failed to connect to {url}", url=url, cause=exc)

    def _give_up(self, attempt: int) -> bool:
        return not self.retry_enabled or attempt >= self.attempts - 1

    @staticmethod
    def _clean_params(params: dict[str, Any] | None) -> dict[str, Any] | None:
        if not params:
            return None
        return {k: v for k, v in params.items() if v is not None}


class HTTPClient(_RequestPolicy):
    """Synchronous HTTP client wrapping httpx.Client.

    Args:
        base_url: The base URL for all API requests.
        timeout: Request timeout in seconds.
        retry_enabled: Whether to retry on transient failures.
        max_retries: Maximum number of retry attempts.
        transport: Custom transport (e.g., httpx.MockTransport for testing).
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        retry_enabled: bool = False,
        max_retries: int = 3,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        super().__init__(base_url, timeout, retry_enabled, max_retries)
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
        )

    def close(self) -> None:
        """Close the underlying connection pool."""
        self._client.close()

    def __enter__(self) -> "HTTPClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def request(
        self,
        method: HttpMethod,
        path: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """Send a request and return the decoded JSON body.

        Args:
            method: The HTTP method.
            path: The URL path, appended to base_url.
            params: Query parameters; None values are dropped.
            json: JSON body to send.

        Returns:
            The parsed JSON body, or None for an empty response.

        Raises:
            ConnectionError: If the connection fails.
            TimeoutError: If the request times out.
            APIError: If the server returns an error response.
        """
        params = self._clean_params(params)

        for attempt in range(self.attempts):
            try:
                response = self._client.request(method, path, params=params, json=json)
            except httpx.TransportError as e:
                if not isinstance(e, (httpx.ConnectError, httpx.TimeoutException)):
                    raise
                if self._give_up(attempt):
                    raise self._translate(e, path) from e
                time.sleep(_calculate_backoff(attempt))
                continue

            if self._should_retry_status(response, attempt):
                time.sleep(_calculate_backoff(attempt))
                continue
            return _decode(response)

        raise RuntimeError("Unexpected error in request retry loop")

    def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return self.request("GET", path, params=params)

    def post(
        self,
        path: str,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        return self.request("POST", path, params=params, json=json)

    def delete(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return self.request("DELETE", path, params=params)


class AsyncHTTPClient(_RequestPolicy):
    """Asynchronous HTTP client wrapping httpx.AsyncClient.

    Args:
        base_url: The base URL for all API requests.
        timeout: Request timeout in seconds.
        retry_enabled: Whether to retry on transient failures.
        max_retries: Maximum number of retry attempts.
        transport: Custom transport (e.g., httpx.ASGITransport for testing).
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        retry_enabled: bool = False,
        max_retries: int = 3,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(base_url, timeout, retry_enabled, max_retries)
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
        )

    async def close(self) -> None:
        """Close the underlying connection pool."""
        await self._client.aclose()

    async def __aenter__(self) -> "AsyncHTTPClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def request(
        self,
        method: HttpMethod,
        path: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """Send a request and return the decoded JSON body.

        Same contract as HTTPClient.request; waits with asyncio.sleep.
        """
        params = self._clean_params(params)

        for attempt in range(self.attempts):
            try:
                response = await self._client.request(
                    method, path, params=params, json=json
                )
            except httpx.TransportError as e:
                if not isinstance(e, (httpx.ConnectError, httpx.TimeoutException)):
                    raise
                if self._give_up(attempt):
                    raise self._translate(e, path) from e
                await asyncio.sleep(_calculate_backoff(attempt))
                continue

            if self._should_retry_status(response, attempt):
                await asyncio.sleep(_calculate_backoff(attempt))
                continue
            return _decode(response)

        raise RuntimeError("Unexpected error in request retry loop")

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(
        self,
        path: str,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        return await self.request("POST", path, params=params, json=json)

    async def delete(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await self.request("DELETE", path, params=params)
