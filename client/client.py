"""Main lab client classes.

This module provides the entry points for driving the lab API:
- LabClient: Synchronous client
- AsyncLabClient: Asynchronous client

Both expose namespaced sub-clients as properties (client.sessions,
client.targets).

Example:
    Synchronous usage::

        from client import LabClient

        with LabClient(base_url="http://localhost:8000") as client:
            session = client.sessions.create()
            client.sessions.execute(session.session_id, "cat notes.txt")

    Asynchronous usage::

        from client import AsyncLabClient

        async with AsyncLabClient() as client:
            session = await client.sessions.create()
            await client.sessions.execute(session.session_id, "curl http://vulnerable-bank.lab:8080/")
"""

from typing import Any

from client._http import AsyncHTTPClient, HTTPClient
from client._sessions import AsyncSessionsClient, SessionsClient
from client._targets import AsyncTargetsClient, TargetsClient
from client.models import HealthResponse


class LabClient:
    """Synchronous client for the lab REST API.

    Attributes:
        base_url: The base URL of the lab server.

    Example:
        Manual lifecycle management::

            client = LabClient()
            try:
                session_id = client.sessions.create().session_id
                print(client.sessions.execute(session_id, "ls").output)
            finally:
                client.close()
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        timeout: float = 30.0,
        retry_enabled: bool = False,
        max_retries: int = 3,
        transport: Any = None,
    ) -> None:
        """Initialize the lab client.

        Args:
            base_url: The base URL of the lab server.
            timeout: Request timeout in seconds. Must exceed the server's
                simulated latency for curl commands.
            retry_enabled: Retry on connection errors, timeouts and HTTP
                502/503/504 with exponential backoff.
            max_retries: Maximum number of retry attempts when retry is enabled.
            transport: Custom HTTP transport (e.g., MockTransport for testing).
        """
        self.base_url = base_url
        self._http = HTTPClient(
            base_url=base_url,
            timeout=timeout,
            retry_enabled=retry_enabled,
            max_retries=max_retries,
            transport=transport,
        )
        self._sessions: SessionsClient | None = None
        self._targets: TargetsClient | None = None

    def __enter__(self) -> "LabClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the client and release resources."""
        self._http.close()

    @property
    def sessions(self) -> SessionsClient:
        """Access lab session endpoints (/sessions/*)."""
        if self._sessions is None:
            self._sessions = SessionsClient(self._http)
        return self._sessions

    @property
    def targets(self) -> TargetsClient:
        """Access the target catalogue (/targets)."""
        if self._targets is None:
            self._targets = TargetsClient(self._http)
        return self._targets

    def health(self) -> HealthResponse:
        """Check that the server is up.

        Returns:
            Server status and API version.
        """
        data = self._http.get("/health")
        return HealthResponse(**data)


class AsyncLabClient:
    """Asynchronous client for the lab REST API.

    Same surface as LabClient with awaitable methods.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        timeout: float = 30.0,
        retry_enabled: bool = False,
        max_retries: int = 3,
        transport: Any = None,
    ) -> None:
        self.base_url = base_url
        self._http = AsyncHTTPClient(
            base_url=base_url,
            timeout=timeout,
            retry_enabled=retry_enabled,
            max_retries=max_retries,
            transport=transport,
        )
        self._sessions: AsyncSessionsClient | None = None
        self._targets: AsyncTargetsClient | None = None

    async def __aenter__(self) -> "AsyncLabClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the client and release resources."""
        await self._http.close()

    @property
    def sessions(self) -> AsyncSessionsClient:
        """Access lab session endpoints (/sessions/*)."""
        if self._sessions is None:
            self._sessions = AsyncSessionsClient(self._http)
        return self._sessions

    @property
    def targets(self) -> AsyncTargetsClient:
        """Access the target catalogue (/targets)."""
        if self._targets is None:
            self._targets = AsyncTargetsClient(self._http)
        return self._targets

    async def health(self) -> HealthResponse:
        """Check that the server is up."""
        data = await self._http.get("/health")
        return HealthResponse(**data)
