"""Target catalogue sub-client for the lab API.

This is an internal module. Import from `client` instead.
"""

from client._base import AsyncBaseClient, BaseClient
from client.models import TargetListResponse


class TargetsClient(BaseClient):
    """Synchronous client for the /targets endpoint."""

    def list(self) -> TargetListResponse:
        """List the simulated hosts on the practice network."""
        data = self._get("/targets")
        return TargetListResponse(**data)


class AsyncTargetsClient(AsyncBaseClient):
    """Asynchronous client for the /targets endpoint."""

    async def list(self) -> TargetListResponse:
        """List the simulated hosts on the practice network."""
        data = await self._get("/targets")
        return TargetListResponse(**data)
