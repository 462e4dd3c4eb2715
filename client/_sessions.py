"""Session sub-client for the lab API.

This module provides SessionsClient and AsyncSessionsClient for the
/sessions endpoints: creating lab sessions, running commands in them, and
recalling their command history.

This is an internal module. Import from `client` instead.
"""

from typing import Literal

from client._base import AsyncBaseClient, BaseClient
from client.models import (
    DeleteSessionResponse,
    ExecuteResponse,
    HistoryResponse,
    SessionListResponse,
    SessionStateResponse,
)

Direction = Literal["up", "down"]


class SessionsClient(BaseClient):
    """Synchronous client for lab session endpoints (/sessions/*).

    Example:
        with LabClient() as client:
            session = client.sessions.create()
            result = client.sessions.execute(session.session_id, "nmap 192.168.1.10")
            print(result.output)
    """

    _BASE_PATH = "/sessions"

    def create(self) -> SessionStateResponse:
        """Create a fresh lab session.

        Returns:
            Snapshot of the new session, with the welcome banner on screen.

        Raises:
            ConflictError: If the server's session limit is reached.
        """
        data = self._post(self._BASE_PATH)
        return SessionStateResponse(**data)

    def list(self) -> SessionListResponse:
        """List the IDs of all active sessions."""
        data = self._get(self._BASE_PATH)
        return SessionListResponse(**data)

    def get(self, session_id: str) -> SessionStateResponse:
        """Get the current state of a session.

        Args:
            session_id: Session to describe.

        Returns:
            Prompt, current directory, busy flag and transcript.

        Raises:
            NotFoundError: If the session does not exist.
        """
        data = self._get(f"{self._BASE_PATH}/{session_id}")
        return SessionStateResponse(**data)

    def delete(self, session_id: str) -> DeleteSessionResponse:
        """Delete a session and discard its environment.

        Raises:
            NotFoundError: If the session does not exist.
        """
        data = self._delete(f"{self._BASE_PATH}/{session_id}")
        return DeleteSessionResponse(**data)

    def execute(self, session_id: str, command: str) -> ExecuteResponse:
        """Run a command line in a session.

        A failing command (unknown verb, missing file, unreachable host) is
        not an exception; check `result.type == "error"`.

        Args:
            session_id: Session to run the command in.
            command: Raw command line, e.g. "cat notes.txt".

        Returns:
            The command's output and the prompt that follows it.

        Raises:
            NotFoundError: If the session does not exist.
            ValidationError: If the command line is too long.
        """
        data = self._post(
            f"{self._BASE_PATH}/{session_id}/execute",
            json={"command": command},
        )
        return ExecuteResponse(**data)

    def history(self, session_id: str, direction: Direction = "up") -> HistoryResponse:
        """Move the session's history cursor and return the recalled line.

        Args:
            session_id: Session whose history to navigate.
            direction: "up" for older entries, "down" for newer ones.

        Returns:
            The recalled entry; "" past the newest entry.
        """
        data = self._get(
            f"{self._BASE_PATH}/{session_id}/history",
            params={"direction": direction},
        )
        return HistoryResponse(**data)

    def reset(self, session_id: str) -> SessionStateResponse:
        """Restart a session from the seed filesystem, keeping its ID."""
        data = self._post(f"{self._BASE_PATH}/{session_id}/reset")
        return SessionStateResponse(**data)


class AsyncSessionsClient(AsyncBaseClient):
    """Asynchronous client for lab session endpoints (/sessions/*).

    Example:
        async with AsyncLabClient() as client:
            session = await client.sessions.create()
            result = await client.sessions.execute(session.session_id, "ls")
    """

    _BASE_PATH = "/sessions"

    async def create(self) -> SessionStateResponse:
        """Create a fresh lab session."""
        data = await self._post(self._BASE_PATH)
        return SessionStateResponse(**data)

    async def list(self) -> SessionListResponse:
        """List the IDs of all active sessions."""
        data = await self._get(self._BASE_PATH)
        return SessionListResponse(**data)

    async def get(self, session_id: str) -> SessionStateResponse:
        """Get the current state of a session."""
        data = await self._get(f"{self._BASE_PATH}/{session_id}")
        return SessionStateResponse(**data)

    async def delete(self, session_id: str) -> DeleteSessionResponse:
        """Delete a session and discard its environment."""
        data = await self._delete(f"{self._BASE_PATH}/{session_id}")
        return DeleteSessionResponse(**data)

    async def execute(self, session_id: str, command: str) -> ExecuteResponse:
        """Run a command line in a session.

        See SessionsClient.execute.
        """
        data = await self._post(
            f"{self._BASE_PATH}/{session_id}/execute",
            json={"command": command},
        )
        return ExecuteResponse(**data)

    async def history(
        self, session_id: str, direction: Direction = "up"
    ) -> HistoryResponse:
        """Move the session's history cursor and return the recalled line."""
        data = await self._get(
            f"{self._BASE_PATH}/{session_id}/history",
            params={"direction": direction},
        )
        return HistoryResponse(**data)

    async def reset(self, session_id: str) -> SessionStateResponse:
        """Restart a session from the seed filesystem, keeping its ID."""
        data = await self._post(f"{self._BASE_PATH}/{session_id}/reset")
        return SessionStateResponse(**data)
