"""Lab session management.

Each learner session owns its own VirtualFileSystem, NetworkSimulator,
CommandProcessor and Terminal. Sessions share nothing mutable; only the
frozen host registry is common to all of them.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Optional

from models.filesystem import VirtualFileSystem
from models.network import DEFAULT_LATENCY_MS, NetworkSimulator
from models.processor import CommandProcessor
from models.terminal import Terminal

logger = logging.getLogger(__name__)


class SessionNotFoundError(Exception):
    """Raised when a session ID is not registered.

    Args:
        session_id: The ID that was looked up.
    """

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"Session '{session_id}' not found")


class SessionLimitError(Exception):
    """Raised when creating a session would exceed the configured maximum.

    Args:
        max_sessions: The configured maximum.
    """

    def __init__(self, max_sessions: int):
        self.max_sessions = max_sessions
        super().__init__(f"Session limit of {max_sessions} reached")


class LabSession:
    """A learner's isolated lab environment.

    Attributes:
        session_id: Unique identifier for this session.
        created_at: When the session was created.
        terminal: Terminal surface, which owns the processor and engine.
    """

    def __init__(
        self,
        session_id: Optional[str] = None,
        latency_ms: tuple[int, int] = DEFAULT_LATENCY_MS,
    ) -> None:
        self.session_id = session_id or str(uuid.uuid4())
        self.created_at = datetime.now(timezone.utc)
        self.terminal = Terminal(
            CommandProcessor(
                filesystem=VirtualFileSystem(),
                network=NetworkSimulator(latency_ms=latency_ms),
            )
        )

    @property
    def processor(self) -> CommandProcessor:
        return self.terminal.processor

    def get_snapshot(self) -> dict[str, Any]:
        snapshot = self.terminal.get_snapshot()
        snapshot["session_id"] = self.session_id
        snapshot["created_at"] = self.created_at.isoformat()
        return snapshot


class SessionRegistry:
    """In-memory registry of active lab sessions.

    Args:
        max_sessions: Maximum number of concurrent sessions.
        latency_ms: Fetch latency window given to every new session.
    """

    def __init__(
        self,
        max_sessions: int = 100,
        latency_ms: tuple[int, int] = DEFAULT_LATENCY_MS,
    ) -> None:
        if max_sessions < 1:
            raise ValueError(f"max_sessions must be at least 1, got {max_sessions}")
        self.max_sessions = max_sessions
        self.latency_ms = latency_ms
        self._sessions: dict[str, LabSession] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def create(self) -> LabSession:
        """Create and register a fresh session.

        Raises:
            SessionLimitError: If the registry is full.
        """
        if len(self._sessions) >= self.max_sessions:
            raise SessionLimitError(self.max_sessions)

        session = LabSession(latency_ms=self.latency_ms)
        self._sessions[session.session_id] = session
        logger.info(f"Created lab session {session.session_id}")
        return session

    def get(self, session_id: str) -> LabSession:
        """Return a registered session.

        Raises:
            SessionNotFoundError: If the ID is unknown.
        """
        try:
            return self._sessions[session_id]
        except KeyError:
            raise SessionNotFoundError(session_id) from None

    def reset(self, session_id: str) -> LabSession:
        """Replace a session's environment with a fresh one, keeping its ID.

        Raises:
            SessionNotFoundError: If the ID is unknown.
        """
        self.get(session_id)
        session = LabSession(session_id=session_id, latency_ms=self.latency_ms)
        self._sessions[session_id] = session
        logger.info(f"Reset lab session {session_id}")
        return session

    def delete(self, session_id: str) -> None:
        """Remove a session.

        Raises:
            SessionNotFoundError: If the ID is unknown.
        """
        self.get(session_id)
        del self._sessions[session_id]
        logger.info(f"Deleted lab session {session_id}")

    def list_ids(self) -> list[str]:
        return list(self._sessions)

    def clear(self) -> None:
        count = len(self._sessions)
        self._sessions.clear()
        logger.info(f"Cleared {count} lab sessions")
