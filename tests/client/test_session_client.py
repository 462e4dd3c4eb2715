"""Unit tests for SessionsClient, TargetsClient and their async versions.

The shared HTTP client is replaced with a mock so these tests only check
paths, payloads and response model parsing.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from client._sessions import AsyncSessionsClient, SessionsClient
from client._targets import AsyncTargetsClient, TargetsClient
from client.models import ExecuteResponse, SessionStateResponse

SESSION_STATE = {
    "session_id": "abc",
    "created_at": "2025-01-15T14:30:05+00:00",
    "prompt": "operator@cyber-coach:~$",
    "current_path": "/home/operator",
    "busy": False,
    "history_size": 0,
    "transcript": [
        {
            "command": "",
            "output": "Cyber Coach Terminal v2.0",
            "type": "info",
            "timestamp": "2025-01-15T14:30:05+00:00",
        }
    ],
}

EXECUTE_RESULT = {
    "command": "whoami",
    "output": "operator",
    "type": "success",
    "executed": True,
    "cleared": False,
    "prompt": "operator@cyber-coach:~$",
    "current_path": "/home/operator",
}


class TestSessionsClient:
    """Tests for the synchronous SessionsClient."""

    def test_create(self):
        mock_http = MagicMock()
        mock_http.post.return_value = SESSION_STATE
        client = SessionsClient(mock_http)

        result = client.create()

        mock_http.post.assert_called_once_with("/sessions", json=None, params=None)
        assert isinstance(result, SessionStateResponse)
        assert result.transcript[0].type == "info"

    def test_list(self):
        mock_http = MagicMock()
        mock_http.get.return_value = {"session_ids": ["abc"], "count": 1, "max_sessions": 100}
        client = SessionsClient(mock_http)

        result = client.list()

        mock_http.get.assert_called_once_with("/sessions", params=None)
        assert result.session_ids == ["abc"]

    def test_get(self):
        mock_http = MagicMock()
        mock_http.get.return_value = SESSION_STATE
        client = SessionsClient(mock_http)

        result = client.get("abc")

        mock_http.get.assert_called_once_with("/sessions/abc", params=None)
        assert result.current_path == "/home/operator"

    def test_delete(self):
        mock_http = MagicMock()
        mock_http.delete.return_value = {"deleted": True, "session_id": "abc"}
        client = SessionsClient(mock_http)

        result = client.delete("abc")

        mock_http.delete.assert_called_once_with("/sessions/abc", params=None)
        assert result.deleted is True

    def test_execute(self):
        mock_http = MagicMock()
        mock_http.post.return_value = EXECUTE_RESULT
        client = SessionsClient(mock_http)

        result = client.execute("abc", "whoami")

        mock_http.post.assert_called_once_with(
            "/sessions/abc/execute", json={"command": "whoami"}, params=None
        )
        assert isinstance(result, ExecuteResponse)
        assert result.output == "operator"

    @pytest.mark.parametrize("direction", ["up", "down"])
    def test_history(self, direction):
        mock_http = MagicMock()
        mock_http.get.return_value = {"direction": direction, "entry": "ls"}
        client = SessionsClient(mock_http)

        result = client.history("abc", direction)

        mock_http.get.assert_called_once_with(
            "/sessions/abc/history", params={"direction": direction}
        )
        assert result.entry == "ls"

    def test_history_defaults_to_up(self):
        mock_http = MagicMock()
        mock_http.get.return_value = {"direction": "up", "entry": ""}
        client = SessionsClient(mock_http)

        client.history("abc")

        assert mock_http.get.call_args.kwargs["params"] == {"direction": "up"}

    def test_reset(self):
        mock_http = MagicMock()
        mock_http.post.return_value = SESSION_STATE
        client = SessionsClient(mock_http)

        client.reset("abc")

        mock_http.post.assert_called_once_with("/sessions/abc/reset", json=None, params=None)


class TestAsyncSessionsClient:
    """Tests for the asynchronous AsyncSessionsClient."""

    async def test_create(self):
        mock_http = AsyncMock()
        mock_http.post.return_value = SESSION_STATE
        client = AsyncSessionsClient(mock_http)

        result = await client.create()

        assert result.session_id == "abc"

    async def test_execute(self):
        mock_http = AsyncMock()
        mock_http.post.return_value = EXECUTE_RESULT
        client = AsyncSessionsClient(mock_http)

        result = await client.execute("abc", "whoami")

        mock_http.post.assert_awaited_once_with(
            "/sessions/abc/execute", json={"command": "whoami"}, params=None
        )
        assert result.executed is True

    async def test_history(self):
        mock_http = AsyncMock()
        mock_http.get.return_value = {"direction": "down", "entry": ""}
        client = AsyncSessionsClient(mock_http)

        result = await client.history("abc", "down")

        assert result.direction == "down"

    async def test_delete(self):
        mock_http = AsyncMock()
        mock_http.delete.return_value = {"deleted": True, "session_id": "abc"}
        client = AsyncSessionsClient(mock_http)

        result = await client.delete("abc")

        assert result.session_id == "abc"


class TestTargetsClient:
    """Tests for TargetsClient and AsyncTargetsClient."""

    TARGETS = {
        "targets": [
            {
                "host": "http://vulnerable-bank.lab:8080",
                "ip": "192.168.1.10",
                "ports": [80, 8080, 22],
                "vulnerabilities": [],
                "endpoints": ["/"],
            }
        ],
        "count": 1,
    }

    def test_list(self):
        mock_http = MagicMock()
        mock_http.get.return_value = self.TARGETS
        client = TargetsClient(mock_http)

        result = client.list()

        mock_http.get.assert_called_once_with("/targets", params=None)
        assert result.targets[0].ip == "192.168.1.10"

    async def test_async_list(self):
        mock_http = AsyncMock()
        mock_http.get.return_value = self.TARGETS
        client = AsyncTargetsClient(mock_http)

        result = await client.list()

        assert result.count == 1
