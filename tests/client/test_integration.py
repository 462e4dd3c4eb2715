"""Integration tests for the lab client library.

These tests drive the real FastAPI app: the sync client through a
transport wrapping Starlette's TestClient, the async client through
httpx's ASGITransport. No server process is needed.

To run these tests:
    uv run pytest tests/client/test_integration.py -v
"""

import httpx
import pytest
from httpx import ASGITransport
from starlette.testclient import TestClient

from api.config import LabSettings
from api.dependencies import initialize_session_registry, shutdown_session_registry
from client import (
    AsyncLabClient,
    ConflictError,
    LabClient,
    NotFoundError,
    ValidationError,
)
from main import API_VERSION, app
from models.filesystem import MISSION_NOTES
from tests.fixtures.lab import BANK_HOST


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def setup_session_registry():
    """Initialize a small, latency-free session registry for each test."""
    initialize_session_registry(
        LabSettings(latency_min_ms=0, latency_max_ms=0, max_sessions=3)
    )
    yield
    shutdown_session_registry()


@pytest.fixture
def sync_client():
    """Create a synchronous LabClient connected to the test app."""
    test_client = TestClient(app, raise_server_exceptions=False)

    class SyncTestTransport(httpx.BaseTransport):
        def handle_request(self, request: httpx.Request) -> httpx.Response:
            response = test_client.request(
                method=request.method,
                url=str(request.url.path),
                params=dict(request.url.params) if request.url.params else None,
                content=request.content,
                headers=dict(request.headers),
            )
            return httpx.Response(
                status_code=response.status_code,
                headers=response.headers,
                content=response.content,
            )

    with LabClient(base_url="http://test", transport=SyncTestTransport()) as client:
        yield client


@pytest.fixture
async def async_client():
    """Create an asynchronous LabClient connected to the test app."""
    transport = ASGITransport(app=app)
    async with AsyncLabClient(base_url="http://test", transport=transport) as client:
        yield client


# =============================================================================
# Sync Client Tests
# =============================================================================


class TestSyncLabClient:
    """End-to-end tests through LabClient."""

    def test_health(self, sync_client):
        health = sync_client.health()

        assert health.status == "healthy"
        assert health.version == API_VERSION

    def test_learner_walkthrough(self, sync_client):
        """Test a full recon session: orient, navigate, scan, fetch."""
        session_id = sync_client.sessions.create().session_id

        assert sync_client.sessions.execute(session_id, "pwd").output == "/home/operator"
        assert sync_client.sessions.execute(session_id, "cat notes.txt").output == MISSION_NOTES

        sync_client.sessions.execute(session_id, "cd ..")
        assert sync_client.sessions.execute(session_id, "pwd").output == "/home"

        scan = sync_client.sessions.execute(session_id, "nmap vulnerable-bank.lab")
        assert "22/tcp" in scan.output

        page = sync_client.sessions.execute(session_id, f"curl {BANK_HOST}/")
        assert "Welcome to Vulnerable Bank" in page.output

        state = sync_client.sessions.get(session_id)
        assert state.history_size == 6
        assert state.prompt == "operator@cyber-coach:/home$"

    def test_command_error_returned_in_body(self, sync_client):
        session_id = sync_client.sessions.create().session_id

        result = sync_client.sessions.execute(session_id, "frobnicate")

        assert result.type == "error"
        assert result.output == "frobnicate: command not found"

    def test_history(self, sync_client):
        session_id = sync_client.sessions.create().session_id
        sync_client.sessions.execute(session_id, "ls")
        sync_client.sessions.execute(session_id, "whoami")

        assert sync_client.sessions.history(session_id).entry == "whoami"
        assert sync_client.sessions.history(session_id, "up").entry == "ls"
        assert sync_client.sessions.history(session_id, "down").entry == "whoami"

    def test_reset(self, sync_client):
        session_id = sync_client.sessions.create().session_id
        sync_client.sessions.execute(session_id, "touch evidence.txt")

        state = sync_client.sessions.reset(session_id)

        assert state.session_id == session_id
        assert state.history_size == 0
        ls = sync_client.sessions.execute(session_id, "ls")
        assert "evidence.txt" not in ls.output

    def test_unknown_session_raises_not_found(self, sync_client):
        with pytest.raises(NotFoundError) as exc_info:
            sync_client.sessions.execute("missing", "ls")

        assert "missing" in exc_info.value.message

    def test_session_limit_raises_conflict(self, sync_client):
        for _ in range(3):
            sync_client.sessions.create()

        with pytest.raises(ConflictError) as exc_info:
            sync_client.sessions.create()

        assert exc_info.value.details["max_sessions"] == 3

    def test_overlong_command_raises_validation_error(self, sync_client):
        session_id = sync_client.sessions.create().session_id

        with pytest.raises(ValidationError):
            sync_client.sessions.execute(session_id, "x" * 5000)

    def test_delete_and_list(self, sync_client):
        first = sync_client.sessions.create().session_id
        second = sync_client.sessions.create().session_id

        sync_client.sessions.delete(first)

        assert sync_client.sessions.list().session_ids == [second]

    def test_targets(self, sync_client):
        targets = sync_client.targets.list()

        assert targets.count == 2
        assert targets.targets[0].host == BANK_HOST


# =============================================================================
# Async Client Tests
# =============================================================================


class TestAsyncLabClient:
    """End-to-end tests through AsyncLabClient."""

    async def test_health(self, async_client):
        health = await async_client.health()

        assert health.status == "healthy"

    async def test_execute(self, async_client):
        session = await async_client.sessions.create()

        result = await async_client.sessions.execute(session.session_id, "sqlmap -u http://anything")

        assert result.type == "success"
        assert "GET parameter 'id'" in result.output

    async def test_clear(self, async_client):
        session = await async_client.sessions.create()
        await async_client.sessions.execute(session.session_id, "ls")

        result = await async_client.sessions.execute(session.session_id, "clear")

        assert result.cleared is True
        state = await async_client.sessions.get(session.session_id)
        assert state.transcript == []

    async def test_unknown_session(self, async_client):
        with pytest.raises(NotFoundError):
            await async_client.sessions.get("missing")

    async def test_targets(self, async_client):
        targets = await async_client.targets.list()

        assert [t.ip for t in targets.targets] == ["192.168.1.10", "192.168.1.20"]
