"""Unit tests for API dependencies and runtime configuration."""

import pytest
from pydantic import ValidationError

from api import dependencies
from api.config import LabSettings
from api.dependencies import (
    get_session_registry,
    initialize_session_registry,
    shutdown_session_registry,
)


@pytest.fixture(autouse=True)
def reset_global_registry():
    """Ensure each test starts and ends without a global registry."""
    shutdown_session_registry()
    yield
    shutdown_session_registry()


class TestLabSettings:
    """Tests for LabSettings."""

    def test_defaults(self, monkeypatch):
        for name in ("LATENCY_MIN_MS", "LATENCY_MAX_MS", "MAX_SESSIONS"):
            monkeypatch.delenv(f"VLAB_{name}", raising=False)

        settings = LabSettings.from_env()

        assert settings.latency_ms == (200, 700)
        assert settings.max_sessions == 100

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("VLAB_LATENCY_MIN_MS", "0")
        monkeypatch.setenv("VLAB_LATENCY_MAX_MS", "50")
        monkeypatch.setenv("VLAB_MAX_SESSIONS", "4")

        settings = LabSettings.from_env()

        assert settings.latency_ms == (0, 50)
        assert settings.max_sessions == 4

    def test_invalid_env_value(self, monkeypatch):
        monkeypatch.setenv("VLAB_MAX_SESSIONS", "lots")

        with pytest.raises(ValidationError):
            LabSettings.from_env()

    def test_inverted_latency_window(self):
        with pytest.raises(ValidationError):
            LabSettings(latency_min_ms=500, latency_max_ms=100)

    def test_zero_sessions_rejected(self):
        with pytest.raises(ValidationError):
            LabSettings(max_sessions=0)


class TestSessionRegistryDependency:
    """Tests for the registry lifecycle helpers."""

    def test_uninitialized_raises(self):
        with pytest.raises(RuntimeError):
            get_session_registry()

    def test_initialize_with_settings(self):
        registry = initialize_session_registry(
            LabSettings(latency_min_ms=0, latency_max_ms=0, max_sessions=2)
        )

        assert get_session_registry() is registry
        assert registry.max_sessions == 2
        assert registry.latency_ms == (0, 0)

    def test_shutdown_drops_sessions(self):
        registry = initialize_session_registry(LabSettings(latency_min_ms=0, latency_max_ms=0))
        registry.create()

        shutdown_session_registry()

        assert len(registry) == 0
        assert dependencies._session_registry is None
