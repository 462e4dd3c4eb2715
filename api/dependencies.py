"""Dependency injection providers for the FastAPI application.

This module defines dependencies that can be injected into route handlers,
providing access to shared resources like the SessionRegistry.
"""

import logging
from typing import Annotated, Optional

from fastapi import Depends

from api.config import LabSettings
from models.session import SessionRegistry

logger = logging.getLogger(__name__)


# Global state
# One registry per process; each session inside it is fully isolated
_session_registry: SessionRegistry | None = None


def get_session_registry() -> SessionRegistry:
    """Get the shared SessionRegistry instance.

    This function is a FastAPI dependency. When you add it to a route handler's
    parameters, FastAPI will automatically call this function and inject the result.

    Returns:
        The shared SessionRegistry instance.

    Raises:
        RuntimeError: If the registry hasn't been initialized yet.

    Example:
        @router.get("/some-endpoint")
        async def my_handler(registry: SessionRegistryDep):
            return {"sessions": registry.list_ids()}
    """
    if _session_registry is None:
        raise RuntimeError(
            "SessionRegistry not initialized. Call initialize_session_registry() first."
        )

    return _session_registry


def initialize_session_registry(settings: Optional[LabSettings] = None) -> SessionRegistry:
    """Initialize the shared SessionRegistry instance.

    This should be called once when the FastAPI app starts up.

    Args:
        settings: Configuration to use. Read from the environment if omitted.

    Returns:
        The newly created SessionRegistry instance.
    """
    global _session_registry

    settings = settings or LabSettings.from_env()
    _session_registry = SessionRegistry(
        max_sessions=settings.max_sessions,
        latency_ms=settings.latency_ms,
    )
    logger.info(
        f"Session registry ready (max_sessions={settings.max_sessions}, "
        f"latency_ms={settings.latency_ms})"
    )
    return _session_registry


def shutdown_session_registry() -> None:
    """Drop every session and release the shared registry.

    This should be called when the FastAPI app shuts down.
    """
    global _session_registry

    if _session_registry is not None:
        _session_registry.clear()

    _session_registry = None


# Type alias for dependency injection
SessionRegistryDep = Annotated[SessionRegistry, Depends(get_session_registry)]
