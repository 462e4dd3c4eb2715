"""Fixtures for the lab engine.

Every network simulator built here has a zero latency window so curl and
sqlmap tests never sleep.
"""

from datetime import datetime, timezone
from typing import Mapping, Optional

import pytest

from models.filesystem import VirtualFileSystem
from models.network import NetworkSimulator
from models.processor import CommandProcessor
from models.registry import NetworkTarget, Vulnerability
from models.terminal import Terminal

FIXED_TIME = datetime(2025, 1, 15, 14, 30, 5, tzinfo=timezone.utc)
NO_LATENCY: tuple[int, int] = (0, 0)

BANK_HOST = "http://vulnerable-bank.lab:8080"
SHOP_HOST = "http://shop.vulnerable.lab:8080"


def fixed_clock() -> datetime:
    return FIXED_TIME


def create_network(
    targets: Optional[Mapping[str, NetworkTarget]] = None,
) -> NetworkSimulator:
    """Create a NetworkSimulator that answers without delay.

    Args:
        targets: Host registry (defaults to the built-in registry).

    Returns:
        NetworkSimulator ready for testing.
    """
    return NetworkSimulator(targets=targets, latency_ms=NO_LATENCY)


def create_processor(
    filesystem: Optional[VirtualFileSystem] = None,
    network: Optional[NetworkSimulator] = None,
) -> CommandProcessor:
    """Create a CommandProcessor with a fixed clock and no network delay.

    Args:
        filesystem: Filesystem to use (defaults to a fresh seed tree).
        network: Network simulator (defaults to create_network()).

    Returns:
        CommandProcessor ready for testing.
    """
    return CommandProcessor(
        filesystem=filesystem or VirtualFileSystem(),
        network=network or create_network(),
        clock=fixed_clock,
    )


def create_target(
    ip: str = "10.0.0.5",
    ports: tuple[int, ...] = (21, 80),
    endpoints: Optional[dict[str, str]] = None,
) -> NetworkTarget:
    """Create a NetworkTarget with sensible defaults."""
    return NetworkTarget(
        ip=ip,
        ports=ports,
        vulnerabilities=(
            Vulnerability(
                type="Path Traversal",
                parameter="file",
                severity="high",
                description="Unsanitized file parameter",
            ),
        ),
        endpoints=endpoints if endpoints is not None else {"/": "<h1>Test</h1>"},
    )


@pytest.fixture
def filesystem():
    """Provide a VirtualFileSystem holding the seed tree."""
    return VirtualFileSystem()


@pytest.fixture
def network():
    """Provide a NetworkSimulator over the built-in registry with no delay."""
    return create_network()


@pytest.fixture
def processor(filesystem, network):
    """Provide a CommandProcessor wired to the filesystem and network fixtures."""
    return create_processor(filesystem=filesystem, network=network)


@pytest.fixture
def terminal(processor):
    """Provide a Terminal wrapping the processor fixture."""
    return Terminal(processor)
