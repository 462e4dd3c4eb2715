"""Network simulator for the lab terminal.

Answers reconnaissance queries against the static host registry. Responses
are deterministic per target and path; fetch() only adds a random delay to
look like a real network round trip.
"""

import asyncio
import logging
import random
from typing import Mapping, Optional

from pydantic import BaseModel, Field

from models.registry import DEFAULT_TARGETS, NetworkTarget

logger = logging.getLogger(__name__)

# Well-known services reported by scans
PORT_SERVICES: dict[int, str] = {
    21: "ftp",
    22: "ssh",
    80: "http",
    443: "https",
    3306: "mysql",
    8080: "http-proxy",
}

SIMULATED_OS = "Linux 5.4.0-42-generic"
HOST_DOWN_ERROR = "Host down or unreachable"
DNS_FAILURE_BODY = "DNS_PROBE_FINISHED_NXDOMAIN"
NOT_FOUND_BODY = "404 Not Found"

DEFAULT_LATENCY_MS: tuple[int, int] = (200, 700)


def get_service(port: int) -> str:
    """Return the service name for a port, or "unknown"."""
    return PORT_SERVICES.get(port, "unknown")


class PortInfo(BaseModel):
    """One row of a scan report."""

    port: int
    state: str = "open"
    service: str


class ScanResult(BaseModel):
    """Outcome of scanning a target.

    Either the host fields are set, or only `error` is.

    Args:
        ip: Address of the scanned host.
        ports: Open ports with their services.
        os: Reported operating system.
        error: Set when no registered host matched.
    """

    ip: Optional[str] = None
    ports: list[PortInfo] = Field(default_factory=list)
    os: Optional[str] = None
    error: Optional[str] = None

    @property
    def is_up(self) -> bool:
        return self.error is None


class NetworkResponse(BaseModel):
    """Canned HTTP response returned by fetch().

    Args:
        status: HTTP status code.
        status_text: HTTP reason phrase.
        data: Response body.
        headers: Response headers.
        host: Registry key of the host that answered, None on a DNS miss.
    """

    status: int
    status_text: str
    data: str
    headers: dict[str, str] = Field(default_factory=dict)
    host: Optional[str] = None

    @property
    def resolved(self) -> bool:
        return self.host is not None


class NetworkSimulator:
    """Simulated network of vulnerable hosts.

    Args:
        targets: Registry of hosts keyed by canonical URL.
        latency_ms: Inclusive (min, max) window for the artificial fetch delay.
        rng: Random source for the delay, injectable for tests.
    """

    def __init__(
        self,
        targets: Optional[Mapping[str, NetworkTarget]] = None,
        latency_ms: tuple[int, int] = DEFAULT_LATENCY_MS,
        rng: Optional[random.Random] = None,
    ) -> None:
        low, high = latency_ms
        if low < 0 or high < low:
            raise ValueError(f"Invalid latency window {latency_ms}")

        self.targets = targets if targets is not None else DEFAULT_TARGETS
        self.latency_ms = latency_ms
        self._rng = rng or random.Random()

    def find_target(self, query: str) -> Optional[NetworkTarget]:
        """Look up a host by exact IP or by substring of its registry key.

        Args:
            query: IP address or (partial) host name.

        Returns:
            The first matching target in registry order, or None.
        """
        if not query:
            return None
        for key, target in self.targets.items():
            if target.ip == query or query in key:
                return target
        return None

    def scan(self, target: str) -> ScanResult:
        """Report open ports for a target.

        Args:
            target: IP address or host name.

        Returns:
            ScanResult with ports and OS, or with `error` set if no host matched.
        """
        host = self.find_target(target)
        if host is None:
            logger.debug(f"Scan of {target!r} found no host")
            return ScanResult(error=HOST_DOWN_ERROR)

        return ScanResult(
            ip=host.ip,
            ports=[PortInfo(port=port, service=get_service(port)) for port in host.ports],
            os=SIMULATED_OS,
        )

    def _match_host(self, url: str) -> Optional[str]:
        matches = [key for key in self.targets if url.startswith(key)]
        if not matches:
            return None
        return max(matches, key=len)

    async def _simulate_latency(self) -> None:
        low, high = self.latency_ms
        if high == 0:
            return
        await asyncio.sleep(self._rng.uniform(low, high) / 1000)

    async def fetch(self, url: str) -> NetworkResponse:
        """Perform a simulated HTTP GET.

        The host is the longest registered key the URL starts with. The rest
        of the URL, verbatim, is the endpoint path; "/" when nothing is left.

        Args:
            url: Full URL, e.g. "http://vulnerable-bank.lab:8080/login".

        Returns:
            200 with the canned body, 404 for unknown paths, or a 404 with a
            DNS failure body when no host matches.
        """
        await self._simulate_latency()

        host = self._match_host(url)
        if host is None:
            logger.debug(f"Fetch of {url!r} failed DNS lookup")
            return NetworkResponse(
                status=404, status_text="Not Found", data=DNS_FAILURE_BODY
            )

        path = url[len(host):] or "/"
        body = self.targets[host].endpoints.get(path)

        if body is not None:
            return NetworkResponse(
                status=200,
                status_text="OK",
                data=body,
                headers={"Content-Type": "text/html", "Server": "Apache/2.4.41"},
                host=host,
            )

        return NetworkResponse(
            status=404,
            status_text="Not Found",
            data=NOT_FOUND_BODY,
            headers={"Content-Type": "text/html"},
            host=host,
        )

    def list_targets(self) -> list[dict]:
        """Describe every registered host, in registry order."""
        return [target.to_dict(host) for host, target in self.targets.items()]
