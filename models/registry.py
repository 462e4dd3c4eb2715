"""Static registry of simulated lab hosts.

Targets are compiled-in configuration. They are frozen models and the
registry is never mutated at runtime, so every session can share it.
"""

from types import MappingProxyType
from typing import Literal, Mapping

from pydantic import BaseModel, ConfigDict, Field


class Vulnerability(BaseModel):
    """A vulnerability planted on a simulated host.

    Descriptive only: scan and fetch do not consume it.

    Args:
        type: Vulnerability class (e.g., "SQL Injection").
        parameter: Request parameter that carries the flaw.
        severity: Severity rating.
        description: Human-readable explanation.
    """

    model_config = ConfigDict(frozen=True)

    type: str = Field(description="Vulnerability class")
    parameter: str = Field(description="Affected request parameter")
    severity: Literal["low", "medium", "high", "critical"] = Field(
        description="Severity rating"
    )
    description: str = Field(description="Human-readable explanation")


class NetworkTarget(BaseModel):
    """A simulated host with canned HTTP endpoints.

    Args:
        ip: IPv4 address reported by scans.
        ports: Open TCP ports, in report order.
        vulnerabilities: Planted vulnerabilities.
        endpoints: Canned response bodies keyed by request path.
    """

    model_config = ConfigDict(frozen=True)

    ip: str = Field(description="IPv4 address")
    ports: tuple[int, ...] = Field(description="Open TCP ports")
    vulnerabilities: tuple[Vulnerability, ...] = Field(
        default=(), description="Planted vulnerabilities"
    )
    endpoints: Mapping[str, str] = Field(
        default_factory=dict, description="Canned bodies keyed by path"
    )

    def to_dict(self, host: str) -> dict:
        return {
            "host": host,
            "ip": self.ip,
            "ports": list(self.ports),
            "vulnerabilities": [v.model_dump() for v in self.vulnerabilities],
            "endpoints": sorted(self.endpoints),
        }


DEFAULT_TARGETS: Mapping[str, NetworkTarget] = MappingProxyType(
    {
        "http://vulnerable-bank.lab:8080": NetworkTarget(
            ip="192.168.1.10",
            ports=(80, 8080, 22),
            vulnerabilities=(
                Vulnerability(
                    type="IDOR",
                    parameter="id",
                    severity="high",
                    description="Insecure Direct Object Reference in user profile",
                ),
                Vulnerability(
                    type="SQL Injection",
                    parameter="username",
                    severity="critical",
                    description="SQLi in login form",
                ),
            ),
            endpoints={
                "/": '<html><body><h1>Welcome to Vulnerable Bank</h1><a href="/login">Login</a></body></html>',
                "/login": '<html><body><form action="/auth" method="POST"><input name="username"><input name="password"></form></body></html>',
                "/api/users": '{"users": [{"id": 1, "name": "admin"}, {"id": 2, "name": "user"}]}',
            },
        ),
        "http://shop.vulnerable.lab:8080": NetworkTarget(
            ip="192.168.1.20",
            ports=(80, 443, 8080, 3306),
            vulnerabilities=(
                Vulnerability(
                    type="XSS",
                    parameter="search",
                    severity="medium",
                    description="Reflected XSS in search bar",
                ),
                Vulnerability(
                    type="Command Injection",
                    parameter="ip",
                    severity="critical",
                    description="OS Command Injection in ping tool",
                ),
            ),
            endpoints={
                "/": '<html><body><h1>Vulnerable Shop</h1><input name="search"></body></html>',
                "/admin": "403 Forbidden",
            },
        ),
    }
)
