"""Shared request and response models for API endpoints.

This module contains the models used by the session and target route
handlers and re-used by the client library.
"""

from typing import Any, Literal

from pydantic import BaseModel, Field


class TranscriptEntryModel(BaseModel):
    """One block of terminal output.

    Attributes:
        command: The line that produced this output ("" for banners).
        output: Displayed text.
        type: Presentation category ("success", "error", "info", "warning").
        timestamp: ISO format time the output was produced.
    """

    command: str
    output: str
    type: str
    timestamp: str


class SessionStateResponse(BaseModel):
    """Snapshot of a lab session.

    Attributes:
        session_id: Unique identifier of the session.
        created_at: ISO format creation time.
        prompt: Current shell prompt.
        current_path: Absolute current directory.
        busy: Whether a command is in flight.
        history_size: Number of executed command lines.
        transcript: Output blocks currently on screen.
    """

    session_id: str
    created_at: str
    prompt: str
    current_path: str
    busy: bool
    history_size: int
    transcript: list[TranscriptEntryModel]


class SessionListResponse(BaseModel):
    """IDs of all active sessions.

    Attributes:
        session_ids: Active session IDs.
        count: Number of active sessions.
        max_sessions: Configured maximum.
    """

    session_ids: list[str]
    count: int
    max_sessions: int


class ExecuteRequest(BaseModel):
    """A line typed at the lab prompt.

    Attributes:
        command: Raw command line.
    """

    command: str = Field(..., max_length=4096, description="Raw command line")


class ExecuteResponse(BaseModel):
    """Result of submitting a line to the terminal.

    Attributes:
        command: The submitted line, stripped.
        output: Text produced by the command.
        type: Presentation category.
        executed: False for blank lines and "clear", which never reach the engine.
        cleared: True when the line cleared the transcript.
        prompt: Prompt to show after the command.
        current_path: Current directory after the command.
    """

    command: str
    output: str
    type: str
    executed: bool
    cleared: bool = False
    prompt: str
    current_path: str


class HistoryResponse(BaseModel):
    """A recalled history entry.

    Attributes:
        direction: Direction the cursor moved.
        entry: Recalled line ("" past the newest entry).
    """

    direction: Literal["up", "down"]
    entry: str


class DeleteSessionResponse(BaseModel):
    """Confirmation of a deleted session."""

    deleted: bool
    session_id: str


class VulnerabilityModel(BaseModel):
    """A planted vulnerability on a target."""

    type: str
    parameter: str
    severity: str
    description: str


class TargetModel(BaseModel):
    """A simulated host.

    Attributes:
        host: Canonical URL the host is registered under.
        ip: IPv4 address.
        ports: Open TCP ports.
        vulnerabilities: Planted vulnerabilities.
        endpoints: Paths with canned responses.
    """

    host: str
    ip: str
    ports: list[int]
    vulnerabilities: list[VulnerabilityModel]
    endpoints: list[str]


class TargetListResponse(BaseModel):
    """All registered targets."""

    targets: list[TargetModel]
    count: int


class ErrorResponse(BaseModel):
    """Standard error response model.

    Attributes:
        error: Error type or code.
        detail: Human-readable error message.
        type: Exception type name, if any.
    """

    error: str
    detail: str
    type: str | None = None
    details: dict[str, Any] | None = None
