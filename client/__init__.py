"""Lab API Client Library.

A typed Python client for the Virtual Lab Engine REST API, in synchronous
and asynchronous flavours.

Example:
    Synchronous usage::

        from client import LabClient

        with LabClient(base_url="http://localhost:8000") as client:
            session = client.sessions.create()
            result = client.sessions.execute(session.session_id, "nmap 192.168.1.10")
            print(result.output)

Exports:
    LabClient: Synchronous client.
    AsyncLabClient: Asynchronous client.

    Exceptions:
        LabClientError: Base exception for all client errors.
        ConnectionError: Failed to connect to the server.
        TimeoutError: Request timed out.
        APIError: Server returned an error response.
        ValidationError: Request validation failed (HTTP 422).
        NotFoundError: Session not found (HTTP 404).
        ConflictError: Session limit reached (HTTP 409).
        ServerError: Server-side error (HTTP 5xx).
"""

from client._sessions import AsyncSessionsClient, SessionsClient
from client._targets import AsyncTargetsClient, TargetsClient
from client.client import AsyncLabClient, LabClient
from client.exceptions import (
    APIError,
    ConflictError,
    ConnectionError,
    LabClientError,
    NotFoundError,
    ServerError,
    TimeoutError,
    ValidationError,
)
from client.models import (
    DeleteSessionResponse,
    ExecuteResponse,
    HealthResponse,
    HistoryResponse,
    SessionListResponse,
    SessionStateResponse,
    TargetListResponse,
    TargetModel,
    TranscriptEntryModel,
)

__all__ = [
    # Main clients
    "LabClient",
    "AsyncLabClient",
    # Sub-clients
    "SessionsClient",
    "AsyncSessionsClient",
    "TargetsClient",
    "AsyncTargetsClient",
    # Exceptions
    "LabClientError",
    "ConnectionError",
    "TimeoutError",
    "APIError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "ServerError",
    # Response models
    "DeleteSessionResponse",
    "ExecuteResponse",
    "HealthResponse",
    "HistoryResponse",
    "SessionListResponse",
    "SessionStateResponse",
    "TargetListResponse",
    "TargetModel",
    "TranscriptEntryModel",
]
