"""Response models for the lab API client.

Most models are shared with the API layer and re-exported here so client
code has a single import location.
"""

from pydantic import BaseModel, Field

from api.models import (
    DeleteSessionResponse,
    ErrorResponse,
    ExecuteResponse,
    HistoryResponse,
    SessionListResponse,
    SessionStateResponse,
    TargetListResponse,
    TargetModel,
    TranscriptEntryModel,
    VulnerabilityModel,
)

__all__ = [
    # Re-exported from api.models
    "DeleteSessionResponse",
    "ErrorResponse",
    "ExecuteResponse",
    "HistoryResponse",
    "SessionListResponse",
    "SessionStateResponse",
    "TargetListResponse",
    "TargetModel",
    "TranscriptEntryModel",
    "VulnerabilityModel",
    # Client-specific models
    "HealthResponse",
]


class HealthResponse(BaseModel):
    """Response model for the health check endpoint.

    Attributes:
        status: Server health status ("healthy").
        version: API version string.
    """

    status: str = Field(..., description="Server health status")
    version: str = Field(..., description="API version")
