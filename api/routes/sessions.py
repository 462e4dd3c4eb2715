"""Lab session endpoints.

These endpoints are the terminal surface over HTTP: creating and resetting
lab sessions, submitting command lines, and recalling history. The UI never
reaches into the filesystem or network simulator directly.
"""

from typing import Literal

from fastapi import APIRouter, Query

from api.dependencies import SessionRegistryDep
from api.models import (
    DeleteSessionResponse,
    ErrorResponse,
    ExecuteRequest,
    ExecuteResponse,
    HistoryResponse,
    SessionListResponse,
    SessionStateResponse,
)
from api.utils import build_session_state, submit_command

SESSION_NOT_FOUND = {404: {"model": ErrorResponse, "description": "Unknown session ID"}}
SESSION_LIMIT = {409: {"model": ErrorResponse, "description": "Session limit reached"}}

router = APIRouter(
    prefix="/sessions",
    tags=["sessions"],
)


@router.post(
    "", response_model=SessionStateResponse, status_code=201, responses=SESSION_LIMIT
)
async def create_session(registry: SessionRegistryDep):
    """Create a new lab session.

    The session starts in /home/operator with the welcome banner on screen.

    Returns:
        SessionStateResponse: Snapshot of the new session.

    Raises:
        SessionLimitError: If the maximum number of sessions is reached (409).
    """
    session = registry.create()
    return build_session_state(session)


@router.get("", response_model=SessionListResponse)
async def list_sessions(registry: SessionRegistryDep):
    """List active session IDs.

    Returns:
        SessionListResponse: Active session IDs and the configured limit.
    """
    session_ids = registry.list_ids()
    return SessionListResponse(
        session_ids=session_ids,
        count=len(session_ids),
        max_sessions=registry.max_sessions,
    )


@router.get("/{session_id}", response_model=SessionStateResponse, responses=SESSION_NOT_FOUND)
async def get_session(session_id: str, registry: SessionRegistryDep):
    """Get the current state of a session.

    Returns:
        SessionStateResponse: Prompt, current directory, busy flag and transcript.
    """
    return build_session_state(registry.get(session_id))


@router.delete("/{session_id}", response_model=DeleteSessionResponse, responses=SESSION_NOT_FOUND)
async def delete_session(session_id: str, registry: SessionRegistryDep):
    """Delete a session and discard its environment."""
    registry.delete(session_id)
    return DeleteSessionResponse(deleted=True, session_id=session_id)


@router.post("/{session_id}/execute", response_model=ExecuteResponse, responses=SESSION_NOT_FOUND)
async def execute_command(
    session_id: str, request: ExecuteRequest, registry: SessionRegistryDep
):
    """Submit a command line to the session's terminal.

    Command failures (unknown verbs, missing files, unreachable hosts) are
    reported in the body with type "error", not as HTTP errors.

    Args:
        session_id: Target session.
        request: The command line.
        registry: The session registry dependency.

    Returns:
        ExecuteResponse: The command's output and the prompt that follows it.
    """
    session = registry.get(session_id)
    return await submit_command(session, request.command)


@router.get("/{session_id}/history", response_model=HistoryResponse, responses=SESSION_NOT_FOUND)
async def recall_history(
    session_id: str,
    registry: SessionRegistryDep,
    direction: Literal["up", "down"] = Query(default="up"),
):
    """Move the history cursor and return the entry it lands on.

    Nothing is executed; the entry is meant for the input buffer.
    """
    session = registry.get(session_id)
    entry = session.terminal.recall(direction)
    return HistoryResponse(direction=direction, entry=entry)


@router.post("/{session_id}/reset", response_model=SessionStateResponse, responses=SESSION_NOT_FOUND)
async def reset_session(session_id: str, registry: SessionRegistryDep):
    """Replace the session's environment with a fresh one.

    The session keeps its ID; filesystem, history and transcript start over.
    """
    session = registry.reset(session_id)
    return build_session_state(session)
