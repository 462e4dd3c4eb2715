"""Utility functions for API route handlers.

This module contains helpers shared by the session route handlers.
"""

from typing import Optional

from api.models import ExecuteResponse, SessionStateResponse
from models.result import CommandResult, ResultType
from models.session import LabSession
from models.terminal import CLEAR_COMMAND


def build_session_state(session: LabSession) -> SessionStateResponse:
    """Convert a session snapshot into its response model.

    Args:
        session: The session to describe.

    Returns:
        SessionStateResponse for the session.
    """
    return SessionStateResponse(**session.get_snapshot())


async def submit_command(session: LabSession, command: str) -> ExecuteResponse:
    """Submit a line to a session's terminal and describe the outcome.

    Blank lines and "clear" are handled by the terminal without reaching
    the engine; they come back with executed=False.

    Args:
        session: Target session.
        command: Raw command line.

    Returns:
        ExecuteResponse carrying the result and the prompt that follows it.
    """
    terminal = session.terminal
    stripped = command.strip()
    result: Optional[CommandResult] = await terminal.submit(command)

    if result is None:
        return ExecuteResponse(
            command=stripped,
            output="",
            type=ResultType.INFO.value,
            executed=False,
            cleared=stripped == CLEAR_COMMAND,
            prompt=terminal.prompt,
            current_path=session.processor.fs.get_current_path(),
        )

    return ExecuteResponse(
        command=stripped,
        output=result.output,
        type=result.type.value,
        executed=True,
        prompt=terminal.prompt,
        current_path=session.processor.fs.get_current_path(),
    )
