"""Exception handlers for the lab FastAPI application.

This module defines custom exception handlers that convert Python exceptions
into consistent, user-friendly JSON responses.

Command errors never reach these handlers: the CommandProcessor turns them
into error results. Only session bookkeeping and request problems do.
"""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from models.session import SessionLimitError, SessionNotFoundError

logger = logging.getLogger(__name__)

__all__ = [
    "SessionLimitError",
    "SessionNotFoundError",
    "session_not_found_handler",
    "session_limit_handler",
    "validation_exception_handler",
    "value_error_handler",
    "runtime_error_handler",
    "generic_exception_handler",
]


async def session_not_found_handler(request: Request, exc: SessionNotFoundError):
    """Handle SessionNotFoundError exceptions.

    Returns a 404 naming the session that was requested.

    Args:
        request: The incoming request that triggered the error.
        exc: The SessionNotFoundError exception.

    Returns:
        JSONResponse with 404 status.
    """
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={
            "error": "Session Not Found",
            "detail": f"The session '{exc.session_id}' does not exist",
            "session_id": exc.session_id,
        },
    )


async def session_limit_handler(request: Request, exc: SessionLimitError):
    """Handle SessionLimitError exceptions.

    Returns a 409 (Conflict) since the registry is full until a session is
    deleted.

    Args:
        request: The incoming request that triggered the error.
        exc: The SessionLimitError exception.

    Returns:
        JSONResponse with 409 status.
    """
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={
            "error": "Session Limit Reached",
            "detail": str(exc),
            "max_sessions": exc.max_sessions,
            "suggestion": "Delete an existing session with DELETE /sessions/{session_id}",
        },
    )


async def validation_exception_handler(request: Request, exc: ValidationError):
    """Handle Pydantic validation errors raised outside request parsing.

    Args:
        request: The incoming request that triggered the error.
        exc: The ValidationError exception.

    Returns:
        JSONResponse with validation error details.
    """
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "Validation Error",
            "detail": "The request data failed validation",
            "validation_errors": exc.errors(include_url=False),
        },
    )


async def value_error_handler(request: Request, exc: ValueError):
    """Handle ValueError exceptions.

    Args:
        request: The incoming request that triggered the error.
        exc: The ValueError exception.

    Returns:
        JSONResponse with 400 status.
    """
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "Invalid Value",
            "detail": str(exc),
            "type": "ValueError",
        },
    )


async def runtime_error_handler(request: Request, exc: RuntimeError):
    """Handle RuntimeError exceptions.

    Args:
        request: The incoming request that triggered the error.
        exc: The RuntimeError exception.

    Returns:
        JSONResponse with 500 status.
    """
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Runtime Error",
            "detail": str(exc),
            "type": "RuntimeError",
        },
    )


async def generic_exception_handler(request: Request, exc: Exception):
    """Handle any unhandled exceptions.

    Logs the traceback and returns a generic 500 so stack traces are never
    exposed to clients.

    Args:
        request: The incoming request that triggered the error.
        exc: The exception that was raised.

    Returns:
        JSONResponse with generic error message.
    """
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=exc)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal Server Error",
            "detail": "An unexpected error occurred",
            "type": type(exc).__name__,
        },
    )
