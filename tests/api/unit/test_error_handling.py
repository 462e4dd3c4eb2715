"""Unit tests for API error handling.

Tests for the session exception classes and the handlers that convert
exceptions into consistent JSON responses.
"""

import json
from unittest.mock import MagicMock

import pytest
from fastapi import status
from pydantic import BaseModel, ValidationError

from api.exceptions import (
    SessionLimitError,
    SessionNotFoundError,
    generic_exception_handler,
    runtime_error_handler,
    session_limit_handler,
    session_not_found_handler,
    validation_exception_handler,
    value_error_handler,
)


def make_request(path: str = "/sessions") -> MagicMock:
    request = MagicMock()
    request.url.path = path
    return request


def body_of(response) -> dict:
    return json.loads(response.body)


class TestSessionExceptions:
    """Tests for the session exception classes."""

    def test_not_found_stores_id(self):
        exc = SessionNotFoundError("abc")

        assert exc.session_id == "abc"
        assert "abc" in str(exc)

    def test_limit_stores_maximum(self):
        exc = SessionLimitError(7)

        assert exc.max_sessions == 7
        assert "7" in str(exc)

    def test_can_be_raised_and_caught(self):
        with pytest.raises(SessionNotFoundError) as exc_info:
            raise SessionNotFoundError("gone")

        assert exc_info.value.session_id == "gone"


class TestHandlers:
    """Tests for each exception handler."""

    async def test_session_not_found_handler(self):
        response = await session_not_found_handler(make_request(), SessionNotFoundError("abc"))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        body = body_of(response)
        assert body["error"] == "Session Not Found"
        assert body["session_id"] == "abc"
        assert "abc" in body["detail"]

    async def test_session_limit_handler(self):
        response = await session_limit_handler(make_request(), SessionLimitError(3))

        assert response.status_code == status.HTTP_409_CONFLICT
        body = body_of(response)
        assert body["max_sessions"] == 3
        assert "suggestion" in body

    async def test_validation_exception_handler(self):
        class Probe(BaseModel):
            count: int

        with pytest.raises(ValidationError) as exc_info:
            Probe(count="many")

        response = await validation_exception_handler(make_request(), exc_info.value)

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        body = body_of(response)
        assert body["error"] == "Validation Error"
        assert body["validation_errors"][0]["loc"] == ["count"]

    async def test_value_error_handler(self):
        response = await value_error_handler(make_request(), ValueError("bad window"))

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert body_of(response) == {
            "error": "Invalid Value",
            "detail": "bad window",
            "type": "ValueError",
        }

    async def test_runtime_error_handler(self):
        response = await runtime_error_handler(
            make_request(), RuntimeError("SessionRegistry not initialized")
        )

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert body_of(response)["detail"] == "SessionRegistry not initialized"

    async def test_generic_handler_hides_details(self):
        response = await generic_exception_handler(
            make_request("/sessions/x/execute"), KeyError("internal secret")
        )

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        body = body_of(response)
        assert body["detail"] == "An unexpected error occurred"
        assert body["type"] == "KeyError"
        assert "secret" not in json.dumps(body)
