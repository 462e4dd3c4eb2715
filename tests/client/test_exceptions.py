"""Unit tests for the lab client exception hierarchy."""

import pytest

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


class TestHierarchy:
    """Every client exception derives from LabClientError."""

    @pytest.mark.parametrize(
        "exc",
        [
            ConnectionError("down"),
            TimeoutError("slow"),
            APIError("bad", status_code=400),
            ValidationError("invalid"),
            NotFoundError("missing"),
            ConflictError("full"),
            ServerError("boom"),
        ],
    )
    def test_base_class(self, exc):
        assert isinstance(exc, LabClientError)

    @pytest.mark.parametrize(
        "exc_class,status_code",
        [(ValidationError, 422), (NotFoundError, 404), (ConflictError, 409)],
    )
    def test_fixed_status_codes(self, exc_class, status_code):
        exc = exc_class("message")

        assert isinstance(exc, APIError)
        assert exc.status_code == status_code

    def test_server_error_status(self):
        assert ServerError("boom").status_code == 500
        assert ServerError("gateway", status_code=502).status_code == 502

    def test_not_builtin_exceptions(self):
        """Test that the client's ConnectionError does not shadow the builtin."""
        assert not isinstance(ConnectionError("x"), OSError)


class TestStringFormatting:
    """Tests for __str__ on each exception."""

    def test_base(self):
        assert str(LabClientError("plain")) == "plain"

    def test_connection_with_url(self):
        exc = ConnectionError("Failed to connect", url="http://lab.test/health")

        assert str(exc) == "Failed to connect (url: http://lab.test/health)"

    def test_timeout_with_details(self):
        exc = TimeoutError("Timed out", timeout=5.0, url="http://lab.test")

        assert str(exc) == "Timed out (timeout: 5.0s, url: http://lab.test)"

    def test_timeout_without_details(self):
        assert str(TimeoutError("Timed out")) == "Timed out"

    def test_api_error(self):
        assert str(APIError("nope", status_code=400)) == "[HTTP 400] nope"

    def test_api_error_with_type(self):
        exc = NotFoundError("The session 'abc' does not exist")

        assert str(exc) == "[HTTP 404] [not_found] The session 'abc' does not exist"
