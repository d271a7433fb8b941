"""Tests for the Plane error taxonomy."""

import pytest

from plane_pm.errors import (
    AuthenticationError,
    ConfigError,
    ErrorKind,
    InvalidStateError,
    InvalidTicketFormatError,
    NotFoundError,
    PlaneError,
    TicketNotFoundError,
    TransportError,
    ValidationError,
    classify,
    create_error,
    format_error,
)


class TestClassify:
    """Tests for classify."""

    @pytest.mark.parametrize("status,kind", [
        (401, ErrorKind.AUTHENTICATION),
        (404, ErrorKind.NOT_FOUND),
        (422, ErrorKind.VALIDATION),
        (400, ErrorKind.BACKEND),
        (403, ErrorKind.BACKEND),
        (500, ErrorKind.BACKEND),
    ])
    def test_status_to_kind(self, status, kind):
        assert classify(status) is kind


class TestCreateError:
    """Tests for create_error."""

    def test_auth_error(self):
        error = create_error(401, {"detail": "Invalid API key"})
        assert isinstance(error, AuthenticationError)
        assert error.status == 401
        assert error.message == "Invalid API key"
        assert error.response == {"detail": "Invalid API key"}

    def test_not_found(self):
        error = create_error(404, {"message": "Issue not found"})
        assert isinstance(error, NotFoundError)
        assert error.status == 404

    def test_validation_keeps_field_details(self):
        body = {"message": "Invalid data", "name": ["This field is required."]}
        error = create_error(422, body)
        assert isinstance(error, ValidationError)
        assert error.status == 422
        assert error.response == body

    def test_other_status_is_generic(self):
        error = create_error(500, {"detail": "boom"})
        assert type(error) is PlaneError
        assert error.status == 500
        assert error.response == {"detail": "boom"}
        assert error.kind is ErrorKind.BACKEND

    def test_message_prefers_message_over_detail(self):
        error = create_error(400, {"message": "first", "detail": "second"})
        assert error.message == "first"

    def test_default_message_without_body(self):
        error = create_error(503, None)
        assert error.message == "Plane API error"
        assert error.response is None

    def test_non_dict_body(self):
        error = create_error(400, ["bad"])
        assert error.message == "Plane API error"
        assert error.response == ["bad"]


class TestSemanticErrors:
    """Tests for locally raised errors."""

    def test_invalid_ticket_format(self):
        error = InvalidTicketFormatError("sbs-1")
        assert isinstance(error, ValidationError)
        assert error.status == 422
        assert "sbs-1" in str(error)

    def test_ticket_not_found(self):
        error = TicketNotFoundError("SBS-999")
        assert isinstance(error, NotFoundError)
        assert error.ticket_id == "SBS-999"
        assert error.status == 404

    def test_transport_error_is_backend_kind(self):
        error = TransportError("connection refused")
        assert error.kind is ErrorKind.BACKEND
        assert error.status == 0


class TestFormatError:
    """Tests for format_error."""

    def test_not_found(self):
        assert format_error(TicketNotFoundError("SBS-999")) == "Not Found: Ticket SBS-999"

    def test_auth(self):
        error = AuthenticationError("PLANE_API_KEY environment variable is not set")
        assert format_error(error) == (
            "Authentication Failed: PLANE_API_KEY environment variable is not set"
        )

    def test_validation_with_details(self):
        error = create_error(422, {"message": "Bad", "name": ["required"]})
        text = format_error(error)
        assert text.startswith("Validation Error: Bad")
        assert '\nDetails: {"message": "Bad", "name": ["required"]}' in text

    def test_validation_without_details(self):
        error = InvalidStateError("Nope", "SBS", ["Todo", "Done"])
        assert format_error(error) == (
            'Validation Error: Invalid state "Nope" for project SBS. Valid states: Todo, Done'
        )

    def test_generic(self):
        assert format_error(create_error(500, {"detail": "boom"})) == "Plane API Error: boom"

    def test_single_line_except_validation_details(self):
        assert "\n" not in format_error(create_error(403, {"detail": "Forbidden"}))

    def test_config_error(self):
        error = ConfigError("/repo/.plane/config.json", "Expecting value")
        assert format_error(error) == (
            "Configuration Error: Cannot read /repo/.plane/config.json: Expecting value"
        )
