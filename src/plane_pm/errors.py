"""Error types for Plane PM.

Backend failures are classified by HTTP status into one of four kinds.
Semantic failures (bad ticket format, unknown state, ticket not found) reuse
the same classes so front ends can render every error the same way.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    """Category of a Plane error, selected by HTTP status."""

    AUTHENTICATION = "authentication"
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    BACKEND = "backend"


def classify(status: int) -> ErrorKind:
    """Map an HTTP status to its error kind."""
    return {
        401: ErrorKind.AUTHENTICATION,
        404: ErrorKind.NOT_FOUND,
        422: ErrorKind.VALIDATION,
    }.get(status, ErrorKind.BACKEND)


class PlaneError(Exception):
    """Raised when a Plane API call fails."""

    kind = ErrorKind.BACKEND

    def __init__(self, message: str, status: int, response: Any = None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.response = response


class AuthenticationError(PlaneError):
    """Raised when Plane credentials are missing or rejected."""

    kind = ErrorKind.AUTHENTICATION

    def __init__(
        self,
        message: str = "Authentication failed",
        suggestions: list[str] | None = None,
    ):
        super().__init__(message, 401, {"message": message})
        self.suggestions = suggestions or []


class NotFoundError(PlaneError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, resource: str):
        super().__init__(resource, 404, {"message": f"{resource} not found"})


class ValidationError(PlaneError):
    kind = ErrorKind.VALIDATION

    def __init__(self, message: str, details: Any = None):
        super().__init__(message, 422, details)


class TransportError(PlaneError):
    """Raised when the request never produced an HTTP response."""

    def __init__(self, message: str):
        super().__init__(message, 0, None)


class ConfigError(PlaneError):
    """Raised when a Plane config file cannot be read."""

    def __init__(self, path: Any, reason: str):
        super().__init__(f"Cannot read {path}: {reason}", 0, None)
        self.path = path


class InvalidTicketFormatError(ValidationError):
    """Raised when a ticket ID does not look like SBS-123."""

    def __init__(self, ticket_id: str):
        super().__init__(
            f"Invalid ticket ID format: {ticket_id}. Expected format like SBS-123"
        )
        self.ticket_id = ticket_id


class InvalidStateError(ValidationError):
    """Raised when a state name is not mapped for the project."""

    def __init__(self, state: str, project: str, valid_states: list[str]):
        super().__init__(
            f'Invalid state "{state}" for project {project}. '
            f"Valid states: {', '.join(valid_states)}"
        )
        self.state = state
        self.project = project
        self.valid_states = list(valid_states)


class UnknownProjectError(ValidationError):
    def __init__(self, project: str, known: list[str]):
        super().__init__(
            f"Unknown project: {project}. Known projects: {', '.join(known)}"
        )
        self.project = project


class TicketNotFoundError(NotFoundError):
    def __init__(self, ticket_id: str):
        super().__init__(f"Ticket {ticket_id}")
        self.ticket_id = ticket_id


def create_error(status: int, body: Optional[Any]) -> PlaneError:
    """Build the error matching an HTTP status and its parsed body."""
    message = None
    if isinstance(body, dict):
        message = body.get("message") or body.get("detail")
    message = str(message) if message else "Plane API error"

    kind = classify(status)
    if kind is ErrorKind.VALIDATION:
        return ValidationError(message, body)
    if kind is ErrorKind.BACKEND:
        return PlaneError(message, status, body)

    error = AuthenticationError(message) if kind is ErrorKind.AUTHENTICATION else NotFoundError(message)
    # Keep the backend payload rather than the synthesized one.
    error.response = body
    return error


def format_error(error: PlaneError) -> str:
    """Render an error as a single human-readable message."""
    if error.kind is ErrorKind.NOT_FOUND:
        return f"Not Found: {error.message}"
    if error.kind is ErrorKind.AUTHENTICATION:
        return f"Authentication Failed: {error.message}"
    if error.kind is ErrorKind.VALIDATION:
        message = f"Validation Error: {error.message}"
        if error.response:
            message += f"\nDetails: {json.dumps(error.response, default=str)}"
        return message
    if isinstance(error, ConfigError):
        return f"Configuration Error: {error.message}"
    return f"Plane API Error: {error.message}"
