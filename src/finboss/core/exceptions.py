"""Custom exception classes for the API.

Services raise these; the error handler middleware turns each one into the
standard ``{"status": "error", "message": ...}`` envelope with the matching
HTTP status code.
"""

from typing import Any


class FinanceError(Exception):
    """Base exception for all application errors.

    Attributes:
        message: User-facing message
        details: Additional context about the error (for logging only)
        http_status: HTTP status code to return (default: 500)
    """

    http_status = 500

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        http_status: int | None = None,
    ):
        self.message = message
        self.details = details or {}
        if http_status is not None:
            self.http_status = http_status
        super().__init__(message)


class ValidationError(FinanceError):
    """Raised when input is missing, malformed or out of range."""

    http_status = 400


class AuthenticationError(FinanceError):
    """Raised for bad credentials and missing, invalid or expired tokens."""

    http_status = 401


class NotFoundError(FinanceError):
    """Raised when a record does not exist or is not owned by the caller."""

    http_status = 404


class ConflictError(FinanceError):
    """Raised when creating a record would duplicate a unique entity."""

    http_status = 409
