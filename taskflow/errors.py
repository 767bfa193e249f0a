"""Service-level error taxonomy.

Services raise these; the application maps them to JSON responses at the
request boundary (see ``taskflow.main``).
"""

from __future__ import annotations


class TaskFlowError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(TaskFlowError):
    """Missing or malformed input."""

    status_code = 400


class AuthenticationError(TaskFlowError):
    """Missing, invalid or expired credentials."""

    status_code = 401


class AuthorizationError(TaskFlowError):
    """Caller can see the resource but may not perform the action."""

    status_code = 403


class NotFoundError(TaskFlowError):
    """Resource does not exist or is not visible to the caller."""

    status_code = 404


class ConflictError(TaskFlowError):
    """Duplicate email, username or membership."""

    status_code = 400
