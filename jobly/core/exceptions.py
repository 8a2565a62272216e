"""Custom exception hierarchy for backend layers."""

from __future__ import annotations

from typing import Union

ErrorMessage = Union[str, list[str]]


class JoblyError(Exception):
    """Base application exception.

    Every subclass carries the HTTP status it maps to at the API boundary.
    """

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: ErrorMessage | None = None):
        self.message: ErrorMessage = (
            message if message is not None else self.default_message
        )
        super().__init__(
            self.message if isinstance(self.message, str) else "; ".join(self.message)
        )


class InvalidInputError(JoblyError):
    """Raised when caller-supplied data is missing or malformed."""

    status_code = 400
    default_message = "Bad Request"


class UnauthorizedError(JoblyError):
    """Raised when an authorization stage rejects the caller."""

    status_code = 401
    default_message = "Unauthorized"


class NotFoundError(JoblyError):
    """Raised when a requested resource does not exist."""

    status_code = 404
    default_message = "Not Found"


class RepositoryError(JoblyError):
    """Raised when repository data access fails."""


class DuplicateError(RepositoryError):
    """Raised when a duplicate record violates a unique constraint."""


__all__ = [
    "DuplicateError",
    "ErrorMessage",
    "InvalidInputError",
    "JoblyError",
    "NotFoundError",
    "RepositoryError",
    "UnauthorizedError",
]
