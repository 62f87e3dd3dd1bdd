from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    def __init__(self, message: str = "Validation failed", errors: Sequence[FieldError] = ()):
        super().__init__(message)
        self.errors = list(errors)


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""

    status_code = 404


class AuthenticationError(DomainError):
    """Raised when credentials or tokens are invalid."""

    status_code = 401


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    status_code = 403


class ConflictError(DomainError):
    """Raised when a write would break a uniqueness rule."""

    status_code = 409


class ServiceUnavailableError(DomainError):
    status_code = 503


class DocumentRenderError(DomainError):
    """Raised when the PDF renderer produces nothing usable."""

    status_code = 500
