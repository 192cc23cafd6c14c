"""Error taxonomy raised by use cases and repositories."""

from __future__ import annotations


class DomainError(ValueError):
    """Base class for errors reported back to the caller of an operation."""


class ValidationError(DomainError):
    """Missing or malformed input."""


class ConflictError(ValidationError):
    """A uniqueness rule would be violated (duplicate email or handle)."""


class NotFoundError(DomainError):
    """The referenced entity does not exist."""


class AuthError(DomainError):
    """Missing or invalid credentials."""


class ServerError(DomainError):
    """Unexpected store or transport failure; details are never exposed."""


__all__ = [
    "AuthError",
    "ConflictError",
    "DomainError",
    "NotFoundError",
    "ServerError",
    "ValidationError",
]
