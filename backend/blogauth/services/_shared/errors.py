"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and never import Flask or HTTP
helpers. The translation to HTTP responses (RFC 7807) is handled by
``blogauth/core/errors.py`` via ``BaseService.translate_exceptions()``.

Token taxonomy
--------------
* :class:`MalformedTokenError`, :class:`InvalidSignatureError`,
  :class:`ExpiredTokenError` are raised by the codec while decoding.
* :class:`EncodingError` is raised by the codec while encoding.
* :class:`UnauthenticatedError` collapses decode failures at the
  principal-resolution boundary.
* :class:`InvalidRefreshTokenError` collapses decode and lookup failures at the
  refresh/logout boundary. It never tells the caller which case applied.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint_name: str) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    :param exc: The exception raised by SQLAlchemy during flush/commit.
    :param constraint_name: Constraint name to match (e.g. ``uq_users_email``).
    :returns: ``True`` if the error message mentions the constraint.
    """
    message = str(exc.orig).lower() if exc.orig else ""
    return constraint_name.lower() in message


# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - The API layer translates them to ``APIError`` instances.
    """

    pass


# --------------------------------------------------------------------------- #
# Persistence / identity errors
# --------------------------------------------------------------------------- #


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the repository or store.

    :param entity: Entity name (e.g., "User").
    :param key: Identifier or search key.
    :param message: Optional override for the rendered message.
    """

    entity: str
    key: str | int
    message: str | None = None

    def __str__(self) -> str:
        return self.message or f"{self.entity} not found: {self.key}"


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    Raised when a unique constraint or business rule conflict occurs.

    :param entity: Entity name (e.g., "User").
    :param detail: Short human-readable explanation.
    """

    entity: str
    detail: str

    def __str__(self) -> str:
        return f"Conflict on {self.entity}: {self.detail}"


class UnauthenticatedError(ServiceError):
    """Raised when a credential cannot be resolved to an authenticated principal."""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message)


class InvalidRefreshTokenError(ServiceError):
    """Raised when a refresh token cannot be exchanged or revoked."""

    def __init__(self, message: str = "Invalid refresh token") -> None:
        super().__init__(message)


# --------------------------------------------------------------------------- #
# Token codec errors
# --------------------------------------------------------------------------- #


class TokenError(ServiceError):
    """Base class for codec failures. ``reason`` is a stable log label."""

    reason = "invalid"


class MalformedTokenError(TokenError):
    """The token is structurally invalid or lacks mandatory claims."""

    reason = "malformed"


class InvalidSignatureError(TokenError):
    """The token signature does not match the signing key."""

    reason = "invalid_signature"


class ExpiredTokenError(TokenError):
    """The current time is at or after the token's ``exp`` claim."""

    reason = "expired"


class EncodingError(TokenError):
    """A claim value cannot be represented in a token."""

    reason = "encoding"
