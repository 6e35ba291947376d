# blogauth/services/users/dto.py
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class UserRegisterIn:
    """
    Input DTO for registration.

    :param email: Login email (normalized by the model).
    :param password: Raw password; hashed by the model setter.
    :param nickname: Optional display name.
    """

    email: str
    password: str
    nickname: str | None = None


@dataclass(frozen=True, slots=True)
class UserPublicOut:
    """Public-safe view of a user."""

    id: int
    email: str
    nickname: str | None
