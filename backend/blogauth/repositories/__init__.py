"""Repository package exposing persistence-layer access for all domain models."""

from __future__ import annotations

from blogauth.repositories.base import BaseRepository
from blogauth.repositories.refresh_token import RefreshTokenRepository
from blogauth.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "RefreshTokenRepository",
    "UserRepository",
]
