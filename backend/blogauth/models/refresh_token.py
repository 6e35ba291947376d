"""Refresh token model: one row per user holding the current refresh token."""

from __future__ import annotations

from sqlalchemy import ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from blogauth.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin


class RefreshToken(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Current refresh token of a user.

    Fields
    ------
    user_id : int
        Owner. Unique, so a user never holds two live refresh tokens.
    refresh_token : str
        Encoded token string, matched exactly on lookup. Unique, so a string
        resolves to at most one user.
    """

    __tablename__ = "refresh_tokens"

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    refresh_token: Mapped[str] = mapped_column(String(1024), nullable=False)

    __table_args__ = (Index("ix_refresh_tokens_refresh_token", "refresh_token", unique=True),)

    def update(self, new_token: str) -> RefreshToken:
        """Replace the stored token in place and return ``self``."""
        self.refresh_token = new_token
        return self
