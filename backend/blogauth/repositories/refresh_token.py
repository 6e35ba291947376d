"""Refresh token repository: one row per user, matched by exact token string."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, cast

from sqlalchemy import delete, func, select
from sqlalchemy.dialects import postgresql, sqlite

from blogauth.models.refresh_token import RefreshToken
from blogauth.repositories.base import BaseRepository

# Dialects offering INSERT ... ON CONFLICT DO UPDATE
_UPSERT_INSERTS: dict[str, Callable[..., Any]] = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class RefreshTokenRepository(BaseRepository[RefreshToken]):
    """Persistence-only repository for :class:`RefreshToken`."""

    model = RefreshToken

    def find_by_token(self, token: str) -> RefreshToken | None:
        stmt = select(RefreshToken).where(RefreshToken.refresh_token == token).limit(1)
        return cast(RefreshToken | None, self.session.execute(stmt).scalars().first())

    def find_by_user_id(self, user_id: int, *, for_update: bool = False) -> RefreshToken | None:
        stmt = select(RefreshToken).where(RefreshToken.user_id == user_id)
        if for_update:
            stmt = stmt.with_for_update()
        return cast(RefreshToken | None, self.session.execute(stmt).scalars().first())

    def upsert(self, user_id: int, token: str) -> None:
        """
        Insert or replace the token of ``user_id`` in a single statement.

        Dialects without ``ON CONFLICT`` fall back to a locked read followed by
        an update or insert in the caller's transaction. A token string held
        by another user is taken over: the last writer owns it.

        :param user_id: Owner user id.
        :param token: Encoded refresh token.
        """
        self.session.execute(
            delete(RefreshToken).where(
                RefreshToken.refresh_token == token,
                RefreshToken.user_id != user_id,
            )
        )
        dialect = self.session.get_bind().dialect.name
        insert = _UPSERT_INSERTS.get(dialect)
        if insert is None:
            existing = self.find_by_user_id(user_id, for_update=True)
            if existing is not None:
                existing.update(token)
            else:
                self.session.add(RefreshToken(user_id=user_id, refresh_token=token))
            self.flush()
            return

        stmt = insert(RefreshToken).values(user_id=user_id, refresh_token=token)
        stmt = stmt.on_conflict_do_update(
            index_elements=["user_id"],
            set_={"refresh_token": stmt.excluded.refresh_token, "updated_at": func.now()},
        )
        self.session.execute(stmt)

    def delete_by_user_id(self, user_id: int) -> int:
        """Delete the row of ``user_id``. :returns: Number of rows removed."""
        result = self.session.execute(delete(RefreshToken).where(RefreshToken.user_id == user_id))
        return int(result.rowcount or 0)
