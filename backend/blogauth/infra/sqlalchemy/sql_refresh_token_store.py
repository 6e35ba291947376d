# blogauth/infra/sqlalchemy/sql_refresh_token_store.py
from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from blogauth.services._shared.ports import RefreshTokenRecord, RefreshTokenStore
from blogauth.services._shared.ports.refresh_token_store import token_not_found
from blogauth.uow.sqlalchemy_uow import SQLAlchemyReadOnlyUnitOfWork, SQLAlchemyUnitOfWork


@dataclass(slots=True)
class SQLRefreshTokenStore(RefreshTokenStore):
    """
    Refresh token store backed by the ``refresh_tokens`` table.

    Every call runs in its own Unit of Work, so each write is one committed
    transaction. The unique ``user_id`` column plus the dialect upsert keep a
    single row per user under concurrent saves.

    :param rw_uow: Factory for read-write units of work.
    :param ro_uow: Factory for read-only units of work.
    """

    rw_uow: Callable[[], SQLAlchemyUnitOfWork] = field(default=SQLAlchemyUnitOfWork)
    ro_uow: Callable[[], SQLAlchemyReadOnlyUnitOfWork] = field(
        default=SQLAlchemyReadOnlyUnitOfWork
    )

    def find_by_token(self, token: str) -> RefreshTokenRecord:
        with self.ro_uow() as uow:
            row = uow.refresh_tokens.find_by_token(token)
            if row is None:
                raise token_not_found()
            return RefreshTokenRecord(user_id=row.user_id, refresh_token=row.refresh_token)

    def save(self, user_id: int, token: str) -> RefreshTokenRecord:
        with self.rw_uow() as uow:
            uow.refresh_tokens.upsert(user_id, token)
        return RefreshTokenRecord(user_id=user_id, refresh_token=token)

    def delete_by_identity(self, user_id: int) -> None:
        with self.rw_uow() as uow:
            uow.refresh_tokens.delete_by_user_id(user_id)
