# blogauth/infra/sqlalchemy/sql_identity_directory.py
from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from blogauth.services._shared.ports import IdentityDirectory
from blogauth.services.auth.dto import Identity
from blogauth.uow.sqlalchemy_uow import SQLAlchemyReadOnlyUnitOfWork


@dataclass(slots=True)
class SQLIdentityDirectory(IdentityDirectory):
    """Read identities from the ``users`` table."""

    ro_uow: Callable[[], SQLAlchemyReadOnlyUnitOfWork] = field(
        default=SQLAlchemyReadOnlyUnitOfWork
    )

    def get_identity(self, user_id: int) -> Identity | None:
        with self.ro_uow() as uow:
            user = uow.users.get(user_id)
            if user is None:
                return None
            return Identity(id=user.id, email=user.email)
