"""
UserService
===========

Registration of the identities tokens are later issued for.
"""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError

from blogauth.repositories.user import UserRepository
from blogauth.services._shared.base import BaseService
from blogauth.services._shared.errors import ConflictError, violates
from blogauth.services.users.dto import UserPublicOut, UserRegisterIn


class UserService(BaseService):
    """Application service for the ``User`` aggregate."""

    def register(self, dto: UserRegisterIn) -> UserPublicOut:
        """
        Register a new user.

        :param dto: Registration input.
        :returns: Public-safe user DTO.
        :raises ConflictError: If the email is already registered.
        """
        with self.rw_uow() as uow:
            repo: UserRepository = uow.users

            if repo.exists_by_email(dto.email):
                raise ConflictError("User", "email already in use")

            try:
                user = repo.model(email=dto.email, nickname=dto.nickname)
                user.password = dto.password  # model hashes via setter
                repo.add(user)
            except IntegrityError as exc:
                if violates(exc, "uq_users_email"):
                    raise ConflictError("User", "email already in use") from exc
                raise

            return UserPublicOut(id=user.id, email=user.email, nickname=user.nickname)
