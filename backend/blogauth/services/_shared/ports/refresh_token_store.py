from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Protocol

from blogauth.services._shared.errors import NotFoundError

UNEXPECTED_TOKEN = "Unexpected token"


@dataclass(frozen=True, slots=True)
class RefreshTokenRecord:
    """
    Read-model for the refresh token currently held by a user.

    :ivar user_id: Owner user id.
    :ivar refresh_token: Encoded refresh token string.
    """

    user_id: int
    refresh_token: str


def token_not_found() -> NotFoundError:
    """Build the error raised when no record matches a presented token."""
    # Key is a placeholder so the token itself never reaches logs
    return NotFoundError("RefreshToken", "<token>", UNEXPECTED_TOKEN)


class RefreshTokenStore(Protocol):
    """
    Store holding **one** refresh token per user.

    ``save`` and ``delete_by_identity`` MUST be atomic with respect to
    concurrent calls for the same user.
    """

    def find_by_token(self, token: str) -> RefreshTokenRecord:
        """
        Exact-string lookup.

        :raises NotFoundError: ``"Unexpected token"`` when nothing matches.
        """

    def save(self, user_id: int, token: str) -> RefreshTokenRecord:
        """Insert or overwrite the record for ``user_id``."""

    def delete_by_identity(self, user_id: int) -> None:
        """Remove the record for ``user_id``. Missing records are not an error."""


class InMemoryRefreshTokenStore(RefreshTokenStore):
    """
    In-memory refresh token store.

    .. note::
       A threading lock keeps both indexes consistent under concurrent writers.
    """

    def __init__(self) -> None:
        self._by_user: dict[int, str] = {}
        self._by_token: dict[str, int] = {}
        self._lock = threading.Lock()

    def find_by_token(self, token: str) -> RefreshTokenRecord:
        with self._lock:
            user_id = self._by_token.get(token)
        if user_id is None:
            raise token_not_found()
        return RefreshTokenRecord(user_id=user_id, refresh_token=token)

    def save(self, user_id: int, token: str) -> RefreshTokenRecord:
        with self._lock:
            previous = self._by_user.get(user_id)
            if previous is not None:
                self._by_token.pop(previous, None)
            # A token string belongs to a single user
            other = self._by_token.get(token)
            if other is not None and other != user_id:
                self._by_user.pop(other, None)
            self._by_user[user_id] = token
            self._by_token[token] = user_id
        return RefreshTokenRecord(user_id=user_id, refresh_token=token)

    def delete_by_identity(self, user_id: int) -> None:
        with self._lock:
            token = self._by_user.pop(user_id, None)
            if token is not None:
                self._by_token.pop(token, None)

    def __len__(self) -> int:
        return len(self._by_user)
