from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from blogauth.services.auth.dto import Identity


class IdentityDirectory(Protocol):
    """Port for reading identities from the user store."""

    def get_identity(self, user_id: int) -> Identity | None:
        """Return the identity for ``user_id`` or ``None`` when it does not exist."""


class InMemoryIdentityDirectory(IdentityDirectory):
    """Dictionary-backed directory used in unit tests."""

    def __init__(self, identities: list[Identity] | None = None) -> None:
        self._by_id: dict[int, Identity] = {i.id: i for i in identities or []}

    def add(self, identity: Identity) -> None:
        self._by_id[identity.id] = identity

    def remove(self, user_id: int) -> None:
        self._by_id.pop(user_id, None)

    def get_identity(self, user_id: int) -> Identity | None:
        return self._by_id.get(user_id)
