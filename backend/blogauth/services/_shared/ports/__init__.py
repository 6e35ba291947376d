"""
blogauth.services._shared.ports
===============================

Collection of *ports* (hexagonal interfaces) that define the contracts for
token signing, refresh-token persistence and identity lookup.

Modules
-------
- :mod:`token_codec`:
    Defines :class:`~.TokenCodec` and the decoded :class:`~.Claims`.

- :mod:`refresh_token_store`:
    Defines :class:`~.RefreshTokenStore` and :class:`~.RefreshTokenRecord`,
    plus the in-memory adapter.

- :mod:`identity_directory`:
    Defines :class:`~.IdentityDirectory`, the read side of the user store.

Concrete adapters (PyJWT, SQLAlchemy, Redis) live under ``blogauth.infra``.
"""

from __future__ import annotations

from .identity_directory import IdentityDirectory, InMemoryIdentityDirectory
from .refresh_token_store import (
    UNEXPECTED_TOKEN,
    InMemoryRefreshTokenStore,
    RefreshTokenRecord,
    RefreshTokenStore,
)
from .token_codec import RESERVED_CLAIMS, Claims, TokenCodec

__all__ = [
    "Claims",
    "IdentityDirectory",
    "InMemoryIdentityDirectory",
    "InMemoryRefreshTokenStore",
    "RESERVED_CLAIMS",
    "RefreshTokenRecord",
    "RefreshTokenStore",
    "TokenCodec",
    "UNEXPECTED_TOKEN",
]
