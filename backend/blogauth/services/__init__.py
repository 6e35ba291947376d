"""Service layer public API.

Re-exports
----------
- Base primitive: :class:`BaseService`
- Token use cases: :class:`AccessTokenIssuer`, :class:`TokenRefreshService`,
  :class:`LoginService`
- Accounts: :class:`UserService`
"""

from __future__ import annotations

from ._shared.base import BaseService
from .auth import AccessTokenIssuer, LoginService, TokenRefreshService
from .users import UserService

__all__ = [
    "AccessTokenIssuer",
    "BaseService",
    "LoginService",
    "TokenRefreshService",
    "UserService",
]
