from .dto import (
    AuthenticatedPrincipal,
    Identity,
    LoginIn,
    RefreshIn,
    TokenConfig,
    TokenPairOut,
)
from .issuer import AccessTokenIssuer
from .login import LoginService
from .service import TokenRefreshService

__all__ = [
    "AccessTokenIssuer",
    "AuthenticatedPrincipal",
    "Identity",
    "LoginIn",
    "LoginService",
    "RefreshIn",
    "TokenConfig",
    "TokenPairOut",
    "TokenRefreshService",
]
