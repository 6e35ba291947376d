"""Token services wiring: codec, issuer, refresh store and use-case services."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import cast

from flask import Flask, current_app

from blogauth.core.config import REFRESH_TOKEN_STORES
from blogauth.services._shared.ports import (
    IdentityDirectory,
    InMemoryRefreshTokenStore,
    RefreshTokenStore,
    TokenCodec,
)
from blogauth.services.auth.dto import TokenConfig
from blogauth.services.auth.issuer import AccessTokenIssuer
from blogauth.services.auth.login import LoginService
from blogauth.services.auth.service import TokenRefreshService
from blogauth.services.users.service import UserService

log = logging.getLogger(__name__)

EXTENSION_KEY = "token_services"


@dataclass(frozen=True, slots=True)
class TokenServices:
    """Process-wide collaborators shared by every request."""

    config: TokenConfig
    codec: TokenCodec
    issuer: AccessTokenIssuer
    store: RefreshTokenStore
    identities: IdentityDirectory
    refresh: TokenRefreshService
    login: LoginService
    users: UserService


def token_config_from(app: Flask) -> TokenConfig:
    """Read :class:`TokenConfig` from the Flask config."""
    return TokenConfig(
        issuer=app.config["JWT_ISSUER"],
        secret_key=app.config["JWT_SECRET_KEY"],
        access_lifetime=app.config["ACCESS_TOKEN_LIFETIME"],
        refresh_lifetime=app.config["REFRESH_TOKEN_LIFETIME"],
    )


def build_refresh_store(kind: str, cfg: TokenConfig) -> RefreshTokenStore:
    """
    Build the refresh token store named by ``kind``.

    :param kind: One of ``sqlalchemy``, ``redis`` or ``memory``.
    :param cfg: Token settings; the refresh lifetime bounds Redis key expiry.
    :raises ValueError: If ``kind`` is not a supported backend.
    """
    if kind not in REFRESH_TOKEN_STORES:
        raise ValueError(
            f"Unknown REFRESH_TOKEN_STORE {kind!r}; expected one of {sorted(REFRESH_TOKEN_STORES)}"
        )
    if kind == "redis":
        from blogauth.core.extensions import get_redis
        from blogauth.infra.redis.redis_refresh_token_store import RedisRefreshTokenStore

        return RedisRefreshTokenStore(get_redis(), ttl=cfg.refresh_lifetime)
    if kind == "memory":
        return InMemoryRefreshTokenStore()

    from blogauth.infra.sqlalchemy.sql_refresh_token_store import SQLRefreshTokenStore

    return SQLRefreshTokenStore()


def init_app(app: Flask) -> None:
    """Build the token services once and register them on ``app.extensions``."""
    from blogauth.infra.jwt.pyjwt_token_codec import PyJWTTokenCodec
    from blogauth.infra.sqlalchemy.sql_identity_directory import SQLIdentityDirectory

    cfg = token_config_from(app)
    kind = str(app.config.get("REFRESH_TOKEN_STORE", "sqlalchemy")).strip().lower()

    codec = PyJWTTokenCodec()
    issuer = AccessTokenIssuer(codec=codec, config=cfg)
    store = build_refresh_store(kind, cfg)
    identities = SQLIdentityDirectory()

    app.extensions[EXTENSION_KEY] = TokenServices(
        config=cfg,
        codec=codec,
        issuer=issuer,
        store=store,
        identities=identities,
        refresh=TokenRefreshService(
            codec=codec,
            issuer=issuer,
            store=store,
            identities=identities,
            config=cfg,
        ),
        login=LoginService(issuer=issuer, store=store, config=cfg),
        users=UserService(),
    )
    log.info("token_services.ready", extra={"store": kind})


def get_token_services() -> TokenServices:
    """Return the token services of the current application."""
    try:
        return cast(TokenServices, current_app.extensions[EXTENSION_KEY])
    except KeyError as exc:
        raise RuntimeError("Token services are not initialized. Call security.init_app().") from exc
