# blogauth/services/auth/service.py
from __future__ import annotations

import logging
from typing import NoReturn

from blogauth.services._shared.base import BaseService
from blogauth.services._shared.errors import (
    InvalidRefreshTokenError,
    NotFoundError,
    TokenError,
    UnauthenticatedError,
)
from blogauth.services._shared.ports import (
    IdentityDirectory,
    RefreshTokenStore,
    TokenCodec,
)
from blogauth.services.auth.dto import AuthenticatedPrincipal, TokenConfig
from blogauth.services.auth.issuer import USER_ID_CLAIM, AccessTokenIssuer

log = logging.getLogger(__name__)


class TokenRefreshService(BaseService):
    """
    Exchange stored refresh tokens for new access tokens, and revoke them.

    A refresh request moves through *decoding* (signature and expiry),
    *lookup* (the exact token must be the one stored for its user) and
    *reissue*. Any failure before reissue surfaces as
    :class:`InvalidRefreshTokenError`, whatever the internal reason; the
    reason is only logged.
    """

    def __init__(
        self,
        *,
        codec: TokenCodec,
        issuer: AccessTokenIssuer,
        store: RefreshTokenStore,
        identities: IdentityDirectory,
        config: TokenConfig,
    ) -> None:
        """
        :param codec: Token signer/verifier.
        :param issuer: Issues the replacement access token.
        :param store: Holds the current refresh token of each user.
        :param identities: Resolves the user referenced by a stored record.
        :param config: Signing key and lifetimes.
        """
        super().__init__()
        self.codec = codec
        self.issuer = issuer
        self.store = store
        self.identities = identities
        self.cfg = config

    # ------------------------------------------------------------------ #
    # Refresh
    # ------------------------------------------------------------------ #

    def refresh_access_token(self, refresh_token: str) -> str:
        """
        Issue a new access token for the owner of ``refresh_token``.

        :param refresh_token: Encoded refresh token presented by the client.
        :returns: Encoded access token.
        :raises InvalidRefreshTokenError: If the token does not decode, is not
            the one stored for its user, or its user no longer exists.
        """
        # 1) Decoding
        try:
            claims = self.codec.decode(refresh_token, self.cfg.secret_key)
        except TokenError as exc:
            self._reject(exc.reason)

        # 2) Lookup (exact match against the store)
        try:
            record = self.store.find_by_token(refresh_token)
        except NotFoundError:
            self._reject("not_found")

        claimed_id = claims.get(USER_ID_CLAIM)
        if claimed_id is not None and claimed_id != record.user_id:
            self._reject("owner_mismatch", user_id=record.user_id)

        identity = self.identities.get_identity(record.user_id)
        if identity is None:
            self._reject("unknown_user", user_id=record.user_id)

        # 3) Reissue
        access_token = self.issuer.issue_access_token(identity, self.cfg.access_lifetime)
        log.info("token.refreshed", extra={"user_id": identity.id})
        return access_token

    # ------------------------------------------------------------------ #
    # Logout
    # ------------------------------------------------------------------ #

    def delete_refresh_token(self, principal: AuthenticatedPrincipal) -> None:
        """
        Remove the stored refresh token of the caller.

        The user id is read from the credential the caller authenticated with,
        so later refreshes with the old token fail at lookup.

        :param principal: Caller resolved by the transport layer.
        :raises InvalidRefreshTokenError: If the credential carries no usable user id.
        """
        try:
            user_id = self.issuer.extract_user_id(principal.credentials)
        except UnauthenticatedError:
            self._reject("no_user_id")

        self.store.delete_by_identity(user_id)
        log.info("token.refresh_deleted", extra={"user_id": user_id})

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def _reject(reason: str, *, user_id: int | None = None) -> NoReturn:
        log.info("token.refresh_rejected", extra={"reason": reason, "user_id": user_id})
        raise InvalidRefreshTokenError()
