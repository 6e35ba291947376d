# blogauth/services/auth/issuer.py
from __future__ import annotations

import logging
from datetime import timedelta

from blogauth.services._shared.errors import TokenError, UnauthenticatedError
from blogauth.services._shared.ports import Claims, TokenCodec
from blogauth.services.auth.dto import (
    DEFAULT_AUTHORITY,
    AuthenticatedPrincipal,
    Identity,
    TokenConfig,
)

log = logging.getLogger(__name__)

USER_ID_CLAIM = "id"


class AccessTokenIssuer:
    """
    Issue tokens bound to an identity and resolve callers from them.

    Tokens carry the identity email as ``sub`` and the numeric user id as the
    ``id`` claim. The issuer string and signing key come from
    :class:`~blogauth.services.auth.dto.TokenConfig`.
    """

    def __init__(self, *, codec: TokenCodec, config: TokenConfig) -> None:
        """
        :param codec: Token signer/verifier.
        :param config: Issuer, signing key and default lifetimes.
        """
        self.codec = codec
        self.cfg = config

    # ------------------------------------------------------------------ #
    # Issuance
    # ------------------------------------------------------------------ #

    def issue_access_token(self, identity: Identity, lifetime: timedelta | None = None) -> str:
        """
        Create a short-lived access token for ``identity``.

        :param identity: Authenticated identity.
        :param lifetime: Token lifetime; defaults to the configured access lifetime.
        :returns: Encoded token.
        """
        return self._issue(identity, lifetime or self.cfg.access_lifetime)

    def issue_refresh_token(self, identity: Identity, lifetime: timedelta | None = None) -> str:
        """Create a long-lived refresh token for ``identity``."""
        return self._issue(identity, lifetime or self.cfg.refresh_lifetime)

    def _issue(self, identity: Identity, lifetime: timedelta) -> str:
        return self.codec.encode(
            subject=identity.email,
            extra_claims={USER_ID_CLAIM: identity.id},
            issuer=self.cfg.issuer,
            secret_key=self.cfg.secret_key,
            expiry=lifetime,
        )

    # ------------------------------------------------------------------ #
    # Resolution
    # ------------------------------------------------------------------ #

    def resolve_identity(self, token: str) -> AuthenticatedPrincipal:
        """
        Build the principal described by ``token``.

        :raises UnauthenticatedError: If the token does not decode or has no subject.
        """
        claims = self._decode(token)
        if not claims.subject:
            raise UnauthenticatedError("Token has no subject")
        return AuthenticatedPrincipal(
            username=claims.subject,
            credentials=token,
            authorities=(DEFAULT_AUTHORITY,),
            user_id=self._user_id_from(claims),
        )

    def extract_user_id(self, token: str) -> int:
        """
        Return the ``id`` claim of ``token``.

        :raises UnauthenticatedError: If the token does not decode or the claim
            is missing or not an integer.
        """
        user_id = self._user_id_from(self._decode(token))
        if user_id is None:
            raise UnauthenticatedError("Token carries no user id")
        return user_id

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    def _decode(self, token: str) -> Claims:
        try:
            return self.codec.decode(token, self.cfg.secret_key)
        except TokenError as exc:
            log.info("token.unauthenticated", extra={"reason": exc.reason})
            raise UnauthenticatedError() from exc

    @staticmethod
    def _user_id_from(claims: Claims) -> int | None:
        value = claims.get(USER_ID_CLAIM)
        # bool is an int subclass; reject it explicitly
        if isinstance(value, bool) or not isinstance(value, int):
            return None
        return value
