# blogauth/services/auth/login.py
from __future__ import annotations

import logging

from blogauth.repositories.user import UserRepository
from blogauth.services._shared.base import BaseService
from blogauth.services._shared.errors import UnauthenticatedError
from blogauth.services._shared.ports import RefreshTokenStore
from blogauth.services.auth.dto import Identity, LoginIn, TokenConfig, TokenPairOut
from blogauth.services.auth.issuer import AccessTokenIssuer

log = logging.getLogger(__name__)


class LoginService(BaseService):
    """
    Verify credentials and hand out a fresh access/refresh token pair.

    The refresh token is saved in the store before it is returned, replacing
    whatever token the user held before.
    """

    def __init__(
        self,
        *,
        issuer: AccessTokenIssuer,
        store: RefreshTokenStore,
        config: TokenConfig,
    ) -> None:
        super().__init__()
        self.issuer = issuer
        self.store = store
        self.cfg = config

    def login(self, dto: LoginIn) -> TokenPairOut:
        """
        Authenticate credentials and issue a token pair.

        :param dto: Login input.
        :returns: Access/Refresh token pair.
        :raises UnauthenticatedError: If credentials are invalid.
        """
        with self.ro_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.authenticate(dto.email, dto.password)
            if user is None:
                log.info("login.rejected")
                raise UnauthenticatedError("Invalid credentials")
            identity = Identity(id=user.id, email=user.email)

        refresh = self.issuer.issue_refresh_token(identity, self.cfg.refresh_lifetime)
        # Register server state FIRST, then hand the tokens out
        self.store.save(identity.id, refresh)
        access = self.issuer.issue_access_token(identity, self.cfg.access_lifetime)

        log.info("login.succeeded", extra={"user_id": identity.id})
        return TokenPairOut(access_token=access, refresh_token=refresh)
