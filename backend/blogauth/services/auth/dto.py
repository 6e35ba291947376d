# blogauth/services/auth/dto.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta

DEFAULT_AUTHORITY = "ROLE_USER"

# ----------------------------- Identities --------------------------------- #


@dataclass(frozen=True, slots=True)
class Identity:
    """
    Snapshot of a user as seen by the token layer.

    :param id: Stable numeric user id (``id`` claim).
    :type id: int
    :param email: Normalized login email (``sub`` claim).
    :type email: str
    :param authorities: Granted roles.
    :type authorities: tuple[str, ...]
    """

    id: int
    email: str
    authorities: tuple[str, ...] = (DEFAULT_AUTHORITY,)


@dataclass(frozen=True, slots=True)
class AuthenticatedPrincipal:
    """
    Caller resolved from a valid token.

    :param username: Token subject (the user's email).
    :type username: str
    :param credentials: The encoded token the caller presented.
    :type credentials: str
    :param authorities: Granted roles.
    :type authorities: tuple[str, ...]
    :param user_id: ``id`` claim when the token carries an integer one.
    :type user_id: int | None
    """

    username: str
    credentials: str = field(repr=False)
    authorities: tuple[str, ...] = (DEFAULT_AUTHORITY,)
    user_id: int | None = None


# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login.

    :param email: User email.
    :type email: str
    :param password: Raw password (to be verified).
    :type password: str
    """

    email: str
    password: str


@dataclass(frozen=True, slots=True)
class RefreshIn:
    """
    Input DTO for access token renewal.

    :param refresh_token: Encoded refresh token.
    :type refresh_token: str
    """

    refresh_token: str


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class TokenPairOut:
    """
    Output DTO with access and refresh tokens.

    :param access_token: Encoded access token.
    :type access_token: str
    :param refresh_token: Encoded refresh token.
    :type refresh_token: str
    """

    access_token: str
    refresh_token: str


# ------------------------------ Config ------------------------------------ #


@dataclass(frozen=True, slots=True)
class TokenConfig:
    """
    Process-wide token settings, read once from the Flask config.

    :param issuer: ``iss`` claim value.
    :type issuer: str
    :param secret_key: HMAC signing key.
    :type secret_key: str
    :param access_lifetime: Access token lifetime.
    :type access_lifetime: timedelta
    :param refresh_lifetime: Refresh token lifetime.
    :type refresh_lifetime: timedelta
    """

    issuer: str
    secret_key: str = field(repr=False)
    access_lifetime: timedelta = timedelta(hours=2)
    refresh_lifetime: timedelta = timedelta(days=14)

    def __post_init__(self) -> None:
        if not self.secret_key:
            raise ValueError("Token secret key must not be empty.")
        if self.access_lifetime <= timedelta(0) or self.refresh_lifetime <= timedelta(0):
            raise ValueError("Token lifetimes must be positive.")
