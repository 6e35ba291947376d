"""Application settings with environment-based simple classes."""

from __future__ import annotations

import os
from collections.abc import Mapping
from datetime import timedelta
from typing import Final

from dotenv import load_dotenv

# Public selector env var (keep neutral name to avoid collisions)
ENV_VAR: Final[str] = "APP_ENV"  # 'development' | 'testing' | 'production'

# Supported refresh-token persistence backends
REFRESH_TOKEN_STORES: Final[frozenset[str]] = frozenset({"sqlalchemy", "redis", "memory"})


# Load .env in development (no-op when the file is missing)
load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Parse a boolean flag from an environment variable.

    Parameters
    ----------
    name: str
        Environment variable to inspect.
    default: bool, optional
        Value returned when the variable is unset. Defaults to ``False``.

    Returns
    -------
    bool
        ``True`` if the value resembles ``{"1", "true", "yes", "y", "on"}``
        ignoring case; otherwise ``False`` or ``default`` when missing.
    """
    val = os.getenv(name)
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "y", "on"}


def env_seconds(name: str, default: timedelta) -> timedelta:
    """Parse a lifetime expressed in seconds from an environment variable.

    Parameters
    ----------
    name: str
        Environment variable to inspect.
    default: datetime.timedelta
        Value returned when the variable is unset or blank.

    Returns
    -------
    datetime.timedelta
        Parsed lifetime.

    Raises
    ------
    ValueError
        If the value is not a positive integer.
    """
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    seconds = int(raw.strip())
    if seconds <= 0:
        raise ValueError(f"{name} must be a positive number of seconds")
    return timedelta(seconds=seconds)


class BaseConfig:
    """Base configuration shared across environments.

    Attributes
    ----------
    API_BASE_PREFIX: str
        Root path for registering API blueprints.
    SECRET_KEY: str
        Flask secret used for session signing.
    JWT_SECRET_KEY: str
        Symmetric key used to sign and verify access and refresh tokens.
    JWT_ISSUER: str
        Value written to the ``iss`` claim of every issued token.
    ACCESS_TOKEN_LIFETIME: datetime.timedelta
        Lifetime of access tokens (2 hours unless overridden).
    REFRESH_TOKEN_LIFETIME: datetime.timedelta
        Lifetime of refresh tokens (14 days unless overridden).
    REFRESH_TOKEN_STORE: str
        Backend used to persist refresh tokens: ``sqlalchemy``, ``redis``
        or ``memory``.
    REDIS_URL: str | None
        Connection URL, required when ``REFRESH_TOKEN_STORE`` is ``redis``.
    SQLALCHEMY_DATABASE_URI: str
        Database connection string consumed by SQLAlchemy.
    LOG_LEVEL: str
        Root logging verbosity (``INFO`` by default).

    Notes
    -----
    Values are primarily sourced from environment variables, enabling
    configuration without code changes. They are read once when the
    application is created.
    """

    API_BASE_PREFIX = "/api"

    # Secrets / security
    SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "CHANGE_ME_JWT")
    JWT_ISSUER = os.getenv("JWT_ISSUER", "blogauth")
    ACCESS_TOKEN_LIFETIME = env_seconds("ACCESS_TOKEN_LIFETIME", timedelta(hours=2))
    REFRESH_TOKEN_LIFETIME = env_seconds("REFRESH_TOKEN_LIFETIME", timedelta(days=14))

    # Refresh token persistence
    REFRESH_TOKEN_STORE = os.getenv("REFRESH_TOKEN_STORE", "sqlalchemy").strip().lower()
    REDIS_URL = os.getenv("REDIS_URL")

    # DB
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./dev.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)

    # Flask & JSON
    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Flask built-ins
    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Configuration tailored for local development."""

    DEBUG = env_bool("FLASK_DEBUG", True)


class TestingConfig(BaseConfig):
    """Configuration for automated test runs.

    Notes
    -----
    - Forces ``TESTING`` mode and disables debug logs.
    - Uses an in-memory SQLite database unless ``TEST_DATABASE_URL`` is set.
    - Uses a fixed signing key so tokens can be minted by test helpers.
    """

    TESTING = True
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    JWT_SECRET_KEY = "test-secret-key-with-enough-entropy-for-hs256"
    JWT_ISSUER = "blogauth-test"
    REFRESH_TOKEN_STORE = "sqlalchemy"
    REDIS_URL = None


class ProductionConfig(BaseConfig):
    """Configuration defaults for production deployments.

    Notes
    -----
    Keeps debug and SQL echoing disabled while relying on WSGI-level log
    configuration for noise control.
    """

    DEBUG = False
    SQLALCHEMY_ECHO = False
    PROPAGATE_EXCEPTIONS = False


# Map names -> classes (simple, explicit)
CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Return the configuration class inferred from ``APP_ENV``.

    Falls back to :class:`DevelopmentConfig` when ``APP_ENV`` is unset or
    unknown.
    """
    name = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)
