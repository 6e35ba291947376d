"""Pytest fixtures: application, fresh in-memory database and token doubles.

The application is created once per session. An app context lives only as
long as a single test: every test that asks for ``db`` gets one together with
freshly created tables that are dropped afterwards, so neither ``flask.g`` nor
committed data leaks between cases.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from typing import Any

import pytest
from blogauth.core.config import TestingConfig
from blogauth.core.extensions import db as _db
from blogauth.factory import create_app
from blogauth.infra.jwt.pyjwt_token_codec import PyJWTTokenCodec
from blogauth.services._shared.ports import InMemoryIdentityDirectory, InMemoryRefreshTokenStore
from blogauth.services.auth.dto import Identity, TokenConfig
from blogauth.services.auth.issuer import AccessTokenIssuer
from blogauth.services.auth.service import TokenRefreshService

SECRET_KEY = "unit-test-secret-key-with-enough-entropy"
ISSUER = "blogauth-test"


@pytest.fixture(scope="session")
def app():
    """Create a Flask application configured for testing.

    Returns
    -------
    flask.Flask
        Application instance with :class:`TestingConfig` applied. No app
        context is pushed here; ``db`` pushes one per test.
    """
    # Ensure env-based config does not leak into tests
    os.environ.pop("DATABASE_URL", None)
    app = create_app(TestingConfig)
    app.logger.setLevel("WARNING")
    return app


@pytest.fixture()
def db(app):
    """Create all tables inside a per-test app context and drop them afterwards."""
    with app.app_context():
        _db.create_all()
        try:
            yield _db
        finally:
            _db.session.remove()
            _db.drop_all()


@pytest.fixture()
def session(db):
    """Return the application session bound to the fresh database."""
    return db.session


@pytest.fixture()
def client(app, db):
    """Flask test client backed by a fresh database."""
    return app.test_client()


@pytest.fixture()
def freeze_time() -> Callable[[str | None], Any]:
    """Factory returning :func:`freezegun.freeze_time`.

    Examples
    --------
    >>> def test_with_frozen_time(freeze_time):
    ...     with freeze_time("2024-01-01") as frozen:
    ...         frozen.move_to("2024-01-02")
    """

    from freezegun import freeze_time as _freeze_time

    def _factory(target: str | None = None) -> Any:
        return _freeze_time(target or "2024-01-01")

    return _factory


# -- Token doubles (no database required) -------------------------------------


@pytest.fixture()
def token_config() -> TokenConfig:
    return TokenConfig(issuer=ISSUER, secret_key=SECRET_KEY)


@pytest.fixture()
def codec() -> PyJWTTokenCodec:
    return PyJWTTokenCodec()


@pytest.fixture()
def issuer(codec, token_config) -> AccessTokenIssuer:
    return AccessTokenIssuer(codec=codec, config=token_config)


@pytest.fixture()
def identity() -> Identity:
    return Identity(id=1, email="writer@example.com")


@pytest.fixture()
def memory_store() -> InMemoryRefreshTokenStore:
    return InMemoryRefreshTokenStore()


@pytest.fixture()
def identities(identity) -> InMemoryIdentityDirectory:
    return InMemoryIdentityDirectory([identity])


@pytest.fixture()
def refresh_service(codec, issuer, memory_store, identities, token_config) -> TokenRefreshService:
    """TokenRefreshService wired to in-memory doubles and the real PyJWT codec."""
    return TokenRefreshService(
        codec=codec,
        issuer=issuer,
        store=memory_store,
        identities=identities,
        config=token_config,
    )
