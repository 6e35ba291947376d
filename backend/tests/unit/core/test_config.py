"""Unit tests for environment-driven configuration and token wiring."""

from __future__ import annotations

from datetime import timedelta

import pytest
from blogauth.core.config import (
    DevelopmentConfig,
    ProductionConfig,
    TestingConfig,
    env_bool,
    env_seconds,
    get_config,
)
from blogauth.core.security import build_refresh_store, get_token_services
from blogauth.infra.sqlalchemy.sql_refresh_token_store import SQLRefreshTokenStore
from blogauth.services._shared.ports import InMemoryRefreshTokenStore
from blogauth.services.auth.dto import TokenConfig

from tests.conftest import ISSUER, SECRET_KEY


@pytest.mark.parametrize(
    "name, expected",
    [("testing", TestingConfig), ("production", ProductionConfig), ("nope", DevelopmentConfig)],
)
def test_get_config_selects_by_app_env(monkeypatch, name, expected):
    monkeypatch.setenv("APP_ENV", name)
    assert get_config() is expected


def test_env_bool(monkeypatch):
    monkeypatch.setenv("FLAG", "Yes")
    assert env_bool("FLAG") is True
    monkeypatch.setenv("FLAG", "0")
    assert env_bool("FLAG", True) is False
    monkeypatch.delenv("FLAG")
    assert env_bool("FLAG", True) is True


def test_env_seconds(monkeypatch):
    default = timedelta(hours=2)
    monkeypatch.delenv("LIFETIME", raising=False)
    assert env_seconds("LIFETIME", default) == default

    monkeypatch.setenv("LIFETIME", " 90 ")
    assert env_seconds("LIFETIME", default) == timedelta(seconds=90)

    monkeypatch.setenv("LIFETIME", "0")
    with pytest.raises(ValueError):
        env_seconds("LIFETIME", default)


def test_testing_config_is_self_contained():
    assert TestingConfig.REFRESH_TOKEN_STORE == "sqlalchemy"
    assert TestingConfig.REDIS_URL is None
    assert TestingConfig.TESTING is True


@pytest.mark.parametrize(
    "kwargs",
    [
        {"secret_key": ""},
        {"secret_key": SECRET_KEY, "access_lifetime": timedelta(0)},
        {"secret_key": SECRET_KEY, "refresh_lifetime": timedelta(seconds=-1)},
    ],
)
def test_token_config_rejects_invalid_values(kwargs):
    with pytest.raises(ValueError):
        TokenConfig(issuer=ISSUER, **kwargs)


def test_token_config_repr_hides_secret(token_config):
    assert SECRET_KEY not in repr(token_config)


def test_build_refresh_store_by_name(token_config):
    assert isinstance(build_refresh_store("memory", token_config), InMemoryRefreshTokenStore)
    assert isinstance(build_refresh_store("sqlalchemy", token_config), SQLRefreshTokenStore)
    with pytest.raises(ValueError):
        build_refresh_store("cassandra", token_config)


def test_redis_store_requires_client(token_config):
    # Tests run without REDIS_URL, so no client was created
    with pytest.raises(RuntimeError):
        build_refresh_store("redis", token_config)


def test_app_exposes_token_services(app):
    with app.app_context():
        services = get_token_services()

    assert services.config.issuer == app.config["JWT_ISSUER"]
    assert services.config.access_lifetime == app.config["ACCESS_TOKEN_LIFETIME"]
    assert isinstance(services.store, SQLRefreshTokenStore)
    assert services.refresh.store is services.store
    assert services.login.store is services.store
