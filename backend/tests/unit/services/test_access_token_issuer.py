"""Unit tests for :class:`AccessTokenIssuer`."""

from __future__ import annotations

from datetime import timedelta

import pytest
from blogauth.services._shared.errors import UnauthenticatedError
from blogauth.services.auth.dto import DEFAULT_AUTHORITY, Identity

from tests.conftest import ISSUER, SECRET_KEY
from tests.helpers.tokens import flip_signature_byte


def test_access_token_carries_subject_id_and_issuer(issuer, codec, identity):
    token = issuer.issue_access_token(identity)

    claims = codec.decode(token, SECRET_KEY)
    assert claims.subject == identity.email
    assert claims.get("id") == identity.id
    assert claims.issuer == ISSUER
    assert claims.expires_at - claims.issued_at == timedelta(hours=2)


def test_refresh_token_uses_refresh_lifetime(issuer, codec, identity):
    token = issuer.issue_refresh_token(identity)

    claims = codec.decode(token, SECRET_KEY)
    assert claims.expires_at - claims.issued_at == timedelta(days=14)


@pytest.mark.parametrize("lifetime", [timedelta(seconds=1), timedelta(minutes=30), timedelta(hours=5)])
def test_resolve_identity_within_window_and_fails_at_expiry(issuer, identity, freeze_time, lifetime):
    with freeze_time("2024-03-01 12:00:00") as frozen:
        token = issuer.issue_access_token(identity, lifetime)

        frozen.tick(lifetime - timedelta(seconds=1))
        principal = issuer.resolve_identity(token)
        assert principal.username == identity.email
        assert principal.user_id == identity.id
        assert principal.authorities == (DEFAULT_AUTHORITY,)
        assert principal.credentials == token

        frozen.tick(timedelta(seconds=1))
        with pytest.raises(UnauthenticatedError):
            issuer.resolve_identity(token)


def test_principal_repr_hides_credentials(issuer, identity):
    token = issuer.issue_access_token(identity)
    assert token not in repr(issuer.resolve_identity(token))


@pytest.mark.parametrize("mangle", [flip_signature_byte, lambda t: "garbage", lambda t: t + "x"])
def test_resolve_identity_rejects_bad_tokens(issuer, identity, mangle):
    token = issuer.issue_access_token(identity)
    with pytest.raises(UnauthenticatedError):
        issuer.resolve_identity(mangle(token))


def test_resolve_identity_requires_subject(issuer, codec):
    token = codec.encode(
        subject="",
        extra_claims={"id": 1},
        issuer=ISSUER,
        secret_key=SECRET_KEY,
        expiry=timedelta(minutes=5),
    )
    with pytest.raises(UnauthenticatedError):
        issuer.resolve_identity(token)


def test_extract_user_id(issuer):
    token = issuer.issue_access_token(Identity(id=42, email="a@example.com"))
    assert issuer.extract_user_id(token) == 42


@pytest.mark.parametrize("extra", [{}, {"id": "42"}, {"id": True}, {"id": 4.2}, {"id": None}])
def test_extract_user_id_rejects_missing_or_non_integer_claim(issuer, codec, extra):
    token = codec.encode(
        subject="a@example.com",
        extra_claims=extra,
        issuer=ISSUER,
        secret_key=SECRET_KEY,
        expiry=timedelta(minutes=5),
    )
    with pytest.raises(UnauthenticatedError):
        issuer.extract_user_id(token)


def test_extract_user_id_rejects_expired_token(issuer, identity, freeze_time):
    with freeze_time("2024-01-01 00:00:00") as frozen:
        token = issuer.issue_access_token(identity, timedelta(minutes=1))
        frozen.tick(timedelta(minutes=1))
        with pytest.raises(UnauthenticatedError):
            issuer.extract_user_id(token)
