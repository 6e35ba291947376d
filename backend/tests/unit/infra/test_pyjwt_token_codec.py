"""Unit tests for :class:`PyJWTTokenCodec`."""

from __future__ import annotations

import json
from datetime import UTC, datetime, timedelta

import jwt
import pytest
from blogauth.services._shared.errors import (
    EncodingError,
    ExpiredTokenError,
    InvalidSignatureError,
    MalformedTokenError,
)

from tests.conftest import ISSUER, SECRET_KEY
from tests.helpers.tokens import (
    edit_signature_text,
    flip_signature_byte,
    next_b64url_char,
    replace_payload,
)

T0 = datetime(2024, 1, 1, tzinfo=UTC)


def _encode(codec, expiry: timedelta = timedelta(hours=1), **extra) -> str:
    return codec.encode(
        subject="writer@example.com",
        extra_claims=extra,
        issuer=ISSUER,
        secret_key=SECRET_KEY,
        expiry=expiry,
    )


def test_round_trip_preserves_all_claims(codec, freeze_time):
    with freeze_time("2024-01-01 00:00:00"):
        token = _encode(codec, id=7, role="editor", tags=["a", "b"])
        claims = codec.decode(token, SECRET_KEY)

    assert claims.subject == "writer@example.com"
    assert claims.issuer == ISSUER
    assert claims.issued_at == T0
    assert claims.expires_at == T0 + timedelta(hours=1)
    assert claims.extra == {"id": 7, "role": "editor", "tags": ["a", "b"]}
    assert claims.get("id") == 7
    assert claims.get("missing", "x") == "x"


def test_encode_uses_hs256(codec):
    token = _encode(codec)
    assert jwt.get_unverified_header(token)["alg"] == "HS256"


def test_flipped_signature_byte_is_invalid_signature(codec):
    token = _encode(codec, id=1)
    with pytest.raises(InvalidSignatureError):
        codec.decode(flip_signature_byte(token), SECRET_KEY)
    with pytest.raises(InvalidSignatureError):
        codec.decode(flip_signature_byte(token, index=-1), SECRET_KEY)


@pytest.mark.parametrize(
    "index, edit",
    [
        pytest.param(10, lambda c: chr(ord(c) ^ 0x80), id="high-bit"),
        pytest.param(10, lambda c: chr(ord(c) ^ 0x01), id="low-bit"),
        pytest.param(10, lambda c: ".", id="dot"),
        pytest.param(-1, next_b64url_char, id="last-char-neighbour"),
    ],
)
def test_edited_signature_text_is_invalid_signature(codec, index, edit):
    token = _encode(codec, id=1)
    with pytest.raises(InvalidSignatureError):
        codec.decode(edit_signature_text(token, index, edit), SECRET_KEY)


def test_every_signature_character_is_covered(codec):
    token = _encode(codec, id=1)
    signature_length = len(token.rsplit(".", 1)[1])
    for index in range(signature_length):
        with pytest.raises(InvalidSignatureError):
            codec.decode(edit_signature_text(token, index, next_b64url_char), SECRET_KEY)


def test_altered_payload_is_invalid_signature(codec):
    token = _encode(codec, id=1)
    forged = json.dumps({"sub": "admin@example.com", "iss": ISSUER, "iat": 1, "exp": 2**40, "id": 2})
    with pytest.raises(InvalidSignatureError):
        codec.decode(replace_payload(token, forged.encode()), SECRET_KEY)


def test_wrong_key_is_invalid_signature(codec):
    token = _encode(codec)
    with pytest.raises(InvalidSignatureError):
        codec.decode(token, "another-secret-key-with-enough-entropy")


def test_expiry_is_exclusive(codec, freeze_time):
    with freeze_time("2024-01-01 00:00:00") as frozen:
        token = _encode(codec, expiry=timedelta(hours=1))

        frozen.move_to("2024-01-01 00:59:59")
        assert codec.decode(token, SECRET_KEY).subject == "writer@example.com"

        frozen.move_to("2024-01-01 01:00:00")
        with pytest.raises(ExpiredTokenError):
            codec.decode(token, SECRET_KEY)


def test_signature_is_checked_before_expiry(codec, freeze_time):
    with freeze_time("2024-01-01 00:00:00") as frozen:
        token = _encode(codec, expiry=timedelta(minutes=5))
        frozen.move_to("2024-01-02 00:00:00")
        with pytest.raises(InvalidSignatureError):
            codec.decode(flip_signature_byte(token), SECRET_KEY)


@pytest.mark.parametrize("token", ["", "not-a-token", "a.b", "a.b.c", "###.###.###"])
def test_unparseable_tokens_are_malformed(codec, token):
    with pytest.raises(MalformedTokenError):
        codec.decode(token, SECRET_KEY)


def test_missing_expiry_is_malformed(codec):
    token = jwt.encode({"sub": "x", "iat": T0}, SECRET_KEY, algorithm="HS256")
    with pytest.raises(MalformedTokenError):
        codec.decode(token, SECRET_KEY)


def test_other_algorithm_is_rejected(codec):
    token = jwt.encode(
        {"sub": "x", "iat": datetime.now(UTC), "exp": datetime.now(UTC) + timedelta(hours=1)},
        SECRET_KEY,
        algorithm="HS512",
    )
    with pytest.raises(MalformedTokenError):
        codec.decode(token, SECRET_KEY)


@pytest.mark.parametrize("claim", ["sub", "iss", "iat", "exp"])
def test_extra_claims_cannot_override_registered_claims(codec, claim):
    with pytest.raises(EncodingError):
        _encode(codec, **{claim: "override"})


def test_unserializable_claim_raises_encoding_error(codec):
    with pytest.raises(EncodingError):
        _encode(codec, payload=object())


def test_is_valid_never_raises(codec, freeze_time):
    with freeze_time("2024-01-01 00:00:00") as frozen:
        token = _encode(codec, expiry=timedelta(hours=1))
        assert codec.is_valid(token, SECRET_KEY) is True
        assert codec.is_valid(flip_signature_byte(token), SECRET_KEY) is False
        assert codec.is_valid("garbage", SECRET_KEY) is False

        frozen.move_to("2024-01-01 01:00:00")
        assert codec.is_valid(token, SECRET_KEY) is False
