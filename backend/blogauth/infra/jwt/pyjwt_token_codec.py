# blogauth/infra/jwt/pyjwt_token_codec.py
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from jwt.utils import base64url_decode, base64url_encode

from blogauth.services._shared.errors import (
    EncodingError,
    ExpiredTokenError,
    InvalidSignatureError,
    MalformedTokenError,
    TokenError,
)
from blogauth.services._shared.ports import RESERVED_CLAIMS, Claims, TokenCodec

log = logging.getLogger(__name__)

DEFAULT_ALGORITHM = "HS256"


@dataclass(frozen=True, slots=True)
class PyJWTTokenCodec(TokenCodec):
    """
    HMAC-signed JWT codec built on PyJWT.

    The algorithm is fixed per instance and is the only one accepted while
    decoding, so a token cannot pick its own verification algorithm.
    """

    algorithm: str = DEFAULT_ALGORITHM

    def encode(
        self,
        *,
        subject: str,
        extra_claims: dict[str, Any] | None,
        issuer: str,
        secret_key: str,
        expiry: timedelta,
    ) -> str:
        extra = dict(extra_claims or {})
        clash = RESERVED_CLAIMS.intersection(extra)
        if clash:
            raise EncodingError(f"Extra claims cannot override registered claims: {sorted(clash)}")

        now = datetime.now(UTC)
        payload: dict[str, Any] = {
            **extra,
            "iss": issuer,
            "sub": subject,
            "iat": now,
            "exp": now + expiry,
        }
        try:
            return jwt.encode(payload, secret_key, algorithm=self.algorithm)
        except (TypeError, ValueError) as exc:
            # json.dumps rejects non-serializable values with TypeError
            raise EncodingError(f"Unrepresentable claim value: {exc}") from exc

    def decode(self, token: str, secret_key: str) -> Claims:
        # The signature is checked before any claim, so a tampered expired
        # token reports the signature failure.
        if self._signature_text_altered(token):
            raise InvalidSignatureError("Token signature does not match")
        try:
            payload = jwt.decode(
                token,
                secret_key,
                algorithms=[self.algorithm],
                options={"require": ["exp", "iat"]},
            )
        except jwt.InvalidSignatureError as exc:
            raise InvalidSignatureError("Token signature does not match") from exc
        except jwt.ExpiredSignatureError as exc:
            raise ExpiredTokenError("Token has expired") from exc
        except jwt.PyJWTError as exc:
            raise MalformedTokenError(f"Token cannot be parsed: {exc}") from exc

        return self._to_claims(payload)

    def is_valid(self, token: str, secret_key: str) -> bool:
        try:
            self.decode(token, secret_key)
        except TokenError as exc:
            log.debug("token.invalid", extra={"reason": exc.reason})
            return False
        return True

    # -------------------- helpers --------------------

    @staticmethod
    def _to_claims(payload: dict[str, Any]) -> Claims:
        extra = {k: v for k, v in payload.items() if k not in RESERVED_CLAIMS}
        try:
            issued_at = datetime.fromtimestamp(int(payload["iat"]), tz=UTC)
            expires_at = datetime.fromtimestamp(int(payload["exp"]), tz=UTC)
        except (TypeError, ValueError, OverflowError) as exc:
            raise MalformedTokenError("Token timestamps are not numeric") from exc
        return Claims(
            subject=payload.get("sub"),
            issuer=payload.get("iss"),
            issued_at=issued_at,
            expires_at=expires_at,
            extra=extra,
        )

    @staticmethod
    def _signature_text_altered(token: str) -> bool:
        """
        Tell whether a token with readable header and payload carries a
        signature segment that is not canonical base64url.

        Such a segment cannot come from an encoder: it was edited, possibly
        in padding bits the decoder would silently ignore.
        """
        parts = token.split(".", 2)
        if len(parts) != 3:
            return False
        for segment in parts[:2]:
            try:
                decoded = json.loads(base64url_decode(segment))
            except ValueError:
                return False
            if not isinstance(decoded, dict):
                return False
        signature = parts[2]
        try:
            return base64url_encode(base64url_decode(signature)).decode("ascii") != signature
        except ValueError:
            return True
