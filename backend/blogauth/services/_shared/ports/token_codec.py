from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Protocol

# Registered claims written by the codec itself; extra claims may not reuse them.
RESERVED_CLAIMS = frozenset({"sub", "iss", "iat", "exp"})


@dataclass(frozen=True, slots=True)
class Claims:
    """
    Decoded token payload.

    :ivar subject: ``sub`` claim (``None`` when the token carries none).
    :ivar issuer: ``iss`` claim (``None`` when the token carries none).
    :ivar issued_at: ``iat`` claim as an aware UTC datetime.
    :ivar expires_at: ``exp`` claim as an aware UTC datetime.
    :ivar extra: Every other claim, untouched.
    """

    subject: str | None
    issuer: str | None
    issued_at: datetime
    expires_at: datetime
    extra: dict[str, Any] = field(default_factory=dict)

    def get(self, name: str, default: Any = None) -> Any:
        """Return an extra claim by name."""
        return self.extra.get(name, default)


class TokenCodec(Protocol):
    """Port for signing and verifying compact tokens."""

    def encode(
        self,
        *,
        subject: str,
        extra_claims: dict[str, Any] | None,
        issuer: str,
        secret_key: str,
        expiry: timedelta,
    ) -> str:
        """
        Serialize and sign a token valid for ``expiry`` from now.

        :raises EncodingError: If a claim value cannot be represented.
        """

    def decode(self, token: str, secret_key: str) -> Claims:
        """
        Verify ``token`` and return its claims.

        :raises InvalidSignatureError: Signature mismatch.
        :raises ExpiredTokenError: Current time is at or after ``exp``.
        :raises MalformedTokenError: Token cannot be parsed.
        """

    def is_valid(self, token: str, secret_key: str) -> bool:
        """Return ``True`` iff :meth:`decode` would succeed. Never raises."""
