"""Shared API helpers for request parsing and cross-cutting concerns."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar, cast

from flask import Response, current_app, g, jsonify, request

from blogauth.core.errors import Unauthorized
from blogauth.core.security import get_token_services
from blogauth.services._shared.errors import UnauthenticatedError
from blogauth.services.auth.dto import AuthenticatedPrincipal

F = TypeVar("F", bound=Callable[..., Any])

BEARER_PREFIX = "Bearer "


def bearer_token() -> str | None:
    """Return the token of an ``Authorization: Bearer <token>`` header, if any."""

    header = request.headers.get("Authorization", "")
    if not header.startswith(BEARER_PREFIX):
        return None
    token = header[len(BEARER_PREFIX) :].strip()
    return token or None


def require_auth(func: F) -> F:
    """Resolve the caller from a Bearer token and keep it on ``g.principal``.

    Any token the issuer signed is accepted, so an access token and a refresh
    token both identify the caller.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        g.pop("principal", None)
        token = bearer_token()
        if token is None:
            raise Unauthorized("Missing bearer token")
        try:
            g.principal = get_token_services().issuer.resolve_identity(token)
        except UnauthenticatedError as exc:
            raise Unauthorized("Invalid or expired token") from exc
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def current_principal() -> AuthenticatedPrincipal:
    """Return the principal stored by :func:`require_auth`."""

    principal = g.get("principal")
    if principal is None:
        raise Unauthorized()
    return cast(AuthenticatedPrincipal, principal)


def json_body() -> dict[str, Any]:
    """Return the JSON request body, or an empty dict when absent or not an object."""

    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
