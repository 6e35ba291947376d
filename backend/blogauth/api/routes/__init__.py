"""Route blueprints mounted under ``API_BASE_PREFIX``."""

from __future__ import annotations

from flask import Blueprint

# Import blueprints *only here* to keep imports localized and avoid cycles.
from .auth import bp as auth_bp  # noqa: E402
from .health import bp as health_bp  # noqa: E402
from .token import bp as token_bp  # noqa: E402

# Each tuple: (blueprint, url_prefix_relative_to_base)
REGISTRY: list[tuple[Blueprint, str]] = [
    (health_bp, ""),  # -> /api/health
    (auth_bp, ""),  # -> /api/users, /api/login
    (token_bp, ""),  # -> /api/token, /api/refresh-token
]
