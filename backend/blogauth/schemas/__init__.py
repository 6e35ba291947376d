"""Marshmallow schemas for the public API."""

from .auth import (
    CreateAccessTokenRequestSchema,
    CreateAccessTokenResponseSchema,
    LoginSchema,
    SignupSchema,
    TokenPairSchema,
    UserSchema,
)

__all__ = [
    "CreateAccessTokenRequestSchema",
    "CreateAccessTokenResponseSchema",
    "LoginSchema",
    "SignupSchema",
    "TokenPairSchema",
    "UserSchema",
]
