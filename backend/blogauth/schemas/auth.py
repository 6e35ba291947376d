"""Token and account Marshmallow schemas (camelCase on the wire)."""

from __future__ import annotations

from marshmallow import Schema, fields, validate


class SignupSchema(Schema):
    """Input payload for account registration."""

    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(required=True, validate=validate.Length(min=8, max=128))
    nickname = fields.String(load_default=None, validate=validate.Length(max=50))


class UserSchema(Schema):
    """Public representation of a registered user."""

    id = fields.Integer(required=True)
    email = fields.Email(required=True)
    nickname = fields.String(allow_none=True)


class LoginSchema(Schema):
    """Input payload for authenticating a user."""

    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(required=True, validate=validate.Length(min=1, max=128))


class TokenPairSchema(Schema):
    """Response payload of a successful login."""

    access_token = fields.String(required=True, data_key="accessToken")
    refresh_token = fields.String(required=True, data_key="refreshToken")


class CreateAccessTokenRequestSchema(Schema):
    """Request body exchanging a refresh token for an access token."""

    refresh_token = fields.String(
        required=True,
        data_key="refreshToken",
        validate=validate.Length(min=1),
    )


class CreateAccessTokenResponseSchema(Schema):
    """Response body carrying the new access token."""

    access_token = fields.String(required=True, data_key="accessToken")
