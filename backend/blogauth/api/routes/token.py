"""Access token renewal and refresh token revocation."""

from __future__ import annotations

from flask import Blueprint

from blogauth.api.deps import current_principal, json_body, json_response, require_auth, timing
from blogauth.core.security import get_token_services
from blogauth.schemas import CreateAccessTokenRequestSchema, CreateAccessTokenResponseSchema
from blogauth.services.auth.dto import RefreshIn

bp = Blueprint("token", __name__)

request_schema = CreateAccessTokenRequestSchema()
response_schema = CreateAccessTokenResponseSchema()


@bp.post("/token")
@timing
def create_access_token():
    """Exchange the stored refresh token for a new access token."""

    dto = RefreshIn(**request_schema.load(json_body()))
    access_token = get_token_services().refresh.refresh_access_token(dto.refresh_token)
    return json_response(response_schema.dump({"access_token": access_token}), status=201)


@bp.delete("/refresh-token")
@require_auth
@timing
def delete_refresh_token():
    """Revoke the refresh token of the authenticated caller."""

    get_token_services().refresh.delete_refresh_token(current_principal())
    return json_response({}, status=200)
