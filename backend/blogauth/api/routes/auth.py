"""Account registration and login endpoints."""

from __future__ import annotations

from flask import Blueprint

from blogauth.api.deps import json_body, json_response, timing
from blogauth.core.security import get_token_services
from blogauth.schemas import LoginSchema, SignupSchema, TokenPairSchema, UserSchema
from blogauth.services.auth.dto import LoginIn
from blogauth.services.users.dto import UserRegisterIn

bp = Blueprint("auth", __name__)

signup_schema = SignupSchema()
user_schema = UserSchema()
login_schema = LoginSchema()
token_pair_schema = TokenPairSchema()


@bp.post("/users")
@timing
def register():
    """Register a new user and return the created representation."""

    data = signup_schema.load(json_body())
    user = get_token_services().users.register(UserRegisterIn(**data))
    return json_response(user_schema.dump(user), status=201)


@bp.post("/login")
@timing
def login():
    """Authenticate credentials and issue an access/refresh token pair."""

    data = login_schema.load(json_body())
    pair = get_token_services().login.login(LoginIn(**data))
    return json_response(token_pair_schema.dump(pair))
