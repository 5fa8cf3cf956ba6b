"""Authentication endpoints using the service layer."""

from __future__ import annotations

from flask import Blueprint, current_app, g, request
from flask_jwt_extended import set_access_cookies, set_refresh_cookies, unset_jwt_cookies

from myauth.api.deps import (
    cookie_max_age,
    json_response,
    refresh_token_from_request,
    require_auth,
    timing,
)
from myauth.core.container import get_container
from myauth.schemas import (
    LoginSchema,
    LoginUserSchema,
    RefreshSchema,
    RegisterSchema,
    ResendSchema,
    UserSchema,
)
from myauth.services.auth import LoginIn, LogoutIn, RefreshIn
from myauth.services.verification import RegistrationIn

bp = Blueprint("auth", __name__)

register_schema = RegisterSchema()
login_schema = LoginSchema()
resend_schema = ResendSchema()
refresh_schema = RefreshSchema()
user_schema = UserSchema()
login_user_schema = LoginUserSchema()


def _json_body() -> dict:
    return request.get_json(silent=True) or {}


@bp.post("/register")
@timing
def register():
    """Create an unverified account and mail the verification link."""

    payload = register_schema.load(_json_body())
    result = get_container().verification.register(RegistrationIn(**payload))
    body = {"message": result.message, "data": user_schema.dump(result.user)}
    return json_response(body, status=201)


@bp.get("/verify-email/<string:token>")
@timing
def verify_email(token: str):
    """Confirm email ownership from the mailed link."""

    result = get_container().verification.verify_email(token)
    return json_response({"message": result.message, "already_verified": result.already_verified})


@bp.post("/resend-verification")
@timing
def resend_verification():
    """Mail a fresh verification link to an unverified account."""

    data = resend_schema.load(_json_body())
    result = get_container().verification.resend_verification(data["email"])
    return json_response({"message": result.message})


@bp.post("/login")
@timing
def login():
    """Authenticate credentials, open a session and set the auth cookies."""

    data = login_schema.load(_json_body())
    out = get_container().sessions.login(LoginIn(email=data["email"], password=data["password"]))
    body = {
        "message": "Logged in successfully",
        "access_token": out.access_token,
        "refresh_token": out.refresh_token,
        "user": login_user_schema.dump(out),
    }
    response = json_response(body)
    set_access_cookies(
        response, out.access_token, max_age=cookie_max_age(current_app.config["ACCESS_TOKEN_TTL"])
    )
    set_refresh_cookies(
        response, out.refresh_token, max_age=cookie_max_age(current_app.config["REFRESH_TOKEN_TTL"])
    )
    return response


@bp.post("/refresh-token")
@timing
def refresh_token():
    """Exchange the session's refresh token for a new access token."""

    body = refresh_schema.load(_json_body())
    token = refresh_token_from_request(body)
    out = get_container().sessions.refresh(RefreshIn(refresh_token=token or ""))
    response = json_response(
        {"message": "Access token refreshed successfully", "access_token": out.access_token}
    )
    set_access_cookies(
        response, out.access_token, max_age=cookie_max_age(current_app.config["ACCESS_TOKEN_TTL"])
    )
    return response


@bp.post("/logout")
@timing
def logout():
    """Revoke the session's refresh token and clear the auth cookies."""

    body = refresh_schema.load(_json_body())
    token = refresh_token_from_request(body)
    get_container().sessions.logout(LogoutIn(refresh_token=token))
    response = json_response({"message": "Logged out successfully"})
    unset_jwt_cookies(response)
    return response


@bp.get("/whoami")
@require_auth
@timing
def whoami():
    """Return the authenticated user profile."""

    user = get_container().sessions.get_account(g.user_id)
    return json_response({"data": user_schema.dump(user)})
