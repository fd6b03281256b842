"""Auth HTTP controllers (API only)."""

from __future__ import annotations

from flask import Blueprint
from flask_jwt_extended import current_user

from ventdiary.core.auth import auth_service
from ventdiary.core.auth.guard import protect
from ventdiary.core.auth.schemas import (
    ForgotPasswordRequest,
    LoginRequest,
    LogoutRequest,
    RefreshRequest,
    RegisterRequest,
    ResetPasswordRequest,
)
from ventdiary.core.users.schemas import serialize_user
from ventdiary.core.utils.responses import success
from ventdiary.core.utils.validation import load_json
from ventdiary.extensions import limiter

auth_bp = Blueprint("auth_api", __name__)


def _session_response(user, tokens: dict[str, str], status: int = 200):
    return success({"user": serialize_user(user)}, status, **tokens)


@auth_bp.post("/register")
@limiter.limit("5/minute")
def register():
    data = load_json(RegisterRequest)
    user, tokens = auth_service.register(data)
    return _session_response(user, tokens, 201)


@auth_bp.post("/login")
@limiter.limit("10/minute")
def login():
    data = load_json(LoginRequest)
    user, tokens = auth_service.login(data)
    return _session_response(user, tokens)


@auth_bp.post("/refresh")
@limiter.limit("30/minute")
def refresh():
    data = load_json(RefreshRequest)
    tokens = auth_service.refresh_session(data.refresh_token)
    return {"status": "success", **tokens}, 200


@auth_bp.post("/logout")
@protect
def logout():
    data = load_json(LogoutRequest)
    auth_service.logout(data.refresh_token)
    return {"status": "success", "message": "Logout successful"}, 200


@auth_bp.post("/forgot-password")
@limiter.limit("5/minute")
def forgot_password():
    data = load_json(ForgotPasswordRequest)
    auth_service.request_password_reset(data)
    return {"status": "success", "message": auth_service.FORGOT_PASSWORD_REPLY}, 200


@auth_bp.patch("/resetPassword/<token>")
@limiter.limit("5/minute")
def reset_password(token: str):
    data = load_json(ResetPasswordRequest)
    user, tokens = auth_service.reset_password(token, data)
    return _session_response(user, tokens)


@auth_bp.get("/me")
@protect
def me():
    return success({"user": serialize_user(current_user)})
