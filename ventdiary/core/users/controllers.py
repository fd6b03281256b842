"""User profile controllers (API only)."""

from __future__ import annotations

from flask import Blueprint, request
from flask_jwt_extended import current_user

from ventdiary.core.auth.guard import protect
from ventdiary.core.auth.schemas import ChangePasswordRequest
from ventdiary.core.users.schemas import UpdateProfileRequest, serialize_user
from ventdiary.core.users.services import change_password, update_profile, upload_profile_image
from ventdiary.core.utils.responses import success
from ventdiary.core.utils.validation import load_json

user_api_bp = Blueprint("user_api", __name__)


@user_api_bp.get("/profile")
@protect
def api_get_profile():
    return success({"user": serialize_user(current_user)})


@user_api_bp.patch("/profile")
@protect
def api_update_profile():
    data = load_json(UpdateProfileRequest)
    user = update_profile(current_user, data)
    return success({"user": serialize_user(user)})


@user_api_bp.patch("/change-password")
@protect
def api_change_password():
    data = load_json(ChangePasswordRequest)
    change_password(current_user, data.current_password, data.new_password, data.confirm_password)
    return {"status": "success", "message": "Password changed successfully."}, 200


@user_api_bp.post("/profile-image")
@protect
def api_upload_profile_image():
    user = upload_profile_image(current_user, request.files.get("profileImage"))
    return success({"user": serialize_user(user)})
