"""User service layer."""

from __future__ import annotations

import logging
from typing import Optional

from flask import current_app
from werkzeug.datastructures import FileStorage

from ventdiary.core.auth.schemas import PASSWORD_MIN_LENGTH
from ventdiary.core.auth.token_repository import RefreshTokenRepository
from ventdiary.core.errors import (
    AuthenticationError,
    ConflictError,
    ExternalServiceError,
    RequestValidationError,
)
from ventdiary.core.integrations.storage import StorageError, get_storage
from ventdiary.core.users.models import User
from ventdiary.core.users.schemas import UpdateProfileRequest
from ventdiary.extensions import db

logger = logging.getLogger(__name__)


def get_user(user_id: int) -> Optional[User]:
    return db.session.get(User, user_id)


def get_user_by_email(email: str) -> Optional[User]:
    if not email:
        return None
    return User.query.filter(User.email == email.strip().lower()).first()


def create_user(name: str, email: str, password: str) -> User:
    user = User(name=name.strip(), email=email.strip().lower())
    user.set_password(password)
    db.session.add(user)
    db.session.commit()
    return user


def update_profile(user: User, payload: UpdateProfileRequest) -> User:
    if payload.touches_password:
        raise RequestValidationError(
            "This route is not for password updates. Please use /change-password.",
            code="password_update_not_allowed",
        )
    if payload.email and payload.email != user.email:
        other = get_user_by_email(payload.email)
        if other and other.id != user.id:
            raise ConflictError("Email address is already in use.", code="email_already_exists")
        user.email = payload.email
    if payload.name:
        user.name = payload.name
    db.session.commit()
    return user


def change_password(
    user: User,
    current_password: Optional[str],
    new_password: Optional[str],
    confirm_password: Optional[str],
) -> None:
    """Verify the current password, set the new one and end all other sessions."""
    if not current_password or not user.check_password(current_password):
        raise AuthenticationError("Your current password is incorrect", code="incorrect_password")
    if not new_password or not confirm_password or new_password != confirm_password:
        raise RequestValidationError(
            "New password and confirmation do not match", code="passwords_do_not_match"
        )
    if len(new_password) < PASSWORD_MIN_LENGTH:
        raise RequestValidationError(
            f"Password must be at least {PASSWORD_MIN_LENGTH} characters long",
            code="password_too_short",
        )
    user.set_password(new_password)
    RefreshTokenRepository().delete_all_for_user(user.id)
    db.session.commit()


def upload_profile_image(user: User, file: Optional[FileStorage]) -> User:
    if file is None or not file.filename:
        raise RequestValidationError("Please upload an image file.", code="missing_file")
    mimetype = file.mimetype or ""
    if not mimetype.startswith("image/"):
        raise RequestValidationError(
            "Not an image! Please upload only images.", code="invalid_file_type"
        )
    data = file.read()
    max_bytes = int(current_app.config.get("PROFILE_IMAGE_MAX_BYTES", 5 * 1024 * 1024))
    if len(data) > max_bytes:
        raise RequestValidationError(
            f"Image is too large. Maximum size is {max_bytes // (1024 * 1024)}MB.",
            code="file_too_large",
        )

    key = f"profile-images/user-{user.id}"
    try:
        url = get_storage().upload_bytes(data, key, mimetype)
    except StorageError as exc:
        logger.exception("Profile image upload failed for user %s", user.id)
        raise ExternalServiceError(f"Image upload failed: {exc}", code="upload_failed") from None

    user.profile_image_url = url
    db.session.commit()
    return user
