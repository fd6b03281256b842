"""Authentication service layer."""

from __future__ import annotations

import logging
import secrets
from datetime import datetime, timedelta
from hashlib import sha256
from typing import Optional

from flask import current_app

from ventdiary.core.auth.schemas import (
    PASSWORD_MIN_LENGTH,
    ForgotPasswordRequest,
    LoginRequest,
    RegisterRequest,
    ResetPasswordRequest,
    ensure_passwords_match,
)
from ventdiary.core.auth.token_repository import RefreshTokenRepository
from ventdiary.core.auth.token_service import issue_tokens, mint_pair
from ventdiary.core.errors import (
    AuthenticationError,
    ConflictError,
    ExternalServiceError,
    RequestValidationError,
)
from ventdiary.core.integrations.mailer import MailDeliveryError, get_mailer
from ventdiary.core.users.models import User
from ventdiary.core.users.services import create_user, get_user, get_user_by_email
from ventdiary.extensions import db

logger = logging.getLogger(__name__)

INVALID_REFRESH = "Invalid or expired refresh token"
FORGOT_PASSWORD_REPLY = "If the email exists, a password reset token has been sent."


def authenticate_user(email: str, password: str) -> Optional[User]:
    """Return the user if credentials are valid."""
    user = get_user_by_email(email)
    if not user:
        return None
    if not user.check_password(password):
        return None
    return user


def register(payload: RegisterRequest) -> tuple[User, dict[str, str]]:
    """Create a user and open their first session."""
    ensure_passwords_match(payload.password, payload.password_confirm)
    if get_user_by_email(payload.email):
        raise ConflictError("Email is already in use", code="email_already_exists")
    user = create_user(name=payload.name, email=payload.email, password=payload.password)
    return user, issue_tokens(user)


def login(payload: LoginRequest) -> tuple[User, dict[str, str]]:
    user = authenticate_user(payload.email, payload.password)
    if not user:
        raise AuthenticationError("Incorrect email or password", code="invalid_credentials")
    return user, issue_tokens(user)


def refresh_session(refresh_token: str) -> dict[str, str]:
    """Rotate a refresh credential. Each credential is accepted exactly once."""
    repo = RefreshTokenRepository()
    row = repo.find_by_token(refresh_token)
    if row is None:
        logger.info("Refresh rejected: unknown token")
        raise AuthenticationError(INVALID_REFRESH, code="invalid_or_expired_token")

    if row.is_expired():
        repo.delete(row)
        db.session.commit()
        logger.info("Refresh rejected: expired token for user %s", row.user_id)
        raise AuthenticationError(INVALID_REFRESH, code="invalid_or_expired_token")

    user = get_user(row.user_id)
    if user is None:
        repo.delete(row)
        db.session.commit()
        logger.info("Refresh rejected: user %s no longer exists", row.user_id)
        raise AuthenticationError(
            "The user belonging to this token does no longer exist.", code="user_gone"
        )

    access_token, new_refresh, expires_at = mint_pair(user)
    repo.delete(row)
    repo.add(user.id, new_refresh, expires_at)
    db.session.commit()
    return {"accessToken": access_token, "refreshToken": new_refresh}


def logout(refresh_token: Optional[str]) -> None:
    """Revoke one refresh credential; unknown tokens are ignored."""
    if refresh_token:
        RefreshTokenRepository().delete_by_token(refresh_token)
        db.session.commit()


def revoke_all_sessions(user_id: int) -> int:
    """Delete every refresh ledger row of the user. Caller commits."""
    return RefreshTokenRepository().delete_all_for_user(user_id)


# --- Recovery flows ---


def request_password_reset(payload: ForgotPasswordRequest) -> None:
    """Create a reset token if the user exists and mail it; unknown emails are silent."""
    user = get_user_by_email(payload.email)
    if not user:
        return

    ttl = int(current_app.config.get("PASSWORD_RESET_TTL_MINUTES", 10))
    raw_token, hashed = _generate_reset_token()
    user.password_reset_token = hashed
    user.password_reset_expires = datetime.utcnow() + timedelta(minutes=ttl)
    db.session.commit()

    frontend = current_app.config.get("FRONTEND_URL", "").rstrip("/")
    reset_url = f"{frontend}/reset-password?token={raw_token}"
    body = (
        f"Forgot your password? Open the link below to choose a new one:\n{reset_url}\n"
        f"If you didn't forget your password, please ignore this email! "
        f"This link is valid for {ttl} minutes."
    )
    try:
        get_mailer().send(user.email, f"Your password reset token (valid for {ttl} min)", body)
    except MailDeliveryError:
        user.clear_password_reset()
        db.session.commit()
        logger.exception("Password reset email could not be delivered to user %s", user.id)
        raise ExternalServiceError(
            "There was an error sending the email. Try again later!",
            code="email_delivery_failed",
        ) from None


def reset_password(raw_token: str, payload: ResetPasswordRequest) -> tuple[User, dict[str, str]]:
    """Consume a reset token, set the new password and start a fresh session."""
    hashed = _hash_token(raw_token or "")
    user = User.query.filter(
        User.password_reset_token == hashed,
        User.password_reset_expires > datetime.utcnow(),
    ).first()
    if not user:
        raise RequestValidationError(
            "Token is invalid or has expired", code="invalid_or_expired_reset_token"
        )

    if not payload.password or not payload.password_confirm:
        raise RequestValidationError(
            "Please provide password and password confirmation", code="missing_fields"
        )
    ensure_passwords_match(payload.password, payload.password_confirm)
    validate_password_strength(payload.password)

    user.set_password(payload.password)
    user.clear_password_reset()
    revoke_all_sessions(user.id)
    tokens = issue_tokens(user, commit=False)
    db.session.commit()
    return user, tokens


def validate_password_strength(password: str) -> None:
    if len(password) < PASSWORD_MIN_LENGTH:
        raise RequestValidationError(
            f"Password must be at least {PASSWORD_MIN_LENGTH} characters long",
            code="password_too_short",
        )


# --- helpers ---


def _generate_reset_token() -> tuple[str, str]:
    raw = secrets.token_hex(32)
    return raw, _hash_token(raw)


def _hash_token(raw: str) -> str:
    return sha256(raw.encode("utf-8")).hexdigest()
