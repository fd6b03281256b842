"""Schemas for auth flows (register, login, refresh, recovery, reset)."""

from __future__ import annotations

from typing import Optional

from pydantic import EmailStr, Field, field_validator

from ventdiary.core.errors import RequestValidationError
from ventdiary.core.utils.schemas import CamelModel

PASSWORD_MIN_LENGTH = 8
PASSWORDS_DO_NOT_MATCH = "Passwords do not match"


def _normalize_email(v: str) -> str:
    return v.strip().lower()


class RegisterRequest(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(min_length=PASSWORD_MIN_LENGTH)
    password_confirm: str

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Please tell us your name!")
        return v

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return _normalize_email(v)


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return _normalize_email(v)


class RefreshRequest(CamelModel):
    refresh_token: str = Field(min_length=1)


class LogoutRequest(CamelModel):
    refresh_token: Optional[str] = None


class ForgotPasswordRequest(CamelModel):
    email: EmailStr

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return _normalize_email(v)


class ResetPasswordRequest(CamelModel):
    """Checked after the token lookup, so an invalid token wins over bad fields."""

    password: Optional[str] = None
    password_confirm: Optional[str] = None


class ChangePasswordRequest(CamelModel):
    current_password: Optional[str] = None
    new_password: Optional[str] = None
    confirm_password: Optional[str] = None


def ensure_passwords_match(password: str, confirm: str) -> None:
    if password != confirm:
        raise RequestValidationError(PASSWORDS_DO_NOT_MATCH, code="passwords_do_not_match")
