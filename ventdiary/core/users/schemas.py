"""Typed schemas for user IO."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from pydantic import ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

from ventdiary.core.utils.schemas import CamelModel

if TYPE_CHECKING:
    from ventdiary.core.users.models import User


class UpdateProfileRequest(CamelModel):
    """Only name and email are applied; other keys are ignored except password fields."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: Optional[str]) -> Optional[str]:
        return v.strip().lower() if v else v

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: Optional[str]) -> Optional[str]:
        return v.strip() if v else v

    @property
    def touches_password(self) -> bool:
        extra = self.model_extra or {}
        return any(extra.get(key) for key in ("password", "passwordConfirm"))


class UserResponse(CamelModel):
    # Response should not re-validate persisted emails
    id: int
    name: str
    email: str
    profile_image_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


def serialize_user(user: "User") -> dict:
    return UserResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        profile_image_url=user.profile_image_url,
        created_at=user.created_at,
        updated_at=user.updated_at,
    ).dump()
