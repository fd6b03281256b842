"""Journal request/response schemas."""

from __future__ import annotations

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import Field, field_validator

from ventdiary.core.utils.schemas import CamelModel, QueryModel
from ventdiary.domains.moods.schemas.mood_schemas import (
    INTENSITY_MAX,
    INTENSITY_MIN,
    MoodResponse,
    validate_time_of_day,
)

SortField = Literal["createdAt", "-createdAt", "updatedAt", "-updatedAt", "title", "-title"]


class _EntryMoodFields(CamelModel):
    mood_type_id: Optional[int] = None
    mood_intensity: Optional[int] = Field(default=None, ge=INTENSITY_MIN, le=INTENSITY_MAX)
    mood_notes: Optional[str] = None
    mood_date: Optional[datetime] = None
    mood_time_of_day: Optional[str] = None

    @field_validator("mood_time_of_day")
    @classmethod
    def check_time_of_day(cls, v: Optional[str]) -> Optional[str]:
        return validate_time_of_day(v)


class JournalEntryCreate(_EntryMoodFields):
    title: str = Field(min_length=1, max_length=255)
    content: str = Field(min_length=1)
    category: str = Field(min_length=1)

    @field_validator("title", "content")
    @classmethod
    def strip_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("category")
    @classmethod
    def upper_category(cls, v: str) -> str:
        return v.strip().upper()


class JournalEntryUpdate(_EntryMoodFields):
    """Partial update; ``moodTypeId: null`` removes the linked mood."""

    title: Optional[str] = Field(default=None, max_length=255)
    content: Optional[str] = None
    category: Optional[str] = None

    @field_validator("title", "content")
    @classmethod
    def strip_optional(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("category")
    @classmethod
    def upper_category(cls, v: Optional[str]) -> Optional[str]:
        return v.strip().upper() if v is not None else None

    @property
    def mood_given(self) -> bool:
        return "mood_type_id" in self.model_fields_set


class JournalEntryListFilter(QueryModel):
    category: Optional[str] = None
    from_date: Optional[date] = None
    to_date: Optional[date] = None
    mood_type_id: Optional[int] = None
    sort: SortField = "-createdAt"
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=20, ge=1, le=100)
    with_deleted: bool = False

    @field_validator("with_deleted", mode="before")
    @classmethod
    def bare_flag(cls, v):
        # ``?withDeleted`` with no value means true
        return True if v == "" else v

    @field_validator("category")
    @classmethod
    def upper_category(cls, v: Optional[str]) -> Optional[str]:
        return v.strip().upper() if v else None


class JournalEntryResponse(CamelModel):
    id: int
    title: str
    content: str
    category: str
    mood: Optional[MoodResponse] = None
    deleted_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
