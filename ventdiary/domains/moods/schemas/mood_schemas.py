"""Mood request/response schemas."""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import List, Literal, Optional

from pydantic import Field, field_validator

from ventdiary.core.utils.schemas import CamelModel, QueryModel

TIME_OF_DAY_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d(:[0-5]\d)?$")
COLOR_CODE_RE = re.compile(r"^#([0-9A-Fa-f]{3}){1,2}$")

INTENSITY_MIN = 1
INTENSITY_MAX = 5
DEFAULT_INTENSITY = 3


def validate_time_of_day(v: Optional[str]) -> Optional[str]:
    if v in (None, ""):
        return None
    if not TIME_OF_DAY_RE.match(v):
        raise ValueError("time of day must be HH:MM or HH:MM:SS")
    return v


def validate_color_code(v: str) -> str:
    if not COLOR_CODE_RE.match(v or ""):
        raise ValueError(f"color code must be #rgb or #rrggbb, got {v!r}")
    return v


class MoodCreateRequest(CamelModel):
    mood_type_id: int
    intensity: Optional[int] = Field(default=None, ge=INTENSITY_MIN, le=INTENSITY_MAX)
    date: Optional[datetime] = None
    time_of_day: Optional[str] = None
    notes: Optional[str] = None
    journal_entry_id: Optional[int] = None

    @field_validator("time_of_day")
    @classmethod
    def check_time_of_day(cls, v: Optional[str]) -> Optional[str]:
        return validate_time_of_day(v)


class MoodListFilter(QueryModel):
    from_date: Optional[date] = None
    to_date: Optional[date] = None
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=20, ge=1, le=100)


class StatsQuery(QueryModel):
    period: Literal["week", "month", "3months", "custom"] = "month"
    from_date: Optional[date] = None
    to_date: Optional[date] = None


class CalendarQuery(QueryModel):
    year: Optional[int] = None
    month: Optional[int] = None


class MoodTypeSummary(CamelModel):
    id: int
    name: str
    emoji: str
    color_code: str


class MoodTypeResponse(MoodTypeSummary):
    description: Optional[str] = None


class MoodResponse(CamelModel):
    id: int
    mood_type: Optional[MoodTypeSummary] = None
    intensity: int
    date: datetime
    time_of_day: Optional[str] = None
    notes: Optional[str] = None
    journal_entry_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class MoodCount(CamelModel):
    mood_type: MoodTypeSummary
    count: int
    average_intensity: float

