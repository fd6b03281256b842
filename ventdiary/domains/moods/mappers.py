"""Mood mappers for DTO responses."""

from __future__ import annotations

from typing import Optional

from ventdiary.domains.moods.models import Mood, MoodType
from ventdiary.domains.moods.schemas.mood_schemas import (
    MoodResponse,
    MoodTypeResponse,
    MoodTypeSummary,
)


def mood_type_summary(mood_type: MoodType) -> MoodTypeSummary:
    return MoodTypeSummary(
        id=mood_type.id,
        name=mood_type.name,
        emoji=mood_type.emoji,
        color_code=mood_type.color_code,
    )


def map_mood_type(mood_type: MoodType) -> dict:
    return MoodTypeResponse(
        id=mood_type.id,
        name=mood_type.name,
        emoji=mood_type.emoji,
        color_code=mood_type.color_code,
        description=mood_type.description,
    ).dump()


def mood_response(mood: Mood) -> MoodResponse:
    return MoodResponse(
        id=mood.id,
        mood_type=mood_type_summary(mood.mood_type) if mood.mood_type else None,
        intensity=mood.intensity,
        date=mood.date,
        time_of_day=mood.time_of_day,
        notes=mood.notes,
        journal_entry_id=mood.journal_entry_id,
        created_at=mood.created_at,
        updated_at=mood.updated_at,
    )


def map_mood(mood: Optional[Mood]) -> Optional[dict]:
    if mood is None:
        return None
    return mood_response(mood).dump()
