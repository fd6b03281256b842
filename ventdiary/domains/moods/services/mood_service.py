"""Mood-type catalog and mood record services."""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from sqlalchemy.orm import joinedload

from ventdiary.core.errors import RequestValidationError
from ventdiary.core.utils.dates import end_of_day, start_of_day
from ventdiary.core.utils.pagination import paginate
from ventdiary.domains.moods.models import Mood, MoodType
from ventdiary.domains.moods.schemas.mood_schemas import (
    DEFAULT_INTENSITY,
    INTENSITY_MAX,
    INTENSITY_MIN,
    MoodCreateRequest,
    validate_time_of_day,
)
from ventdiary.extensions import db


def list_mood_types() -> list[MoodType]:
    return MoodType.query.order_by(MoodType.name.asc()).all()


def get_mood_type(mood_type_id: Optional[int]) -> MoodType:
    mood_type = db.session.get(MoodType, mood_type_id) if mood_type_id is not None else None
    if mood_type is None:
        raise RequestValidationError("Invalid mood type ID", code="invalid_mood_type")
    return mood_type


def build_mood(
    user_id: int,
    mood_type_id: int,
    *,
    intensity: Optional[int] = None,
    when: Optional[datetime] = None,
    time_of_day: Optional[str] = None,
    notes: Optional[str] = None,
    journal_entry_id: Optional[int] = None,
) -> Mood:
    """Validate and construct an unsaved mood record."""
    mood_type = get_mood_type(mood_type_id)
    return Mood(
        user_id=user_id,
        mood_type_id=mood_type.id,
        mood_type=mood_type,
        intensity=_validate_intensity(intensity),
        date=when or datetime.utcnow(),
        time_of_day=validate_time_or_raise(time_of_day),
        notes=_clean_notes(notes),
        journal_entry_id=journal_entry_id,
    )


def apply_mood_fields(mood: Mood, mood_type_id: int, **changes) -> Mood:
    """Set a new mood type and overwrite only the fields present in ``changes``.

    Accepted keys are ``intensity``, ``when``, ``time_of_day`` and ``notes``.
    """
    mood_type = get_mood_type(mood_type_id)
    mood.mood_type_id = mood_type.id
    mood.mood_type = mood_type
    if "intensity" in changes:
        mood.intensity = _validate_intensity(changes["intensity"])
    if changes.get("when") is not None:
        mood.date = changes["when"]
    if "time_of_day" in changes:
        mood.time_of_day = validate_time_or_raise(changes["time_of_day"])
    if "notes" in changes:
        mood.notes = _clean_notes(changes["notes"])
    return mood


def create_mood(user_id: int, payload: MoodCreateRequest) -> Mood:
    """Record a standalone mood, optionally linking it to one of the user's entries."""
    from ventdiary.domains.journal.models import JournalEntry

    entry = None
    if payload.journal_entry_id is not None:
        entry = JournalEntry.query.filter_by(
            id=payload.journal_entry_id, user_id=user_id, deleted_at=None
        ).first()
        if entry is None:
            raise RequestValidationError(
                "Invalid journal entry ID or entry does not belong to user",
                code="invalid_journal_entry",
            )
        if entry.mood_id is not None:
            raise RequestValidationError(
                "This journal entry is already linked to a mood", code="entry_has_mood"
            )

    try:
        mood = build_mood(
            user_id,
            payload.mood_type_id,
            intensity=payload.intensity,
            when=payload.date,
            time_of_day=payload.time_of_day,
            notes=payload.notes,
            journal_entry_id=entry.id if entry else None,
        )
        db.session.add(mood)
        db.session.flush()
        if entry is not None:
            entry.mood = mood
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    return mood


def list_moods(
    user_id: int,
    *,
    from_date: Optional[date] = None,
    to_date: Optional[date] = None,
    page: int = 1,
    limit: int = 20,
) -> dict:
    query = Mood.query.options(joinedload(Mood.mood_type)).filter(Mood.user_id == user_id)
    if from_date:
        query = query.filter(Mood.date >= start_of_day(from_date))
    if to_date:
        query = query.filter(Mood.date <= end_of_day(to_date))
    query = query.order_by(Mood.date.desc(), Mood.created_at.desc(), Mood.id.desc())
    return paginate(query, page, limit)


def _validate_intensity(intensity: Optional[int]) -> int:
    if intensity is None:
        return DEFAULT_INTENSITY
    try:
        value = int(intensity)
    except (TypeError, ValueError):
        raise RequestValidationError("Intensity must be between 1 and 5", code="invalid_intensity") from None
    if value < INTENSITY_MIN or value > INTENSITY_MAX:
        raise RequestValidationError("Intensity must be between 1 and 5", code="invalid_intensity")
    return value


def validate_time_or_raise(time_of_day: Optional[str]) -> Optional[str]:
    try:
        return validate_time_of_day(time_of_day)
    except ValueError as exc:
        raise RequestValidationError(str(exc), code="invalid_time_of_day") from None


def _clean_notes(notes: Optional[str]) -> Optional[str]:
    notes = (notes or "").strip()
    return notes or None
