"""Journal services: CRUD, soft delete and listing.

Every read goes through ``_entry_query`` so the mood and mood type of an
entry are always fetched with an explicit join.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Query, joinedload

from ventdiary.core.errors import NotFoundError, RequestValidationError
from ventdiary.core.users.entitlements import ENTRY_CATEGORY, entitled_values
from ventdiary.core.utils.dates import end_of_day, start_of_day
from ventdiary.core.utils.pagination import paginate
from ventdiary.domains.journal.models import BASE_CATEGORIES, JournalEntry
from ventdiary.domains.journal.schemas.journal_schemas import (
    JournalEntryCreate,
    JournalEntryListFilter,
    JournalEntryUpdate,
)
from ventdiary.domains.moods.models import Mood
from ventdiary.domains.moods.services.mood_service import apply_mood_fields, build_mood
from ventdiary.extensions import db

ENTRY_NOT_FOUND = "No journal entry found with that ID for this user"

_SORT_COLUMNS = {
    "createdAt": JournalEntry.created_at,
    "updatedAt": JournalEntry.updated_at,
    "title": JournalEntry.title,
}

# payload field -> apply_mood_fields keyword
_MOOD_UPDATE_FIELDS = {
    "mood_intensity": "intensity",
    "mood_date": "when",
    "mood_time_of_day": "time_of_day",
    "mood_notes": "notes",
}


def list_categories(user_id: int) -> list[str]:
    extra = [c for c in entitled_values(user_id, ENTRY_CATEGORY) if c not in BASE_CATEGORIES]
    return [*BASE_CATEGORIES, *extra]


def create_entry(user_id: int, payload: JournalEntryCreate) -> JournalEntry:
    """Insert an entry and, when ``moodTypeId`` is given, its linked mood in one transaction."""
    category = _validate_category(user_id, payload.category)
    try:
        entry = JournalEntry(
            user_id=user_id,
            title=payload.title,
            content=payload.content,
            category=category,
        )
        db.session.add(entry)
        db.session.flush()

        if payload.mood_type_id is not None:
            mood = build_mood(
                user_id,
                payload.mood_type_id,
                intensity=payload.mood_intensity,
                when=payload.mood_date,
                time_of_day=payload.mood_time_of_day,
                notes=payload.mood_notes,
                journal_entry_id=entry.id,
            )
            db.session.add(mood)
            db.session.flush()
            entry.mood = mood
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    return get_entry(user_id, entry.id)


def update_entry(user_id: int, entry_id: int, payload: JournalEntryUpdate) -> JournalEntry:
    entry = get_entry(user_id, entry_id)
    try:
        if payload.title is not None:
            entry.title = payload.title
        if payload.content is not None:
            entry.content = payload.content
        if payload.category is not None:
            entry.category = _validate_category(user_id, payload.category)

        if payload.mood_given:
            _sync_mood(entry, payload)
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    return get_entry(user_id, entry.id)


def delete_entry(user_id: int, entry_id: int) -> None:
    """Soft-delete the entry and remove its linked mood."""
    entry = get_entry(user_id, entry_id)
    try:
        entry.deleted_at = datetime.utcnow()
        if entry.mood is not None:
            _remove_mood(entry)
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise


def restore_entry(user_id: int, entry_id: int) -> JournalEntry:
    entry = (
        _entry_query(user_id, with_deleted=True)
        .filter(JournalEntry.id == entry_id, JournalEntry.deleted_at.isnot(None))
        .first()
    )
    if not entry:
        raise NotFoundError("No deleted journal entry found with that ID for this user")
    entry.deleted_at = None
    db.session.commit()
    return entry


def get_entry(user_id: int, entry_id: int, *, with_deleted: bool = False) -> JournalEntry:
    entry = _entry_query(user_id, with_deleted=with_deleted).filter(JournalEntry.id == entry_id).first()
    if not entry:
        raise NotFoundError(ENTRY_NOT_FOUND)
    return entry


def list_entries(user_id: int, filters: JournalEntryListFilter) -> dict:
    query = _entry_query(user_id, with_deleted=filters.with_deleted)
    if filters.category:
        query = query.filter(JournalEntry.category == filters.category)
    if filters.from_date:
        query = query.filter(JournalEntry.created_at >= start_of_day(filters.from_date))
    if filters.to_date:
        query = query.filter(JournalEntry.created_at <= end_of_day(filters.to_date))
    if filters.mood_type_id is not None:
        query = query.filter(
            JournalEntry.mood_id.in_(
                db.session.query(Mood.id).filter(Mood.mood_type_id == filters.mood_type_id)
            )
        )
    query = query.order_by(*_order_by(filters.sort))
    return paginate(query, filters.page, filters.limit)


# --- helpers ---


def _entry_query(user_id: int, *, with_deleted: bool = False) -> Query:
    query = JournalEntry.query.options(
        joinedload(JournalEntry.mood).joinedload(Mood.mood_type)
    ).filter(JournalEntry.user_id == user_id)
    if not with_deleted:
        query = query.filter(JournalEntry.deleted_at.is_(None))
    return query


def _order_by(sort: str):
    descending = sort.startswith("-")
    column = _SORT_COLUMNS[sort.lstrip("-")]
    if descending:
        return column.desc(), JournalEntry.id.desc()
    return column.asc(), JournalEntry.id.asc()


def _validate_category(user_id: int, category: Optional[str]) -> str:
    value = (category or "").strip().upper()
    allowed = list_categories(user_id)
    if value not in allowed:
        raise RequestValidationError(
            f"Category must be one of: {', '.join(allowed)}", code="invalid_category"
        )
    return value


def _sync_mood(entry: JournalEntry, payload: JournalEntryUpdate) -> None:
    existing: Optional[Mood] = entry.mood
    if payload.mood_type_id is None:
        if existing is not None:
            _remove_mood(entry)
        return

    if existing is not None:
        sent = payload.model_fields_set
        changes = {
            key: getattr(payload, field)
            for field, key in _MOOD_UPDATE_FIELDS.items()
            if field in sent
        }
        apply_mood_fields(existing, payload.mood_type_id, **changes)
        return

    mood = build_mood(
        entry.user_id,
        payload.mood_type_id,
        intensity=payload.mood_intensity,
        when=payload.mood_date,
        time_of_day=payload.mood_time_of_day,
        notes=payload.mood_notes,
        journal_entry_id=entry.id,
    )
    db.session.add(mood)
    db.session.flush()
    entry.mood = mood


def _remove_mood(entry: JournalEntry) -> None:
    mood = entry.mood
    entry.mood = None
    db.session.flush()
    db.session.delete(mood)
