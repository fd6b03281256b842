"""Search over the caller's live journal entries."""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from pydantic import Field, field_validator
from sqlalchemy.orm import joinedload

from ventdiary.core.utils.dates import end_of_day, start_of_day
from ventdiary.core.utils.pagination import paginate
from ventdiary.core.utils.schemas import QueryModel
from ventdiary.domains.journal.models import JournalEntry
from ventdiary.domains.moods.models import Mood
from ventdiary.extensions import db


class SearchQuery(QueryModel):
    query: Optional[str] = None
    categories: List[str] = Field(default_factory=list)
    moods: List[int] = Field(default_factory=list)
    from_date: Optional[date] = None
    to_date: Optional[date] = None
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=20, ge=1, le=100)

    @field_validator("query")
    @classmethod
    def strip_query(cls, v: Optional[str]) -> Optional[str]:
        v = (v or "").strip()
        return v or None

    @field_validator("categories", mode="before")
    @classmethod
    def split_categories(cls, v):
        if isinstance(v, str):
            v = v.split(",")
        return [c.strip().upper() for c in v if c and c.strip()]

    @field_validator("moods", mode="before")
    @classmethod
    def split_mood_ids(cls, v):
        if isinstance(v, str):
            v = v.split(",")
        ids = [str(x).strip() for x in v]
        ids = [m for m in ids if m]
        for m in ids:
            if not m.isdigit():
                raise ValueError(f"mood ids must be integers, got {m!r}")
        return [int(m) for m in ids]


def search_entries(user_id: int, params: SearchQuery) -> dict:
    query = JournalEntry.query.options(
        joinedload(JournalEntry.mood).joinedload(Mood.mood_type)
    ).filter(JournalEntry.user_id == user_id, JournalEntry.deleted_at.is_(None))

    if params.query:
        like = f"%{_escape_like(params.query.lower())}%"
        query = query.filter(
            db.or_(
                db.func.lower(JournalEntry.title).like(like, escape="\\"),
                db.func.lower(JournalEntry.content).like(like, escape="\\"),
            )
        )
    if params.categories:
        query = query.filter(JournalEntry.category.in_(params.categories))
    if params.moods:
        mood_ids = db.session.query(Mood.id).filter(
            Mood.user_id == user_id, Mood.mood_type_id.in_(params.moods)
        )
        query = query.filter(JournalEntry.mood_id.in_(mood_ids))
    if params.from_date:
        query = query.filter(JournalEntry.created_at >= start_of_day(params.from_date))
    if params.to_date:
        query = query.filter(JournalEntry.created_at <= end_of_day(params.to_date))

    query = query.order_by(JournalEntry.created_at.desc(), JournalEntry.id.desc())
    return paginate(query, params.page, params.limit)


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
