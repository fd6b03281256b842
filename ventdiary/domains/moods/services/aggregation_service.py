"""Mood aggregation over journal entries.

Stats, calendar and insights all read from ``collect_entry_moods``: the
caller's live entries created inside a window that have a linked mood,
joined to the mood and its mood type. Rows whose mood or mood type no longer
resolves are dropped instead of failing the request.
"""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, List, Optional

from dateutil.relativedelta import relativedelta

from ventdiary.core.errors import RequestValidationError
from ventdiary.core.utils.dates import end_of_day, start_of_day
from ventdiary.domains.journal.models import JournalEntry
from ventdiary.domains.moods.mappers import mood_type_summary
from ventdiary.domains.moods.models import Mood, MoodType
from ventdiary.domains.moods.schemas.mood_schemas import MoodCount
from ventdiary.extensions import db

PERIODS = ("week", "month", "3months", "custom")


@dataclass(frozen=True)
class DateWindow:
    start: datetime
    end: datetime

    @classmethod
    def between(cls, start: date, end: date) -> "DateWindow":
        if start > end:
            raise RequestValidationError("Start date cannot be after end date", code="invalid_date_range")
        return cls(start_of_day(start), end_of_day(end))

    @classmethod
    def trailing(cls, today: date, delta: relativedelta) -> "DateWindow":
        return cls.between(today - delta, today)

    @classmethod
    def trailing_month(cls, today: Optional[date] = None) -> "DateWindow":
        return cls.trailing(today or datetime.utcnow().date(), relativedelta(months=1))

    @classmethod
    def for_period(
        cls,
        period: str = "month",
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
        today: Optional[date] = None,
    ) -> "DateWindow":
        today = today or datetime.utcnow().date()
        if period == "week":
            return cls.trailing(today, relativedelta(days=7))
        if period == "3months":
            return cls.trailing(today, relativedelta(months=3))
        if period == "custom":
            start = from_date or (today - relativedelta(months=1))
            return cls.between(start, to_date or today)
        if period == "month":
            return cls.trailing_month(today)
        raise RequestValidationError(
            f"Invalid period. Must be one of: {', '.join(PERIODS)}", code="invalid_period"
        )

    @classmethod
    def for_month(cls, year: int, month: int) -> "DateWindow":
        if month < 1 or month > 12:
            raise RequestValidationError(
                "Invalid month specified. Must be between 1 and 12.", code="invalid_month"
            )
        if year < 1 or year > 9999:
            raise RequestValidationError("Invalid year specified.", code="invalid_year")
        first = date(year, month, 1)
        last = first + relativedelta(months=1, days=-1)
        return cls.between(first, last)


@dataclass(frozen=True)
class EntryMood:
    entry_id: int
    entry_created_at: datetime
    mood: Mood
    mood_type: MoodType


def collect_entry_moods(user_id: int, window: DateWindow) -> List[EntryMood]:
    rows = (
        db.session.query(JournalEntry, Mood, MoodType)
        .outerjoin(Mood, JournalEntry.mood_id == Mood.id)
        .outerjoin(MoodType, Mood.mood_type_id == MoodType.id)
        .filter(
            JournalEntry.user_id == user_id,
            JournalEntry.deleted_at.is_(None),
            JournalEntry.mood_id.isnot(None),
            JournalEntry.created_at >= window.start,
            JournalEntry.created_at <= window.end,
        )
        .order_by(JournalEntry.created_at.asc(), JournalEntry.id.asc())
        .all()
    )
    return [
        EntryMood(entry.id, entry.created_at, mood, mood_type)
        for entry, mood, mood_type in rows
        if mood is not None and mood_type is not None
    ]


def mood_frequencies(rows: Iterable[EntryMood]) -> List[MoodCount]:
    """Count per mood type, highest count first, ties broken by name."""
    buckets: dict[int, dict] = {}
    for row in rows:
        bucket = buckets.setdefault(
            row.mood_type.id, {"mood_type": row.mood_type, "count": 0, "intensity_total": 0}
        )
        bucket["count"] += 1
        bucket["intensity_total"] += row.mood.intensity

    ordered = sorted(buckets.values(), key=lambda b: (-b["count"], b["mood_type"].name))
    return [
        MoodCount(
            mood_type=mood_type_summary(b["mood_type"]),
            count=b["count"],
            average_intensity=round(b["intensity_total"] / b["count"], 2),
        )
        for b in ordered
    ]


def most_frequent(counts: List[MoodCount]) -> List[MoodCount]:
    """Every mood type sharing the top count."""
    if not counts:
        return []
    top = max(c.count for c in counts)
    return [c for c in counts if c.count == top]


def calendar(rows: Iterable[EntryMood]) -> "OrderedDict[str, list[dict]]":
    """Group moods by the creation day of their entry (``YYYY-MM-DD``)."""
    days: "OrderedDict[str, list[dict]]" = OrderedDict()
    for row in rows:
        key = row.entry_created_at.strftime("%Y-%m-%d")
        days.setdefault(key, []).append(
            {
                "id": row.mood.id,
                "entryId": row.entry_id,
                "intensity": row.mood.intensity,
                "notes": row.mood.notes,
                "moodType": mood_type_summary(row.mood_type).dump(),
            }
        )
    return days


def average_intensity(rows: List[EntryMood]) -> Optional[float]:
    if not rows:
        return None
    return round(sum(r.mood.intensity for r in rows) / len(rows), 2)


# --- read models used by the controllers ---


def mood_stats(user_id: int, window: DateWindow) -> dict:
    counts = mood_frequencies(collect_entry_moods(user_id, window))
    return {
        "mostFrequentMoods": [c.dump() for c in most_frequent(counts)],
        "moodCounts": [c.dump() for c in counts],
        "dateRange": {
            "from": window.start.date().isoformat(),
            "to": window.end.date().isoformat(),
        },
    }


def mood_calendar(user_id: int, year: int, month: int) -> dict:
    window = DateWindow.for_month(year, month)
    return {
        "calendarData": calendar(collect_entry_moods(user_id, window)),
        "year": year,
        "month": month,
    }


def mood_insights(user_id: int, today: Optional[date] = None) -> dict:
    window = DateWindow.for_period("3months", today=today)
    rows = collect_entry_moods(user_id, window)
    counts = mood_frequencies(rows)
    top = most_frequent(counts)
    avg = average_intensity(rows)
    return {
        "period": "last 3 months",
        "totalMoodsRecorded": len(rows),
        "mostFrequentMoods": [c.dump() for c in top],
        "averageIntensity": avg,
        "moodCounts": [c.dump() for c in counts],
        "summary": _summary(len(rows), top, avg),
    }


def _summary(total: int, top: List[MoodCount], avg: Optional[float]) -> str:
    if not total:
        return "No moods recorded in the last 3 months."
    names = " and ".join(c.mood_type.name for c in top)
    noun = "mood" if total == 1 else "moods"
    return f"You recorded {total} {noun} in the last 3 months. Most often you felt {names} (average intensity {avg})."
