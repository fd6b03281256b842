"""Date helpers. All stored timestamps are naive UTC."""

from __future__ import annotations

from datetime import date, datetime, time


def start_of_day(value: date) -> datetime:
    return datetime.combine(value, time.min)


def end_of_day(value: date) -> datetime:
    return datetime.combine(value, time.max)
