"""Mood JSON API."""

from __future__ import annotations

from datetime import datetime

from flask import Blueprint
from flask_jwt_extended import current_user

from ventdiary.core.auth.guard import protect
from ventdiary.core.utils.pagination import pagination_meta
from ventdiary.core.utils.responses import success
from ventdiary.core.utils.validation import load_args, load_json
from ventdiary.domains.moods.mappers import map_mood, map_mood_type
from ventdiary.domains.moods.schemas.mood_schemas import (
    CalendarQuery,
    MoodCreateRequest,
    MoodListFilter,
    StatsQuery,
)
from ventdiary.domains.moods.services import aggregation_service, mood_service
from ventdiary.domains.moods.services.aggregation_service import DateWindow

mood_api_bp = Blueprint("mood_api", __name__)


@mood_api_bp.get("/types")
@protect
def list_mood_types():
    mood_types = [map_mood_type(mt) for mt in mood_service.list_mood_types()]
    return success({"moodTypes": mood_types}, results=len(mood_types))


@mood_api_bp.get("")
@protect
def list_moods():
    filters = load_args(MoodListFilter)
    result = mood_service.list_moods(
        current_user.id,
        from_date=filters.from_date,
        to_date=filters.to_date,
        page=filters.page,
        limit=filters.limit,
    )
    moods = [map_mood(m) for m in result["items"]]
    return success({"moods": moods}, results=len(moods), pagination=pagination_meta(result))


@mood_api_bp.post("")
@protect
def create_mood():
    data = load_json(MoodCreateRequest)
    mood = mood_service.create_mood(current_user.id, data)
    return success({"mood": map_mood(mood)}, 201)


@mood_api_bp.get("/stats")
@protect
def mood_stats():
    query = load_args(StatsQuery)
    window = DateWindow.for_period(query.period, query.from_date, query.to_date)
    return success(aggregation_service.mood_stats(current_user.id, window))


@mood_api_bp.get("/calendar")
@protect
def mood_calendar():
    query = load_args(CalendarQuery)
    now = datetime.utcnow()
    year = query.year if query.year is not None else now.year
    month = query.month if query.month is not None else now.month
    return success(aggregation_service.mood_calendar(current_user.id, year, month))


@mood_api_bp.get("/insights")
@protect
def mood_insights():
    return success(aggregation_service.mood_insights(current_user.id))
