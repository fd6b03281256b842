"""Seed data for the mood-type catalog."""

from __future__ import annotations

import logging

from ventdiary.domains.moods.models import MoodType
from ventdiary.domains.moods.schemas.mood_schemas import validate_color_code
from ventdiary.extensions import db

logger = logging.getLogger(__name__)

DEFAULT_MOOD_TYPES = (
    {"name": "happy", "emoji": "😊", "color_code": "#4ade80", "description": "Feeling joyful and content"},
    {"name": "calm", "emoji": "😌", "color_code": "#60a5fa", "description": "Feeling peaceful and relaxed"},
    {"name": "sad", "emoji": "😔", "color_code": "#818cf8", "description": "Feeling down or unhappy"},
    {"name": "angry", "emoji": "😠", "color_code": "#f87171", "description": "Feeling frustrated or irritated"},
    {"name": "anxious", "emoji": "😰", "color_code": "#facc15", "description": "Feeling worried or nervous"},
    {"name": "neutral", "emoji": "😐", "color_code": "#9ca3af", "description": "Feeling neither positive nor negative"},
)


def seed_mood_types(catalog=DEFAULT_MOOD_TYPES) -> tuple[int, int]:
    """Upsert ``catalog`` by name. Returns (created, updated).

    Every color code is checked before anything is written.
    """
    for attrs in catalog:
        validate_color_code(attrs["color_code"])

    created = updated = 0
    for attrs in catalog:
        mood_type = MoodType.query.filter_by(name=attrs["name"]).first()
        if mood_type is None:
            db.session.add(MoodType(**attrs))
            created += 1
            continue
        changed = False
        for field, value in attrs.items():
            if getattr(mood_type, field) != value:
                setattr(mood_type, field, value)
                changed = True
        updated += int(changed)
    db.session.commit()
    logger.info("Mood types seeded: %s created, %s updated", created, updated)
    return created, updated
