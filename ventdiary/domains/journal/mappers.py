"""Journal mappers for DTO responses."""

from __future__ import annotations

from ventdiary.domains.journal.models import JournalEntry
from ventdiary.domains.journal.schemas.journal_schemas import JournalEntryResponse
from ventdiary.domains.moods.mappers import mood_response


def map_entry(entry: JournalEntry) -> dict:
    return JournalEntryResponse(
        id=entry.id,
        title=entry.title,
        content=entry.content,
        category=entry.category,
        mood=mood_response(entry.mood) if entry.mood else None,
        deleted_at=entry.deleted_at,
        created_at=entry.created_at,
        updated_at=entry.updated_at,
    ).dump()
