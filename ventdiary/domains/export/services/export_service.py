"""Bulk export of journal entries and moods as JSON, CSV or PDF."""

from __future__ import annotations

import csv
import io
import json
import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Literal, Optional

from jinja2 import BaseLoader, Environment, select_autoescape
from pydantic import field_validator
from sqlalchemy.orm import joinedload

from ventdiary.core.errors import AppError
from ventdiary.core.utils.dates import end_of_day, start_of_day
from ventdiary.core.utils.schemas import QueryModel
from ventdiary.domains.journal.models import JournalEntry
from ventdiary.domains.moods.models import Mood
from ventdiary.extensions import db

logger = logging.getLogger(__name__)

ENTRY_FIELDS = [
    ("createdAt", "Created At"),
    ("title", "Title"),
    ("category", "Category"),
    ("mood", "Mood"),
    ("moodEmoji", "Mood Emoji"),
    ("moodIntensity", "Mood Intensity"),
    ("moodNotes", "Mood Notes"),
    ("content", "Content"),
]
MOOD_FIELDS = [
    ("date", "Date"),
    ("timeOfDay", "Time"),
    ("mood", "Mood"),
    ("emoji", "Emoji"),
    ("intensity", "Intensity"),
    ("notes", "Notes"),
    ("journalEntryTitle", "Linked Journal Entry"),
    ("createdAt", "Recorded At"),
]

EXPORT_TEMPLATE = r"""
<!doctype html>
<html>
<head>
  <meta charset="utf-8">
  <style>
    body { font-family: sans-serif; font-size: 11px; }
    h1 { text-align: center; }
    .item { page-break-inside: avoid; margin-bottom: 18px; }
    .meta { color: #555; }
    table { border-collapse: collapse; width: 100%; }
    th, td { border: 1px solid #ccc; padding: 4px; text-align: left; }
  </style>
</head>
<body>
  <h1>{{ title }}</h1>
  {% if kind == "entries" %}
    {% for row in rows %}
    <div class="item">
      <h3>{{ row.title }}</h3>
      <div class="meta">Date: {{ row.createdAt }} | Category: {{ row.category }}</div>
      {% if row.mood %}<div class="meta">Mood: {{ row.moodEmoji }} {{ row.mood }} (Intensity: {{ row.moodIntensity or "N/A" }})</div>{% endif %}
      {% if row.moodNotes %}<div class="meta">Mood Notes: {{ row.moodNotes }}</div>{% endif %}
      <p>{{ row.content }}</p>
    </div>
    {% endfor %}
  {% else %}
    <h3>Mood Summary</h3>
    <ul>{% for name, count in summary.items() %}<li>{{ name }}: {{ count }}</li>{% endfor %}</ul>
    <table>
      <tr>{% for _, label in fields %}<th>{{ label }}</th>{% endfor %}</tr>
      {% for row in rows %}
      <tr>{% for key, _ in fields %}<td>{{ row[key] if row[key] is not none else "" }}</td>{% endfor %}</tr>
      {% endfor %}
    </table>
  {% endif %}
</body>
</html>
"""


class ExportQuery(QueryModel):
    format: Literal["json", "csv", "pdf"] = "json"
    from_date: Optional[date] = None
    to_date: Optional[date] = None

    @field_validator("format", mode="before")
    @classmethod
    def lower_format(cls, v):
        return v.strip().lower() if isinstance(v, str) else v


@dataclass
class ExportFile:
    body: bytes
    mimetype: str
    filename: str


def entry_rows(user_id: int, from_date: Optional[date] = None, to_date: Optional[date] = None) -> List[Dict[str, Any]]:
    query = JournalEntry.query.options(
        joinedload(JournalEntry.mood).joinedload(Mood.mood_type)
    ).filter(JournalEntry.user_id == user_id, JournalEntry.deleted_at.is_(None))
    if from_date:
        query = query.filter(JournalEntry.created_at >= start_of_day(from_date))
    if to_date:
        query = query.filter(JournalEntry.created_at <= end_of_day(to_date))

    rows = []
    for entry in query.order_by(JournalEntry.created_at.desc(), JournalEntry.id.desc()).all():
        mood = entry.mood
        mood_type = mood.mood_type if mood else None
        rows.append(
            {
                "id": str(entry.id),
                "title": entry.title,
                "content": entry.content,
                "category": entry.category,
                "mood": mood_type.name if mood_type else None,
                "moodEmoji": mood_type.emoji if mood_type else None,
                "moodIntensity": mood.intensity if mood else None,
                "moodNotes": mood.notes if mood else None,
                "createdAt": entry.created_at.strftime("%Y-%m-%d %H:%M:%S"),
            }
        )
    return rows


def mood_rows(user_id: int, from_date: Optional[date] = None, to_date: Optional[date] = None) -> List[Dict[str, Any]]:
    query = (
        db.session.query(Mood, JournalEntry.title)
        .options(joinedload(Mood.mood_type))
        .outerjoin(JournalEntry, JournalEntry.id == Mood.journal_entry_id)
        .filter(Mood.user_id == user_id)
    )
    if from_date:
        query = query.filter(Mood.date >= start_of_day(from_date))
    if to_date:
        query = query.filter(Mood.date <= end_of_day(to_date))

    rows = []
    for mood, entry_title in query.order_by(Mood.date.desc(), Mood.id.desc()).all():
        mood_type = mood.mood_type
        rows.append(
            {
                "id": str(mood.id),
                "mood": mood_type.name if mood_type else None,
                "emoji": mood_type.emoji if mood_type else None,
                "intensity": mood.intensity,
                "date": mood.date.strftime("%Y-%m-%d"),
                "timeOfDay": mood.time_of_day,
                "notes": mood.notes,
                "journalEntryTitle": entry_title,
                "createdAt": mood.created_at.strftime("%Y-%m-%d %H:%M:%S"),
            }
        )
    return rows


def export_entries(user_id: int, params: ExportQuery) -> ExportFile:
    rows = entry_rows(user_id, params.from_date, params.to_date)
    return _render(rows, params.format, "journal_entries", ENTRY_FIELDS, "Journal Entries Export", "entries")


def export_moods(user_id: int, params: ExportQuery) -> ExportFile:
    rows = mood_rows(user_id, params.from_date, params.to_date)
    return _render(rows, params.format, "mood_data", MOOD_FIELDS, "Mood Data Export", "moods")


def to_csv(rows: List[Dict[str, Any]], fields: List[tuple[str, str]]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow([label for _, label in fields])
    for row in rows:
        writer.writerow(["" if row.get(key) is None else row.get(key) for key, _ in fields])
    return buffer.getvalue()


def render_html(context: Dict[str, Any], template: str = EXPORT_TEMPLATE) -> str:
    env = Environment(loader=BaseLoader(), autoescape=select_autoescape(default_for_string=True))
    return env.from_string(template).render(**context)


def render_with_weasyprint(html: str) -> bytes:
    try:
        from weasyprint import HTML
    except ImportError:
        raise AppError("PDF export is not available on this server.", code="pdf_unavailable") from None
    return HTML(string=html).write_pdf()


def _render(rows, fmt: str, basename: str, fields, title: str, kind: str) -> ExportFile:
    if fmt == "csv":
        return ExportFile(to_csv(rows, fields).encode("utf-8"), "text/csv", f"{basename}.csv")
    if fmt == "pdf":
        summary: Dict[str, int] = {}
        if kind == "moods":
            for row in rows:
                name = row["mood"] or "Unknown"
                summary[name] = summary.get(name, 0) + 1
        html = render_html({"title": title, "rows": rows, "fields": fields, "kind": kind, "summary": summary})
        logger.info("Rendering %s PDF with %s rows", basename, len(rows))
        return ExportFile(render_with_weasyprint(html), "application/pdf", f"{basename}.pdf")
    body = json.dumps(rows, ensure_ascii=False).encode("utf-8")
    return ExportFile(body, "application/json", f"{basename}.json")
