"""Export API tests (JSON and CSV; PDF only checks wiring)."""

from __future__ import annotations

import csv
import io
import json
from datetime import datetime

import pytest

pytestmark = pytest.mark.integration

from ventdiary.domains.export.services import export_service
from ventdiary.domains.export.services.export_service import ENTRY_FIELDS, MOOD_FIELDS
from ventdiary.tests.conftest import API, make_entry

EXPORT = f"{API}/export"


@pytest.fixture
def diary(user, mood_types):
    make_entry(user.id, title="Calm day", content="Tea, then a walk", category="MYSELF",
               created_at=datetime(2024, 5, 1, 9, 30), mood_type=mood_types["calm"], intensity=2, notes="quiet")
    make_entry(user.id, title="Plain", content="No mood today", created_at=datetime(2024, 5, 2, 10, 0))


def test_export_entries_json(client, headers, diary):
    resp = client.get(f"{EXPORT}/entries", headers=headers)
    assert resp.status_code == 200
    assert resp.mimetype == "application/json"
    assert resp.headers["Content-Disposition"] == "attachment; filename=journal_entries.json"
    rows = json.loads(resp.data)
    assert [r["title"] for r in rows] == ["Plain", "Calm day"]
    calm = rows[1]
    assert calm["mood"] == "calm"
    assert calm["moodEmoji"] == "😌"
    assert calm["moodIntensity"] == 2
    assert calm["moodNotes"] == "quiet"
    assert calm["createdAt"] == "2024-05-01 09:30:00"
    assert rows[0]["mood"] is None


def test_export_entries_csv(client, headers, diary):
    resp = client.get(f"{EXPORT}/entries?format=CSV", headers=headers)
    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    assert resp.headers["Content-Disposition"].endswith("journal_entries.csv")
    reader = list(csv.reader(io.StringIO(resp.data.decode("utf-8"))))
    assert reader[0] == [label for _, label in ENTRY_FIELDS]
    assert len(reader) == 3
    assert "Tea, then a walk" in reader[2]


def test_export_entries_date_filter(client, headers, diary):
    resp = client.get(f"{EXPORT}/entries?fromDate=2024-05-02", headers=headers)
    assert [r["title"] for r in json.loads(resp.data)] == ["Plain"]


def test_export_moods(client, headers, mood_types, diary):
    client.post(f"{API}/moods", json={"moodTypeId": mood_types["happy"].id, "date": "2024-05-03T08:00:00"},
                headers=headers)

    resp = client.get(f"{EXPORT}/moods?format=json", headers=headers)
    assert resp.headers["Content-Disposition"] == "attachment; filename=mood_data.json"
    rows = json.loads(resp.data)
    assert [(r["mood"], r["journalEntryTitle"]) for r in rows] == [("happy", None), ("calm", "Calm day")]
    assert rows[1]["date"] == "2024-05-01"

    csv_resp = client.get(f"{EXPORT}/moods?format=csv", headers=headers)
    header = next(csv.reader(io.StringIO(csv_resp.data.decode("utf-8"))))
    assert header == [label for _, label in MOOD_FIELDS]


def test_export_unknown_format(client, headers, diary):
    resp = client.get(f"{EXPORT}/entries?format=xml", headers=headers)
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "validation_error"


def test_export_pdf_renders_html_through_weasyprint(client, headers, diary, monkeypatch):
    captured = {}

    def fake_pdf(html: str) -> bytes:
        captured["html"] = html
        return b"%PDF-1.7 fake"

    monkeypatch.setattr(export_service, "render_with_weasyprint", fake_pdf)
    resp = client.get(f"{EXPORT}/entries?format=pdf", headers=headers)
    assert resp.status_code == 200
    assert resp.mimetype == "application/pdf"
    assert resp.data == b"%PDF-1.7 fake"
    assert "Calm day" in captured["html"]
    assert "Journal Entries Export" in captured["html"]


def test_export_requires_auth(client):
    assert client.get(f"{EXPORT}/entries").status_code == 401
