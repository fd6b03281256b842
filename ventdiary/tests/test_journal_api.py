"""Journal API tests.

Tests all API endpoints for the journal domain:
- GET /entries - list with filters, sort and pagination
- GET /entries/<id> - get entry
- POST /entries - create entry (+ optional mood)
- PATCH /entries/<id> - update entry and its mood
- DELETE /entries/<id> - soft delete
- POST /entries/<id>/restore
- GET /entries/categories
"""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest

pytestmark = pytest.mark.integration

from ventdiary.core.users.entitlements import ENTRY_CATEGORY, grant
from ventdiary.domains.journal.models import JournalEntry
from ventdiary.domains.moods.models import Mood
from ventdiary.extensions import db
from ventdiary.tests.conftest import API, make_entry

ENTRIES = f"{API}/entries"


def _create(client, headers, **overrides):
    payload = {"title": "Title", "content": "Content", "category": "work"}
    payload.update(overrides)
    return client.post(ENTRIES, json=payload, headers=headers)


# ==================== Create ====================


def test_create_entry_without_mood(client, user, headers):
    resp = _create(client, headers, title="  Padded  ")
    assert resp.status_code == 201
    entry = resp.get_json()["data"]["entry"]
    assert entry["title"] == "Padded"
    assert entry["category"] == "WORK"
    assert entry["mood"] is None
    assert Mood.query.count() == 0


def test_create_entry_with_mood_links_both_sides(client, user, headers, mood_types):
    happy = mood_types["happy"]
    resp = _create(client, headers, moodTypeId=happy.id, moodIntensity=4, moodNotes="sunny")
    assert resp.status_code == 201
    entry = resp.get_json()["data"]["entry"]
    assert entry["mood"]["moodType"]["name"] == "happy"
    assert entry["mood"]["intensity"] == 4
    assert entry["mood"]["notes"] == "sunny"

    row = db.session.get(JournalEntry, entry["id"])
    mood = Mood.query.one()
    assert row.mood_id == mood.id
    assert mood.journal_entry_id == row.id
    assert mood.user_id == user.id


def test_create_entry_mood_defaults_intensity(client, user, headers, mood_types):
    resp = _create(client, headers, moodTypeId=mood_types["calm"].id)
    assert resp.get_json()["data"]["entry"]["mood"]["intensity"] == 3


def test_create_entry_unknown_mood_type_rolls_back(client, user, headers, mood_types):
    resp = _create(client, headers, moodTypeId=9999)
    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Invalid mood type ID"
    assert JournalEntry.query.count() == 0
    assert Mood.query.count() == 0


def test_create_entry_rejects_out_of_range_intensity(client, user, headers, mood_types):
    resp = _create(client, headers, moodTypeId=mood_types["sad"].id, moodIntensity=6)
    assert resp.status_code == 400
    assert JournalEntry.query.count() == 0


def test_create_entry_requires_title_and_content(client, user, headers):
    resp = client.post(ENTRIES, json={"title": "   ", "content": "x", "category": "WORK"}, headers=headers)
    assert resp.status_code == 400
    resp = client.post(ENTRIES, json={"title": "x", "category": "WORK"}, headers=headers)
    assert resp.status_code == 400


def test_create_entry_rejects_unknown_category(client, user, headers):
    resp = _create(client, headers, category="HOBBIES")
    assert resp.status_code == 400
    body = resp.get_json()
    assert body["error"] == "invalid_category"
    assert "FAMILY, RELATIONSHIP, MYSELF, WORK, OTHER" in body["message"]


# ==================== Read / List ====================


def test_get_entry_of_other_user_is_not_found(client, user, headers, other_headers):
    entry_id = _create(client, headers).get_json()["data"]["entry"]["id"]
    resp = client.get(f"{ENTRIES}/{entry_id}", headers=other_headers)
    assert resp.status_code == 404
    assert resp.get_json()["message"] == "No journal entry found with that ID for this user"


def test_list_entries_pagination_block(client, user, headers):
    for i in range(3):
        _create(client, headers, title=f"Entry {i}")
    resp = client.get(f"{ENTRIES}?limit=2&page=2", headers=headers)
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["results"] == 1
    assert body["pagination"] == {"total": 3, "page": 2, "limit": 2, "totalPages": 2}


def test_list_entries_is_user_scoped(client, user, headers, other_headers):
    _create(client, headers)
    resp = client.get(ENTRIES, headers=other_headers)
    assert resp.get_json()["data"]["entries"] == []


def test_list_entries_default_sort_newest_first(client, user, headers):
    now = datetime.utcnow()
    make_entry(user.id, title="old", created_at=now - timedelta(days=2))
    make_entry(user.id, title="new", created_at=now)
    titles = [e["title"] for e in client.get(ENTRIES, headers=headers).get_json()["data"]["entries"]]
    assert titles == ["new", "old"]

    titles = [e["title"] for e in client.get(f"{ENTRIES}?sort=title", headers=headers).get_json()["data"]["entries"]]
    assert titles == ["new", "old"]
    titles = [e["title"] for e in client.get(f"{ENTRIES}?sort=createdAt", headers=headers).get_json()["data"]["entries"]]
    assert titles == ["old", "new"]


def test_list_entries_filters(client, user, headers, mood_types):
    now = datetime.utcnow()
    make_entry(user.id, title="family", category="FAMILY", created_at=now)
    make_entry(user.id, title="happy work", created_at=now, mood_type=mood_types["happy"])
    make_entry(user.id, title="ancient", created_at=now - timedelta(days=40))

    def titles(qs):
        resp = client.get(f"{ENTRIES}?{qs}", headers=headers)
        assert resp.status_code == 200, resp.get_json()
        return sorted(e["title"] for e in resp.get_json()["data"]["entries"])

    assert titles("category=family") == ["family"]
    assert titles(f"moodTypeId={mood_types['happy'].id}") == ["happy work"]
    since = (now - timedelta(days=7)).date().isoformat()
    assert titles(f"fromDate={since}") == ["family", "happy work"]
    until = (now - timedelta(days=30)).date().isoformat()
    assert titles(f"toDate={until}") == ["ancient"]


@pytest.mark.parametrize(
    "qs",
    ["title[$ne]=x", "sort=password", "limit=0", "limit=101", "page=0", "userId=1"],
)
def test_list_entries_rejects_unrecognized_filters(client, user, headers, qs):
    resp = client.get(f"{ENTRIES}?{qs}", headers=headers)
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "validation_error"


# ==================== Update ====================


def test_update_entry_fields(client, user, headers):
    entry_id = _create(client, headers).get_json()["data"]["entry"]["id"]
    resp = client.patch(f"{ENTRIES}/{entry_id}", json={"title": "Renamed", "category": "family"}, headers=headers)
    assert resp.status_code == 200
    entry = resp.get_json()["data"]["entry"]
    assert entry["title"] == "Renamed"
    assert entry["category"] == "FAMILY"
    assert entry["content"] == "Content"


def test_update_entry_creates_mood_when_missing(client, user, headers, mood_types):
    entry_id = _create(client, headers).get_json()["data"]["entry"]["id"]
    resp = client.patch(
        f"{ENTRIES}/{entry_id}", json={"moodTypeId": mood_types["anxious"].id, "moodIntensity": 2}, headers=headers
    )
    assert resp.status_code == 200
    mood = resp.get_json()["data"]["entry"]["mood"]
    assert mood["moodType"]["name"] == "anxious"
    assert mood["journalEntryId"] == entry_id
    assert Mood.query.count() == 1


def test_update_entry_updates_existing_mood(client, user, headers, mood_types):
    created = _create(client, headers, moodTypeId=mood_types["happy"].id).get_json()["data"]["entry"]
    mood_id = created["mood"]["id"]
    resp = client.patch(
        f"{ENTRIES}/{created['id']}", json={"moodTypeId": mood_types["sad"].id, "moodIntensity": 5}, headers=headers
    )
    mood = resp.get_json()["data"]["entry"]["mood"]
    assert mood["id"] == mood_id
    assert mood["moodType"]["name"] == "sad"
    assert mood["intensity"] == 5
    assert Mood.query.count() == 1


def test_update_entry_mood_type_only_keeps_other_mood_fields(client, user, headers, mood_types):
    created = _create(
        client,
        headers,
        moodTypeId=mood_types["happy"].id,
        moodIntensity=5,
        moodNotes="great day",
        moodTimeOfDay="08:30",
    ).get_json()["data"]["entry"]
    resp = client.patch(
        f"{ENTRIES}/{created['id']}", json={"moodTypeId": mood_types["calm"].id}, headers=headers
    )
    assert resp.status_code == 200
    mood = resp.get_json()["data"]["entry"]["mood"]
    assert mood["moodType"]["name"] == "calm"
    assert mood["intensity"] == 5
    assert mood["notes"] == "great day"
    assert mood["timeOfDay"] == "08:30"
    assert mood["date"] == created["mood"]["date"]


def test_update_entry_can_clear_mood_notes(client, user, headers, mood_types):
    created = _create(
        client, headers, moodTypeId=mood_types["happy"].id, moodNotes="temporary"
    ).get_json()["data"]["entry"]
    resp = client.patch(
        f"{ENTRIES}/{created['id']}",
        json={"moodTypeId": mood_types["happy"].id, "moodNotes": None},
        headers=headers,
    )
    assert resp.get_json()["data"]["entry"]["mood"]["notes"] is None


def test_update_entry_null_mood_removes_it(client, user, headers, mood_types):
    created = _create(client, headers, moodTypeId=mood_types["happy"].id).get_json()["data"]["entry"]
    resp = client.patch(f"{ENTRIES}/{created['id']}", json={"moodTypeId": None}, headers=headers)
    assert resp.status_code == 200
    assert resp.get_json()["data"]["entry"]["mood"] is None
    assert Mood.query.count() == 0
    assert db.session.get(JournalEntry, created["id"]).mood_id is None


def test_update_entry_without_mood_key_keeps_mood(client, user, headers, mood_types):
    created = _create(client, headers, moodTypeId=mood_types["happy"].id).get_json()["data"]["entry"]
    resp = client.patch(f"{ENTRIES}/{created['id']}", json={"content": "edited"}, headers=headers)
    assert resp.get_json()["data"]["entry"]["mood"]["moodType"]["name"] == "happy"


def test_update_entry_bad_mood_type_rolls_back_everything(client, user, headers):
    entry_id = _create(client, headers).get_json()["data"]["entry"]["id"]
    resp = client.patch(f"{ENTRIES}/{entry_id}", json={"title": "Changed", "moodTypeId": 4242}, headers=headers)
    assert resp.status_code == 400
    assert db.session.get(JournalEntry, entry_id).title == "Title"


def test_update_entry_of_other_user(client, user, headers, other_headers):
    entry_id = _create(client, headers).get_json()["data"]["entry"]["id"]
    resp = client.patch(f"{ENTRIES}/{entry_id}", json={"title": "Hijack"}, headers=other_headers)
    assert resp.status_code == 404


# ==================== Delete / Restore ====================


def test_delete_entry_soft_deletes_and_removes_mood(client, user, headers, mood_types):
    created = _create(client, headers, moodTypeId=mood_types["happy"].id).get_json()["data"]["entry"]
    resp = client.delete(f"{ENTRIES}/{created['id']}", headers=headers)
    assert resp.status_code == 204
    assert resp.data == b""

    row = db.session.get(JournalEntry, created["id"])
    assert row.deleted_at is not None
    assert row.mood_id is None
    assert Mood.query.count() == 0

    assert client.get(f"{ENTRIES}/{created['id']}", headers=headers).status_code == 404
    assert client.get(ENTRIES, headers=headers).get_json()["data"]["entries"] == []
    listed = client.get(f"{ENTRIES}?withDeleted", headers=headers).get_json()["data"]["entries"]
    assert [e["id"] for e in listed] == [created["id"]]
    assert listed[0]["deletedAt"] is not None


def test_delete_twice_is_not_found(client, user, headers):
    entry_id = _create(client, headers).get_json()["data"]["entry"]["id"]
    assert client.delete(f"{ENTRIES}/{entry_id}", headers=headers).status_code == 204
    assert client.delete(f"{ENTRIES}/{entry_id}", headers=headers).status_code == 404


def test_restore_entry(client, user, headers):
    entry_id = _create(client, headers).get_json()["data"]["entry"]["id"]
    client.delete(f"{ENTRIES}/{entry_id}", headers=headers)

    resp = client.post(f"{ENTRIES}/{entry_id}/restore", headers=headers)
    assert resp.status_code == 200
    assert resp.get_json()["data"]["entry"]["deletedAt"] is None
    assert len(client.get(ENTRIES, headers=headers).get_json()["data"]["entries"]) == 1

    again = client.post(f"{ENTRIES}/{entry_id}/restore", headers=headers)
    assert again.status_code == 404


# ==================== Categories ====================


def test_categories_base_set(client, user, headers):
    resp = client.get(f"{ENTRIES}/categories", headers=headers)
    assert resp.get_json()["data"]["categories"] == ["FAMILY", "RELATIONSHIP", "MYSELF", "WORK", "OTHER"]


def test_entitled_category_is_listed_and_accepted(client, user, headers, other_headers):
    grant(user, ENTRY_CATEGORY, "DREAMS")
    categories = client.get(f"{ENTRIES}/categories", headers=headers).get_json()["data"]["categories"]
    assert categories[-1] == "DREAMS"
    assert _create(client, headers, category="dreams").status_code == 201

    # other accounts do not get it
    other = client.get(f"{ENTRIES}/categories", headers=other_headers).get_json()["data"]["categories"]
    assert "DREAMS" not in other
    assert _create(client, other_headers, category="DREAMS").status_code == 400
