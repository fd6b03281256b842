from __future__ import annotations

from datetime import datetime
from typing import Optional

import pytest

from ventdiary import create_app
from ventdiary.core.auth.token_service import issue_tokens
from ventdiary.core.integrations.mailer import MailDeliveryError
from ventdiary.core.integrations.storage import StorageError
from ventdiary.core.users.services import create_user
from ventdiary.domains.journal.models import JournalEntry
from ventdiary.domains.moods.catalog import seed_mood_types
from ventdiary.domains.moods.models import Mood, MoodType
from ventdiary.extensions import db

API = "/api/v1"
PASSWORD = "Password123!"


# ==================== Pytest Markers ====================
def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line("markers", "integration: Integration tests (database, API)")


# ==================== Recording fakes ====================


class RecordingMailer:
    """Stands in for the SMTP mailer; keeps every message in ``sent``."""

    def __init__(self) -> None:
        self.sent: list[dict] = []
        self.fail = False

    def send(self, to: str, subject: str, body: str) -> None:
        if self.fail:
            raise MailDeliveryError("connection refused")
        self.sent.append({"to": to, "subject": subject, "body": body})


class RecordingStorage:
    """Stands in for S3; uploaded objects land in ``objects``."""

    public_base = "https://cdn.example.com"

    def __init__(self) -> None:
        self.objects: dict[str, tuple[bytes, str]] = {}
        self.fail = False

    def upload_bytes(self, data: bytes, key: str, content_type: str) -> str:
        if self.fail:
            raise StorageError("bucket unavailable")
        self.objects[key] = (data, content_type)
        return f"{self.public_base}/{key}"


# ==================== App fixtures ====================


@pytest.fixture()
def app():
    """Per-test app on a fresh in-memory schema, with outbound integrations faked."""
    app = create_app("testing")
    app.extensions["mailer"] = RecordingMailer()
    app.extensions["storage"] = RecordingStorage()
    ctx = app.app_context()
    ctx.push()
    db.create_all()
    try:
        yield app
    finally:
        db.session.remove()
        db.drop_all()
        ctx.pop()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def mailer(app) -> RecordingMailer:
    return app.extensions["mailer"]


@pytest.fixture()
def storage(app) -> RecordingStorage:
    return app.extensions["storage"]


@pytest.fixture()
def mood_types(app) -> dict[str, MoodType]:
    """Seed the default catalog and return it keyed by name."""
    seed_mood_types()
    return {mt.name: mt for mt in MoodType.query.all()}


# ==================== User fixtures ====================


def auth_headers(access_token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {access_token}"}


@pytest.fixture()
def user(app):
    return create_user(name="Test User", email="test@example.com", password=PASSWORD)


@pytest.fixture()
def tokens(user) -> dict[str, str]:
    return issue_tokens(user)


@pytest.fixture()
def headers(tokens) -> dict[str, str]:
    return auth_headers(tokens["accessToken"])


@pytest.fixture()
def other_headers(app) -> dict[str, str]:
    """A second account, for ownership isolation checks."""
    other = create_user(name="Other User", email="other@example.com", password=PASSWORD)
    return auth_headers(issue_tokens(other)["accessToken"])


# ==================== Data helpers ====================


def make_entry(
    user_id: int,
    *,
    title: str = "Entry",
    content: str = "Content",
    category: str = "WORK",
    created_at: Optional[datetime] = None,
    mood_type: Optional[MoodType] = None,
    intensity: int = 3,
    notes: Optional[str] = None,
) -> JournalEntry:
    """Insert an entry (and optionally its linked mood) with a chosen creation time."""
    created_at = created_at or datetime.utcnow()
    entry = JournalEntry(
        user_id=user_id,
        title=title,
        content=content,
        category=category,
        created_at=created_at,
        updated_at=created_at,
    )
    db.session.add(entry)
    db.session.flush()
    if mood_type is not None:
        mood = Mood(
            user_id=user_id,
            mood_type_id=mood_type.id,
            intensity=intensity,
            date=created_at,
            notes=notes,
            journal_entry_id=entry.id,
        )
        db.session.add(mood)
        db.session.flush()
        entry.mood = mood
    db.session.commit()
    return entry
