"""Personal journal entry."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Mapped, mapped_column, relationship

from ventdiary.domains.moods.models import Mood
from ventdiary.extensions import db

BASE_CATEGORIES = ("FAMILY", "RELATIONSHIP", "MYSELF", "WORK", "OTHER")


class JournalEntry(db.Model):
    __tablename__ = "journal_entry"
    __table_args__ = (
        db.Index("ix_journal_entry_user_created_at", "user_id", "created_at"),
        db.Index("ix_journal_entry_category", "category"),
        db.Index("ix_journal_entry_deleted_at", "deleted_at"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(db.ForeignKey("user.id", ondelete="CASCADE"), index=True, nullable=False)
    title: Mapped[str] = mapped_column(db.String(255), nullable=False)
    content: Mapped[str] = mapped_column(db.Text, nullable=False)
    category: Mapped[str] = mapped_column(db.String(64), nullable=False)
    mood_id: Mapped[int | None] = mapped_column(
        db.ForeignKey("mood.id", name="fk_journal_entry_mood_id", ondelete="SET NULL"),
        unique=True,
    )
    deleted_at: Mapped[datetime | None] = mapped_column()
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, onupdate=datetime.utcnow)

    mood: Mapped[Mood | None] = relationship("Mood", foreign_keys=[mood_id], lazy="select")
