"""Mood-type catalog and per-user mood records."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Mapped, mapped_column, relationship

from ventdiary.extensions import db


class MoodType(db.Model):
    __tablename__ = "mood_type"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(db.String(64), unique=True, nullable=False)
    emoji: Mapped[str] = mapped_column(db.String(16), nullable=False)
    color_code: Mapped[str] = mapped_column(db.String(7), nullable=False)
    description: Mapped[str | None] = mapped_column(db.String(255))
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, onupdate=datetime.utcnow)


class Mood(db.Model):
    __tablename__ = "mood"
    __table_args__ = (
        db.CheckConstraint("intensity BETWEEN 1 AND 5", name="ck_mood_intensity_range"),
        db.Index("ix_mood_user_date", "user_id", "date"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(db.ForeignKey("user.id", ondelete="CASCADE"), index=True, nullable=False)
    mood_type_id: Mapped[int] = mapped_column(db.ForeignKey("mood_type.id"), index=True, nullable=False)
    intensity: Mapped[int] = mapped_column(default=3, nullable=False)
    date: Mapped[datetime] = mapped_column(default=datetime.utcnow, nullable=False)
    time_of_day: Mapped[str | None] = mapped_column(db.String(8))
    notes: Mapped[str | None] = mapped_column(db.Text)
    # Back-reference to the owning entry; the entry side holds the FK.
    journal_entry_id: Mapped[int | None] = mapped_column(db.Integer, index=True)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, onupdate=datetime.utcnow)

    mood_type: Mapped[MoodType | None] = relationship("MoodType", lazy="joined")
