"""Auth persistence models."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Mapped, mapped_column

from ventdiary.extensions import db


class RefreshToken(db.Model):
    """Ledger row for an outstanding refresh credential.

    A refresh credential is honoured only while its exact string is present
    here and ``expires_at`` is in the future.
    """

    __tablename__ = "refresh_token"

    id: Mapped[int] = mapped_column(primary_key=True)
    token: Mapped[str] = mapped_column(db.String(1024), unique=True, nullable=False)
    user_id: Mapped[int] = mapped_column(db.ForeignKey("user.id", ondelete="CASCADE"), index=True, nullable=False)
    expires_at: Mapped[datetime] = mapped_column(nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)

    def is_expired(self, now: datetime | None = None) -> bool:
        return self.expires_at <= (now or datetime.utcnow())
