"""User and entitlement models."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Mapped, mapped_column, relationship

from ventdiary.extensions import db


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, onupdate=datetime.utcnow)


class User(db.Model, TimestampMixin):
    __tablename__ = "user"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(db.String(255), nullable=False)
    email: Mapped[str] = mapped_column(db.String(255), unique=True, nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(db.String(255), nullable=False)
    profile_image_url: Mapped[str | None] = mapped_column(db.String(1024))
    password_reset_token: Mapped[str | None] = mapped_column(db.String(64), index=True)
    password_reset_expires: Mapped[datetime | None] = mapped_column()

    entitlements: Mapped[list["UserEntitlement"]] = relationship(
        "UserEntitlement", back_populates="user", cascade="all, delete-orphan"
    )

    def set_password(self, plain_password: str) -> None:
        from ventdiary.core.auth.password import hash_password

        self.password_hash = hash_password(plain_password)

    def check_password(self, plain_password: str) -> bool:
        from ventdiary.core.auth.password import verify_password

        return verify_password(plain_password, self.password_hash)

    def clear_password_reset(self) -> None:
        self.password_reset_token = None
        self.password_reset_expires = None


class UserEntitlement(db.Model, TimestampMixin):
    """Per-user grant, e.g. an extra journal category (kind ``entry_category``)."""

    __tablename__ = "user_entitlement"
    __table_args__ = (db.UniqueConstraint("user_id", "kind", "value", name="uq_user_entitlement"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(db.ForeignKey("user.id", ondelete="CASCADE"), index=True)
    kind: Mapped[str] = mapped_column(db.String(64), nullable=False)
    value: Mapped[str] = mapped_column(db.String(128), nullable=False)

    user: Mapped[User] = relationship("User", back_populates="entitlements")
