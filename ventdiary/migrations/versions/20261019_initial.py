"""initial schema for Vent Diary

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "user",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False, unique=True, index=True),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("profile_image_url", sa.String(length=1024)),
        sa.Column("password_reset_token", sa.String(length=64), index=True),
        sa.Column("password_reset_expires", sa.DateTime()),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_table(
        "user_entitlement",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True),
        sa.Column("kind", sa.String(length=64), nullable=False),
        sa.Column("value", sa.String(length=128), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("user_id", "kind", "value", name="uq_user_entitlement"),
    )
    op.create_table(
        "refresh_token",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("token", sa.String(length=1024), nullable=False, unique=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True),
        sa.Column("expires_at", sa.DateTime(), nullable=False, index=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_table(
        "mood_type",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=64), nullable=False, unique=True),
        sa.Column("emoji", sa.String(length=16), nullable=False),
        sa.Column("color_code", sa.String(length=7), nullable=False),
        sa.Column("description", sa.String(length=255)),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_table(
        "mood",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True),
        sa.Column("mood_type_id", sa.Integer(), sa.ForeignKey("mood_type.id"), nullable=False, index=True),
        sa.Column("intensity", sa.Integer(), nullable=False, server_default="3"),
        sa.Column("date", sa.DateTime(), nullable=False),
        sa.Column("time_of_day", sa.String(length=8)),
        sa.Column("notes", sa.Text()),
        sa.Column("journal_entry_id", sa.Integer(), index=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("intensity BETWEEN 1 AND 5", name="ck_mood_intensity_range"),
    )
    op.create_index("ix_mood_user_date", "mood", ["user_id", "date"])
    op.create_table(
        "journal_entry",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("category", sa.String(length=64), nullable=False),
        sa.Column(
            "mood_id",
            sa.Integer(),
            sa.ForeignKey("mood.id", name="fk_journal_entry_mood_id", ondelete="SET NULL"),
            unique=True,
        ),
        sa.Column("deleted_at", sa.DateTime()),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_journal_entry_user_created_at", "journal_entry", ["user_id", "created_at"])
    op.create_index("ix_journal_entry_category", "journal_entry", ["category"])
    op.create_index("ix_journal_entry_deleted_at", "journal_entry", ["deleted_at"])


def downgrade():
    op.drop_index("ix_journal_entry_deleted_at", table_name="journal_entry")
    op.drop_index("ix_journal_entry_category", table_name="journal_entry")
    op.drop_index("ix_journal_entry_user_created_at", table_name="journal_entry")
    op.drop_table("journal_entry")
    op.drop_index("ix_mood_user_date", table_name="mood")
    op.drop_table("mood")
    op.drop_table("mood_type")
    op.drop_table("refresh_token")
    op.drop_table("user_entitlement")
    op.drop_table("user")
