"""Per-user entitlements.

An entitlement row unlocks something for exactly one user. The only kind in
use is ``entry_category``: an extra journal category beyond the base set.
"""

from __future__ import annotations

from ventdiary.core.users.models import User, UserEntitlement
from ventdiary.extensions import db

ENTRY_CATEGORY = "entry_category"


def entitled_values(user_id: int, kind: str) -> list[str]:
    rows = (
        UserEntitlement.query.filter_by(user_id=user_id, kind=kind)
        .order_by(UserEntitlement.value)
        .all()
    )
    return [row.value for row in rows]


def grant(user: User, kind: str, value: str) -> UserEntitlement:
    """Idempotently grant ``value`` of ``kind`` to the user and commit."""
    existing = UserEntitlement.query.filter_by(user_id=user.id, kind=kind, value=value).first()
    if existing:
        return existing
    row = UserEntitlement(user_id=user.id, kind=kind, value=value)
    db.session.add(row)
    db.session.commit()
    return row


def revoke(user: User, kind: str, value: str) -> bool:
    deleted = UserEntitlement.query.filter_by(user_id=user.id, kind=kind, value=value).delete()
    db.session.commit()
    return bool(deleted)
