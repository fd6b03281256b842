"""Persistence for the refresh-token ledger."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from ventdiary.core.auth.models import RefreshToken
from ventdiary.extensions import db


class RefreshTokenRepository:
    """Repository for refresh ledger rows. Methods never commit; callers own the transaction."""

    def __init__(self, session=None):
        self._session = session or db.session

    def add(self, user_id: int, token: str, expires_at: datetime) -> RefreshToken:
        row = RefreshToken(user_id=user_id, token=token, expires_at=expires_at)
        self._session.add(row)
        return row

    def find_by_token(self, token: str) -> Optional[RefreshToken]:
        if not token:
            return None
        return self._session.query(RefreshToken).filter(RefreshToken.token == token).first()

    def delete(self, row: RefreshToken) -> None:
        self._session.delete(row)

    def delete_by_token(self, token: str) -> int:
        return (
            self._session.query(RefreshToken)
            .filter(RefreshToken.token == token)
            .delete(synchronize_session=False)
        )

    def delete_all_for_user(self, user_id: int) -> int:
        return (
            self._session.query(RefreshToken)
            .filter(RefreshToken.user_id == user_id)
            .delete(synchronize_session=False)
        )

    def count_for_user(self, user_id: int) -> int:
        return self._session.query(RefreshToken).filter(RefreshToken.user_id == user_id).count()

    def purge_expired(self, now: Optional[datetime] = None) -> int:
        cutoff = now or datetime.utcnow()
        return (
            self._session.query(RefreshToken)
            .filter(RefreshToken.expires_at <= cutoff)
            .delete(synchronize_session=False)
        )


__all__ = ["RefreshTokenRepository"]
