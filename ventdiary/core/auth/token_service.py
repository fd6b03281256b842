"""Minting and verification of access/refresh credentials."""

from __future__ import annotations

from datetime import datetime

import jwt as pyjwt
from flask_jwt_extended import create_access_token, create_refresh_token, decode_token
from flask_jwt_extended.exceptions import JWTDecodeError

from ventdiary.core.auth.token_repository import RefreshTokenRepository
from ventdiary.core.errors import AuthenticationError
from ventdiary.core.users.models import User
from ventdiary.extensions import db

INVALID_TOKEN = "Invalid token. Please log in again."
TOKEN_EXPIRED = "Your token has expired! Please log in again."
WRONG_TOKEN_TYPE = "Invalid token type provided."


def mint_pair(user: User) -> tuple[str, str, datetime]:
    """Sign a fresh access/refresh pair; returns them with the refresh expiry."""
    identity = str(user.id)
    access_token = create_access_token(identity=identity)
    refresh_token = create_refresh_token(identity=identity)
    expires = decode_token(refresh_token).get("exp")
    return access_token, refresh_token, datetime.utcfromtimestamp(expires)


def issue_tokens(user: User, *, commit: bool = True) -> dict[str, str]:
    """Create access and refresh tokens for a user and record the refresh token."""
    access_token, refresh_token, expires_at = mint_pair(user)
    RefreshTokenRepository().add(user.id, refresh_token, expires_at)
    if commit:
        db.session.commit()
    return {"accessToken": access_token, "refreshToken": refresh_token}


def verify_access_token(raw: str) -> dict:
    """Decode an access credential, classifying every failure as a 401."""
    try:
        claims = decode_token(raw)
    except pyjwt.ExpiredSignatureError:
        raise AuthenticationError(TOKEN_EXPIRED, code="token_expired") from None
    except (pyjwt.InvalidTokenError, JWTDecodeError):
        raise AuthenticationError(INVALID_TOKEN, code="invalid_token") from None
    if claims.get("type") != "access":
        raise AuthenticationError(WRONG_TOKEN_TYPE, code="wrong_token_type")
    return claims


__all__ = ["issue_tokens", "mint_pair", "verify_access_token"]
