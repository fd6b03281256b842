"""Access guard for protected routes."""

from __future__ import annotations

from functools import wraps
from typing import Callable, TypeVar

import jwt as pyjwt
from flask_jwt_extended import verify_jwt_in_request
from flask_jwt_extended.exceptions import (
    InvalidHeaderError,
    JWTDecodeError,
    NoAuthorizationError,
    UserLookupError,
    WrongTokenError,
)

from ventdiary.core.auth.token_service import INVALID_TOKEN, TOKEN_EXPIRED, WRONG_TOKEN_TYPE
from ventdiary.core.errors import AuthenticationError

F = TypeVar("F", bound=Callable)

USER_GONE = "The user belonging to this token does no longer exist."


def protect(fn: F) -> F:
    """Require a valid access credential whose user still exists.

    The user is re-resolved from the database on every request and exposed to
    the handler as ``flask_jwt_extended.current_user``.
    """

    @wraps(fn)
    def wrapper(*args, **kwargs):  # type: ignore[misc]
        try:
            verify_jwt_in_request()
        except NoAuthorizationError:
            raise AuthenticationError() from None
        except pyjwt.ExpiredSignatureError:
            raise AuthenticationError(TOKEN_EXPIRED, code="token_expired") from None
        except WrongTokenError:
            raise AuthenticationError(WRONG_TOKEN_TYPE, code="wrong_token_type") from None
        except UserLookupError:
            raise AuthenticationError(USER_GONE, code="user_gone") from None
        except (InvalidHeaderError, JWTDecodeError, pyjwt.InvalidTokenError):
            raise AuthenticationError(INVALID_TOKEN, code="invalid_token") from None
        return fn(*args, **kwargs)

    return wrapper  # type: ignore[return-value]
