"""Operational error taxonomy shared by services and controllers.

Services raise these; the app-level handlers in ``ventdiary.create_app`` turn
them into ``{"status", "message", "error"}`` JSON envelopes. Anything that is
not an ``AppError`` is treated as a programming error and hidden from callers
outside development.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import ValidationError as SchemaValidationError


class AppError(Exception):
    """Base class for errors whose message is safe to show to the caller."""

    status_code = 500
    code = "internal_error"
    default_message = "Something went wrong."

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        code: Optional[str] = None,
        details: Any = None,
    ) -> None:
        self.message = message or self.default_message
        if code:
            self.code = code
        self.details = details
        super().__init__(self.message)

    @property
    def status(self) -> str:
        return "fail" if 400 <= self.status_code < 500 else "error"

    def to_dict(self) -> dict:
        body = {"status": self.status, "message": self.message, "error": self.code}
        if self.details is not None:
            body["details"] = self.details
        return body


class RequestValidationError(AppError):
    status_code = 400
    code = "validation_error"
    default_message = "Invalid input data."


class AuthenticationError(AppError):
    status_code = 401
    code = "unauthenticated"
    default_message = "You are not logged in! Please log in to get access."


class NotFoundError(AppError):
    """Also raised for resources owned by someone else, so existence never leaks."""

    status_code = 404
    code = "not_found"
    default_message = "Resource not found."


class ConflictError(AppError):
    status_code = 409
    code = "conflict"
    default_message = "Duplicate field value."


class ExternalServiceError(AppError):
    status_code = 500
    code = "external_service_error"
    default_message = "An external service failed. Try again later!"


def jsonable_errors(exc: SchemaValidationError) -> list[dict]:
    errors = exc.errors(include_url=False)
    for err in errors:
        if "ctx" in err and isinstance(err["ctx"], dict):
            err["ctx"] = {k: str(v) for k, v in err["ctx"].items()}
        if "input" in err and not isinstance(err["input"], (str, int, float, bool, type(None), list, dict)):
            err["input"] = str(err["input"])
    return errors


def from_schema_error(exc: SchemaValidationError) -> RequestValidationError:
    messages = []
    for err in exc.errors(include_url=False):
        field = ".".join(str(part) for part in err.get("loc", ()))
        messages.append(f"{field}: {err.get('msg')}" if field else str(err.get("msg")))
    message = "Invalid input data. " + ". ".join(messages) if messages else None
    return RequestValidationError(message, details=jsonable_errors(exc))


__all__ = [
    "AppError",
    "AuthenticationError",
    "ConflictError",
    "ExternalServiceError",
    "NotFoundError",
    "RequestValidationError",
    "from_schema_error",
    "jsonable_errors",
]
