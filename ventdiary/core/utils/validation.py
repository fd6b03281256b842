"""Input validation helpers."""

from __future__ import annotations

from typing import Type, TypeVar

from flask import request
from pydantic import BaseModel, ValidationError

from ventdiary.core.errors import RequestValidationError, from_schema_error

M = TypeVar("M", bound=BaseModel)


def load_json(schema: Type[M]) -> M:
    """Validate the JSON body against ``schema``."""
    payload = request.get_json(silent=True) or {}
    if not isinstance(payload, dict):
        raise RequestValidationError("Request body must be a JSON object.")
    return validate(schema, payload)


def load_args(schema: Type[M]) -> M:
    """Validate query-string parameters against ``schema``."""
    return validate(schema, request.args.to_dict())


def validate(schema: Type[M], payload: dict) -> M:
    try:
        return schema.model_validate(payload)
    except ValidationError as exc:
        raise from_schema_error(exc) from None
