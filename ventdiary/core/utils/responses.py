"""Success envelopes returned by the API controllers."""

from __future__ import annotations

from typing import Any


def success(data: Any = None, status: int = 200, **extra: Any):
    body = {"status": "success"}
    body.update(extra)
    body["data"] = data
    return body, status
