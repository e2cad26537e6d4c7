"""Map engine errors onto HTTP errors carrying the offending items."""

from __future__ import annotations

import enum
from typing import Any

from fastapi import HTTPException
from pydantic import BaseModel

from mandala.errors import UnknownRing


def _jsonable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump()
    if isinstance(value, enum.Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    if isinstance(value, dict):
        return {str(k): _jsonable(v) for k, v in value.items()}
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    return str(value)


def to_http(error: ValueError) -> HTTPException:
    detail = {"error": type(error).__name__, "message": str(error)}
    detail.update({k: _jsonable(v) for k, v in getattr(error, "__dict__", {}).items()})
    status = 404 if isinstance(error, UnknownRing) else 422
    return HTTPException(status_code=status, detail=detail)
