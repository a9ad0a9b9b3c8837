from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} must not be empty")
    return str(value).strip()


def require_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer, got {value!r}")


def require_hour(value: Any, field_name: str, *, allow_end_of_day: bool = True) -> int:
    """Hour-of-day boundary; 24 is accepted as an exclusive end of day."""
    hour = require_int(value, field_name)
    upper = 24 if allow_end_of_day else 23
    if hour < 0 or hour > upper:
        raise ValidationError(f"{field_name} must be within [0, {upper}], got {hour}")
    return hour


def require_buffer(start: int, end: int, name: str) -> None:
    if start >= end:
        raise ValidationError(f"{name} buffer must satisfy start < end, got [{start}, {end})")


def require_positive(value: Any, field_name: str) -> int:
    number = require_int(value, field_name)
    if number < 1:
        raise ValidationError(f"{field_name} must be >= 1, got {number}")
    return number


def require_iso_date(value: Optional[str], field_name: str) -> date:
    """``YYYY-MM-DD`` query/path value -> calendar date."""
    try:
        return datetime.strptime(str(value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Invalid {field_name} {value!r}. Use YYYY-MM-DD")
