from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def calendar_day(value: datetime) -> date:
    """Calendar day of an instant, from its own year/month/day fields."""
    return date(value.year, value.month, value.day)


def shift_days(today: date, days: int) -> date:
    return today + timedelta(days=days)


def hour_in_buffer(hour: int, start: int, end: int) -> bool:
    """Half-open buffer check: ``start <= hour < end``."""
    return start <= hour < end


def format_iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def format_record_date(value: Optional[datetime]) -> Optional[str]:
    return value.strftime("%Y-%m-%d") if value else None


def format_time_only(value: Optional[datetime]) -> Optional[str]:
    return value.strftime("%I:%M %p") if value else None
