from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterator, Optional

from ..common.datetime_utils import calendar_day
from ..common.validators import require_buffer, require_hour
from ..core.constants import (
    DEFAULT_CHECKIN_BUFFER_END,
    DEFAULT_CHECKIN_BUFFER_START,
    DEFAULT_CHECKOUT_BUFFER_END,
    DEFAULT_CHECKOUT_BUFFER_START,
    DEFAULT_DAY_PIVOT_HOUR,
    DEFAULT_SHIFT_DESCRIPTION,
    DEFAULT_SHIFT_END_HOUR,
    DEFAULT_SHIFT_START_HOUR,
    DEFAULT_SHIFT_TIMEZONE,
)
from ..core.enums import ShiftStatus
from ..punches.model import PunchRecord


@dataclass(frozen=True)
class ShiftWindowConfig:
    """Buffer windows for one resolution run.

    Buffers are half-open hour ranges ``[start, end)`` inside one day.
    ``shift_start_hour``/``shift_end_hour`` and ``timezone`` describe the
    nominal shift for consumers; resolution only reads the pivot and buffers.
    """

    day_pivot_hour: int = DEFAULT_DAY_PIVOT_HOUR
    check_in_buffer_start: int = DEFAULT_CHECKIN_BUFFER_START
    check_in_buffer_end: int = DEFAULT_CHECKIN_BUFFER_END
    check_out_buffer_start: int = DEFAULT_CHECKOUT_BUFFER_START
    check_out_buffer_end: int = DEFAULT_CHECKOUT_BUFFER_END
    description: str = DEFAULT_SHIFT_DESCRIPTION
    shift_start_hour: int = DEFAULT_SHIFT_START_HOUR
    shift_end_hour: int = DEFAULT_SHIFT_END_HOUR
    timezone: str = DEFAULT_SHIFT_TIMEZONE

    def __post_init__(self) -> None:
        require_hour(self.day_pivot_hour, "day_pivot_hour", allow_end_of_day=False)
        for name in ("check_in_buffer_start", "check_in_buffer_end", "check_out_buffer_start", "check_out_buffer_end"):
            require_hour(getattr(self, name), name)
        require_hour(self.shift_start_hour, "shift_start_hour", allow_end_of_day=False)
        require_hour(self.shift_end_hour, "shift_end_hour", allow_end_of_day=False)
        require_buffer(self.check_in_buffer_start, self.check_in_buffer_end, "check-in")
        require_buffer(self.check_out_buffer_start, self.check_out_buffer_end, "check-out")

    @classmethod
    def create(
        cls,
        *,
        day_pivot_hour=DEFAULT_DAY_PIVOT_HOUR,
        check_in_buffer_start=DEFAULT_CHECKIN_BUFFER_START,
        check_in_buffer_end=DEFAULT_CHECKIN_BUFFER_END,
        check_out_buffer_start=DEFAULT_CHECKOUT_BUFFER_START,
        check_out_buffer_end=DEFAULT_CHECKOUT_BUFFER_END,
        description: Optional[str] = None,
        shift_start_hour=DEFAULT_SHIFT_START_HOUR,
        shift_end_hour=DEFAULT_SHIFT_END_HOUR,
        timezone: Optional[str] = None,
    ) -> "ShiftWindowConfig":
        """Build from settings/env values (strings are coerced to int hours)."""

        return cls(
            day_pivot_hour=require_hour(day_pivot_hour, "day_pivot_hour", allow_end_of_day=False),
            check_in_buffer_start=require_hour(check_in_buffer_start, "check_in_buffer_start"),
            check_in_buffer_end=require_hour(check_in_buffer_end, "check_in_buffer_end"),
            check_out_buffer_start=require_hour(check_out_buffer_start, "check_out_buffer_start"),
            check_out_buffer_end=require_hour(check_out_buffer_end, "check_out_buffer_end"),
            description=description or DEFAULT_SHIFT_DESCRIPTION,
            shift_start_hour=require_hour(shift_start_hour, "shift_start_hour", allow_end_of_day=False),
            shift_end_hour=require_hour(shift_end_hour, "shift_end_hour", allow_end_of_day=False),
            timezone=(timezone or "").strip() or DEFAULT_SHIFT_TIMEZONE,
        )


@dataclass(frozen=True)
class EmployeeRecordGroup:
    """All punches of one employee, sorted ascending by timestamp."""

    employee_id: str
    records: tuple[PunchRecord, ...]

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[PunchRecord]:
        return iter(self.records)

    @property
    def representative(self) -> PunchRecord:
        return self.records[0]

    def on_day(self, day: date) -> tuple[PunchRecord, ...]:
        return tuple(r for r in self.records if calendar_day(r.timestamp) == day)


@dataclass(frozen=True)
class SearchDays:
    check_in_day: date
    check_out_day: date


@dataclass(frozen=True)
class ShiftPunch:
    """Outcome of one side of the resolution.

    ``record`` is None when the window was searched and nothing matched; the
    identity fields are still filled from the employee's group.
    """

    employee_id: str
    employee_name: str
    employee_role: int
    record: Optional[PunchRecord] = None
    source_ip: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.record is not None

    @property
    def timestamp(self) -> Optional[datetime]:
        return self.record.timestamp if self.record else None


@dataclass(frozen=True)
class ShiftWindowMatch:
    check_in: ShiftPunch
    check_out: ShiftPunch


@dataclass(frozen=True)
class ShiftResolution:
    """Per-employee shift record handed to the HTTP layer."""

    employee_id: str
    employee_name: str
    employee_role: int
    check_in: Optional[PunchRecord]
    check_out: Optional[PunchRecord]
    status: ShiftStatus
    total_records: int = 0
