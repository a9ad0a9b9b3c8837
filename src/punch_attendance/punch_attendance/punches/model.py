from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..core.constants import UNKNOWN_EMPLOYEE_NAME, UNKNOWN_EMPLOYEE_ROLE
from ..core.enums import ConfidenceFlag


@dataclass(frozen=True)
class PunchRecord:
    """Thực thể miền (domain): một lần chấm vân tay trên máy.

    ``timestamp`` is device-local and never None; a missing punch is a missing
    record, not a record without time.
    """

    employee_id: str
    timestamp: datetime
    employee_name: str = UNKNOWN_EMPLOYEE_NAME
    employee_role: int = UNKNOWN_EMPLOYEE_ROLE
    employee_card_no: int = 0
    source_ip: Optional[str] = None
    user_sn: Optional[int] = None


@dataclass(frozen=True)
class EmployeeIdentity:
    """Enrolled user as listed by the terminal."""

    user_id: str
    name: str
    role: int = UNKNOWN_EMPLOYEE_ROLE
    card_no: int = 0


@dataclass(frozen=True)
class FetchResult:
    """Validated punch set produced by one fetch call."""

    device: str
    records: tuple[PunchRecord, ...]
    attempts: int
    identity_enriched: bool
    flags: tuple[ConfidenceFlag, ...] = field(default_factory=tuple)

    @property
    def count(self) -> int:
        return len(self.records)

    @property
    def low_confidence(self) -> bool:
        return bool(self.flags)

    @property
    def unique_employees(self) -> int:
        return len({r.employee_id for r in self.records})


@dataclass(frozen=True)
class AttendanceSlice:
    """Punches of one fetch that fall on calendar days ``[start, end]``.

    A missing bound leaves that side open.
    """

    fetch: FetchResult
    start: Optional[date]
    end: Optional[date]
    records: tuple[PunchRecord, ...]

    @property
    def count(self) -> int:
        return len(self.records)

    @property
    def unique_employees(self) -> int:
        return len({r.employee_id for r in self.records})
