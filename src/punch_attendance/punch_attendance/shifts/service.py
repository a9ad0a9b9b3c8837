from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional

from ..common.fleet import run_per_device
from ..core.exceptions import DomainError
from ..devices.model import DeviceConfig
from ..punches.model import FetchResult, PunchRecord
from ..punches.service import AttendanceService
from .aggregator import ShiftAggregator
from .grouper import group_by_employee
from .model import SearchDays, ShiftPunch, ShiftResolution, ShiftWindowConfig
from .resolver import ShiftWindowResolver


@dataclass(frozen=True)
class ShiftReport:
    device: DeviceConfig
    now: datetime
    config: ShiftWindowConfig
    search_days: SearchDays
    resolutions: tuple[ShiftResolution, ...]
    fetch: FetchResult


@dataclass(frozen=True)
class ShiftSideReport:
    device: DeviceConfig
    now: datetime
    config: ShiftWindowConfig
    search_days: SearchDays
    side: str
    punches: tuple[ShiftPunch, ...]
    fetch: FetchResult


@dataclass(frozen=True)
class FleetShiftReport:
    now: datetime
    reports: dict[str, ShiftReport]
    failures: dict[str, DomainError]


def resolve_shifts(
    records: Iterable[PunchRecord],
    *,
    now: datetime,
    config: ShiftWindowConfig,
    resolver: Optional[ShiftWindowResolver] = None,
    aggregator: Optional[ShiftAggregator] = None,
) -> list[ShiftResolution]:
    """Group -> resolve -> aggregate, one ShiftResolution per employee with punches."""

    resolver = resolver or ShiftWindowResolver()
    aggregator = aggregator or ShiftAggregator()

    out = []
    for group in group_by_employee(records).values():
        match = resolver.resolve(group, now=now, config=config)
        out.append(aggregator.aggregate(match.check_in, match.check_out, total_records=len(group)))
    return out


class ShiftService:
    """Use case: pull a device's punch logs and resolve today's overnight shift."""

    def __init__(
        self,
        attendance: AttendanceService,
        *,
        resolver: Optional[ShiftWindowResolver] = None,
        aggregator: Optional[ShiftAggregator] = None,
    ):
        self._attendance = attendance
        self._resolver = resolver or ShiftWindowResolver()
        self._aggregator = aggregator or ShiftAggregator()

    def today_shift(self, prefix: str, *, now: Optional[datetime] = None) -> ShiftReport:
        device = self._attendance.get_device(prefix)
        now = now or self._attendance.now()
        fetched = self._attendance.latest(device.prefix)

        resolutions = resolve_shifts(
            fetched.records,
            now=now,
            config=device.shift,
            resolver=self._resolver,
            aggregator=self._aggregator,
        )
        return ShiftReport(
            device=device,
            now=now,
            config=device.shift,
            search_days=self._resolver.search_days(now=now, config=device.shift),
            resolutions=tuple(resolutions),
            fetch=fetched,
        )

    def shift_check_in(self, prefix: str, *, now: Optional[datetime] = None) -> ShiftSideReport:
        return self._side_report(prefix, "check_in", now)

    def shift_check_out(self, prefix: str, *, now: Optional[datetime] = None) -> ShiftSideReport:
        return self._side_report(prefix, "check_out", now)

    def all_devices_shift(self, *, now: Optional[datetime] = None) -> FleetShiftReport:
        """Run ``today_shift`` for every device; one device failing does not fail the others."""

        now = now or self._attendance.now()
        reports, failures = run_per_device(
            [d.prefix for d in self._attendance.list_devices()],
            lambda prefix: self.today_shift(prefix, now=now),
            max_workers=self._attendance.max_concurrent_devices,
        )
        return FleetShiftReport(now=now, reports=reports, failures=failures)

    def _side_report(self, prefix: str, side: str, now: Optional[datetime]) -> ShiftSideReport:
        device = self._attendance.get_device(prefix)
        now = now or self._attendance.now()
        fetched = self._attendance.latest(device.prefix)

        resolve_side = self._resolver.resolve_check_in if side == "check_in" else self._resolver.resolve_check_out
        punches = tuple(
            resolve_side(group, now=now, config=device.shift) for group in group_by_employee(fetched.records).values()
        )
        return ShiftSideReport(
            device=device,
            now=now,
            config=device.shift,
            search_days=self._resolver.search_days(now=now, config=device.shift),
            side=side,
            punches=punches,
            fetch=fetched,
        )
