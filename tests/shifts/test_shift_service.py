from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

import pytest

from src.punch_attendance.punch_attendance.core.enums import ShiftStatus
from src.punch_attendance.punch_attendance.core.exceptions import (
    DataUnavailableError,
    DeviceConnectionError,
    DeviceNotFoundError,
    DeviceRunError,
)
from src.punch_attendance.punch_attendance.devices.model import DeviceConfig
from src.punch_attendance.punch_attendance.punches.model import EmployeeIdentity, PunchRecord
from src.punch_attendance.punch_attendance.punches.service import AttendanceService, FetchPolicy
from src.punch_attendance.punch_attendance.shifts.model import ShiftWindowConfig
from src.punch_attendance.punch_attendance.shifts.service import ShiftService, resolve_shifts


@dataclass
class InMemoryAdapter:
    prefix: str
    punches: list
    users: list = field(default_factory=list)
    fail: bool = False
    broken_rows: bool = False

    @property
    def device(self) -> str:
        return self.prefix

    def connect(self):
        if self.fail:
            raise DeviceConnectionError(f"{self.prefix} offline")
        return self.prefix

    def list_punch_records(self, conn):
        if self.broken_rows:
            raise ValueError("malformed attendance row")
        return list(self.punches)

    def list_enrolled_users(self, conn):
        return list(self.users)

    def disconnect(self, conn):
        return None


def _punch(emp: str, ts: datetime) -> PunchRecord:
    return PunchRecord(employee_id=emp, timestamp=ts, source_ip="10.0.0.20")


PUNCHES = [
    _punch("1", datetime(2026, 3, 9, 19, 0)),
    _punch("1", datetime(2026, 3, 10, 7, 0)),
    _punch("2", datetime(2026, 3, 9, 18, 45)),
    _punch("3", datetime(2026, 3, 10, 1, 30)),
    _punch("4", datetime(2026, 3, 8, 19, 0)),
]
USERS = [EmployeeIdentity(user_id="1", name="Ayesha"), EmployeeIdentity(user_id="2", name="Bilal")]


def _service(adapters: dict, *, now: datetime) -> ShiftService:
    devices = {p: DeviceConfig(prefix=p, name=p.upper(), ip="10.0.0.20") for p in adapters}
    attendance = AttendanceService(
        devices,
        lambda d: adapters[d.prefix],
        fetch_policy=FetchPolicy(max_attempts=2, min_acceptable_count=1, base_delay=0.0, max_delay=0.0),
        clock=lambda: now,
        sleep=lambda _: None,
    )
    return ShiftService(attendance)


def test_today_shift_resolves_every_employee_with_punches(fixed_now):
    svc = _service({"pk01": InMemoryAdapter("pk01", PUNCHES, USERS)}, now=fixed_now)

    report = svc.today_shift("pk01")

    by_emp = {r.employee_id: r for r in report.resolutions}
    assert set(by_emp) == {"1", "2", "3", "4"}
    assert by_emp["1"].status == ShiftStatus.COMPLETED
    assert by_emp["1"].employee_name == "Ayesha"
    assert by_emp["2"].status == ShiftStatus.CHECKED_IN
    assert by_emp["3"].status == ShiftStatus.CHECKED_OUT
    assert by_emp["4"].status == ShiftStatus.NOT_STARTED
    assert by_emp["4"].employee_name == "Unknown Employee"
    assert report.now == fixed_now
    assert report.fetch.count == 5


def test_explicit_now_overrides_clock(fixed_now):
    svc = _service({"pk01": InMemoryAdapter("pk01", PUNCHES, USERS)}, now=fixed_now)

    report = svc.today_shift("pk01", now=datetime(2026, 3, 9, 8, 0))

    by_emp = {r.employee_id: r for r in report.resolutions}
    assert report.search_days.check_in_day == datetime(2026, 3, 8).date()
    assert by_emp["4"].status == ShiftStatus.CHECKED_IN
    assert by_emp["4"].check_in.timestamp == datetime(2026, 3, 8, 19, 0)
    assert by_emp["1"].status == ShiftStatus.NOT_STARTED


def test_side_reports_keep_placeholder_for_missing_punch(fixed_now):
    svc = _service({"pk01": InMemoryAdapter("pk01", PUNCHES, USERS)}, now=fixed_now)

    check_in = {p.employee_id: p for p in svc.shift_check_in("pk01").punches}
    check_out = {p.employee_id: p for p in svc.shift_check_out("pk01").punches}

    assert check_in["3"].record is None
    assert check_in["3"].employee_id == "3"
    assert check_out["3"].timestamp == datetime(2026, 3, 10, 1, 30)
    assert check_out["2"].record is None


def test_unknown_device_raises(fixed_now):
    svc = _service({"pk01": InMemoryAdapter("pk01", PUNCHES)}, now=fixed_now)

    with pytest.raises(DeviceNotFoundError):
        svc.today_shift("zz99")


def test_offline_device_raises_data_unavailable(fixed_now):
    svc = _service({"pk01": InMemoryAdapter("pk01", PUNCHES, fail=True)}, now=fixed_now)

    with pytest.raises(DataUnavailableError) as info:
        svc.today_shift("pk01")

    assert info.value.attempts == 2


def test_all_devices_reports_failures_per_device(fixed_now):
    svc = _service(
        {
            "pk01": InMemoryAdapter("pk01", PUNCHES, USERS),
            "us01": InMemoryAdapter("us01", PUNCHES, fail=True),
        },
        now=fixed_now,
    )

    fleet = svc.all_devices_shift()

    assert set(fleet.reports) == {"pk01"}
    assert set(fleet.failures) == {"us01"}
    assert isinstance(fleet.failures["us01"], DataUnavailableError)
    assert fleet.reports["pk01"].now == fixed_now


def test_resolve_shifts_without_device(fixed_now):
    out = resolve_shifts(PUNCHES[:2], now=fixed_now, config=ShiftWindowConfig())

    assert len(out) == 1
    assert out[0].status == ShiftStatus.COMPLETED
    assert out[0].total_records == 2


def test_all_devices_isolates_unexpected_errors(fixed_now):
    svc = _service(
        {
            "pk01": InMemoryAdapter("pk01", PUNCHES, USERS),
            "us01": InMemoryAdapter("us01", PUNCHES, broken_rows=True),
        },
        now=fixed_now,
    )

    fleet = svc.all_devices_shift()

    assert set(fleet.reports) == {"pk01"}
    assert len(fleet.reports["pk01"].resolutions) == 4
    err = fleet.failures["us01"]
    assert isinstance(err, DeviceRunError)
    assert err.device == "us01"
    assert isinstance(err.__cause__, ValueError)
