from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Optional

import pytest

from src.punch_attendance.punch_attendance.core.constants import UNKNOWN_EMPLOYEE_NAME
from src.punch_attendance.punch_attendance.core.enums import ConfidenceFlag
from src.punch_attendance.punch_attendance.core.exceptions import (
    DataUnavailableError,
    DeviceConnectionError,
    DeviceError,
    IdentityLookupError,
)
from src.punch_attendance.punch_attendance.punches.fetcher import ResilientFetcher, backoff_delay
from src.punch_attendance.punch_attendance.punches.model import EmployeeIdentity, PunchRecord


def _punches(n: int) -> list[PunchRecord]:
    start = datetime(2026, 3, 9, 18, 0)
    return [PunchRecord(employee_id=str(i % 5), timestamp=start + timedelta(minutes=i)) for i in range(n)]


@dataclass
class ScriptedAdapter:
    """Each attempt pops one step: an int (record count) or an exception to raise."""

    steps: list
    users: Any = field(default_factory=lambda: [EmployeeIdentity(user_id="1", name="Omar", role=14, card_no=77)])
    disconnect_error: Optional[Exception] = None

    connects: int = 0
    disconnects: int = 0
    open_connections: int = 0

    @property
    def device(self) -> str:
        return "pk01"

    def connect(self):
        self.connects += 1
        self.open_connections += 1
        return object()

    def list_punch_records(self, conn):
        step = self.steps.pop(0)
        if isinstance(step, Exception):
            raise step
        return _punches(step)

    def list_enrolled_users(self, conn):
        if isinstance(self.users, Exception):
            raise self.users
        return self.users

    def disconnect(self, conn):
        self.disconnects += 1
        self.open_connections -= 1
        if self.disconnect_error:
            raise self.disconnect_error


class RecordingSleep:
    def __init__(self):
        self.waits: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.waits.append(seconds)


def _fetcher(adapter, sleep=None, **kwargs):
    return ResilientFetcher(adapter, base_delay=2.0, max_delay=10.0, sleep=sleep or RecordingSleep(), **kwargs)


def test_backoff_doubles_and_caps():
    assert [backoff_delay(a, 2.0, 10.0) for a in (1, 2, 3, 4, 5)] == [2.0, 4.0, 8.0, 10.0, 10.0]


def test_two_failures_then_sixty_records():
    adapter = ScriptedAdapter(steps=[DeviceConnectionError("socket closed"), DeviceError("timeout"), 60])
    sleep = RecordingSleep()

    result = _fetcher(adapter, sleep=sleep).fetch(max_attempts=3, min_acceptable_count=50)

    assert result.count == 60
    assert result.attempts == 3
    assert not result.low_confidence
    assert sleep.waits == [2.0, 4.0]
    # A failed attempt forces a fresh connection.
    assert adapter.connects == 3
    assert adapter.open_connections == 0


def test_returns_first_result_meeting_threshold():
    adapter = ScriptedAdapter(steps=[5, 20, 40])

    result = _fetcher(adapter).fetch(max_attempts=3, min_acceptable_count=15)

    assert result.count == 20
    assert result.attempts == 2
    assert adapter.steps == [40]
    assert adapter.connects == 1
    assert adapter.open_connections == 0


def test_returns_largest_result_after_exhausting_attempts():
    adapter = ScriptedAdapter(steps=[5, 12, 8])
    sleep = RecordingSleep()

    result = _fetcher(adapter, sleep=sleep).fetch(max_attempts=3, min_acceptable_count=50)

    assert result.count == 12
    assert result.attempts == 3
    assert ConfidenceFlag.BELOW_ACCEPTABLE_COUNT in result.flags
    assert sleep.waits == [2.0, 4.0]
    assert adapter.open_connections == 0


def test_empty_everywhere_raises_data_unavailable_with_cause():
    boom = DeviceConnectionError("device unreachable")
    adapter = ScriptedAdapter(steps=[0, boom, 0])

    with pytest.raises(DataUnavailableError) as info:
        _fetcher(adapter).fetch(max_attempts=3, min_acceptable_count=10)

    err = info.value
    assert err.device == "pk01"
    assert err.attempts == 3
    assert isinstance(err.last_error, DataUnavailableError)
    assert adapter.open_connections == 0


def test_all_attempts_failing_surfaces_last_underlying_error():
    last = DeviceConnectionError("ECONNREFUSED")
    adapter = ScriptedAdapter(steps=[DeviceConnectionError("ETIMEDOUT"), last])

    with pytest.raises(DataUnavailableError) as info:
        _fetcher(adapter).fetch(max_attempts=2, min_acceptable_count=1)

    assert info.value.last_error is last
    assert info.value.__cause__ is last
    assert adapter.open_connections == 0


def test_identity_lookup_failure_keeps_punches_unnamed():
    adapter = ScriptedAdapter(steps=[30], users=IdentityLookupError("CMD_USERTEMP_RRQ failed"))

    result = _fetcher(adapter).fetch(max_attempts=3, min_acceptable_count=10)

    assert result.count == 30
    assert not result.identity_enriched
    assert result.flags == (ConfidenceFlag.IDENTITY_LOOKUP_FAILED,)
    assert {r.employee_name for r in result.records} == {UNKNOWN_EMPLOYEE_NAME}
    assert {r.employee_role for r in result.records} == {0}


def test_enrichment_copies_roster_identity():
    adapter = ScriptedAdapter(steps=[10])

    result = _fetcher(adapter).fetch(max_attempts=1, min_acceptable_count=10)

    named = [r for r in result.records if r.employee_id == "1"]
    others = [r for r in result.records if r.employee_id != "1"]
    assert named and all(r.employee_name == "Omar" and r.employee_role == 14 and r.employee_card_no == 77 for r in named)
    assert all(r.employee_name == UNKNOWN_EMPLOYEE_NAME for r in others)
    assert result.identity_enriched


def test_disconnect_errors_are_swallowed():
    adapter = ScriptedAdapter(steps=[25], disconnect_error=DeviceError("socket already destroyed"))

    result = _fetcher(adapter).fetch(max_attempts=1, min_acceptable_count=10)

    assert result.count == 25
    assert adapter.disconnects == 1


def test_connection_released_when_adapter_raises_unexpected_error():
    adapter = ScriptedAdapter(steps=[RuntimeError("bug in adapter")])

    with pytest.raises(RuntimeError):
        _fetcher(adapter).fetch(max_attempts=3)

    assert adapter.connects == 1
    assert adapter.open_connections == 0


def test_no_sleep_after_last_attempt():
    adapter = ScriptedAdapter(steps=[1])
    sleep = RecordingSleep()

    _fetcher(adapter, sleep=sleep).fetch(max_attempts=1, min_acceptable_count=50)

    assert sleep.waits == []
