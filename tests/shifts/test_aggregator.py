from datetime import datetime

import pytest

from src.punch_attendance.punch_attendance.core.enums import ShiftStatus
from src.punch_attendance.punch_attendance.punches.model import PunchRecord
from src.punch_attendance.punch_attendance.shifts.aggregator import ShiftAggregator
from src.punch_attendance.punch_attendance.shifts.model import ShiftPunch

IN = PunchRecord(employee_id="5", timestamp=datetime(2026, 3, 9, 18, 0), employee_name="Sara")
OUT = PunchRecord(employee_id="5", timestamp=datetime(2026, 3, 10, 2, 0), employee_name="Sara")


def _side(record):
    return ShiftPunch(employee_id="5", employee_name="Sara", employee_role=0, record=record)


@pytest.mark.parametrize(
    "check_in, check_out, status",
    [
        (IN, OUT, ShiftStatus.COMPLETED),
        (IN, None, ShiftStatus.CHECKED_IN),
        (None, OUT, ShiftStatus.CHECKED_OUT),
        (None, None, ShiftStatus.NOT_STARTED),
    ],
)
def test_status_follows_present_sides(check_in, check_out, status):
    shift = ShiftAggregator().aggregate(_side(check_in), _side(check_out), total_records=4)

    assert shift.status == status
    assert shift.check_in == check_in
    assert shift.check_out == check_out
    assert shift.employee_id == "5"
    assert shift.employee_name == "Sara"
    assert shift.total_records == 4


def test_status_values_are_wire_strings():
    assert [s.value for s in ShiftStatus] == ["not-started", "checked-in", "checked-out", "completed"]
