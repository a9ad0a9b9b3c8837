from __future__ import annotations

from ..core.enums import ShiftStatus
from .model import ShiftPunch, ShiftResolution


def determine_shift_status(*, has_check_in: bool, has_check_out: bool) -> ShiftStatus:
    if has_check_in and has_check_out:
        return ShiftStatus.COMPLETED
    if has_check_in:
        return ShiftStatus.CHECKED_IN
    if has_check_out:
        return ShiftStatus.CHECKED_OUT
    return ShiftStatus.NOT_STARTED


class ShiftAggregator:
    """Merge both resolved sides into one shift record. Never raises on missing data."""

    def aggregate(self, check_in: ShiftPunch, check_out: ShiftPunch, *, total_records: int = 0) -> ShiftResolution:
        identity = check_in if check_in.found or not check_out.found else check_out
        return ShiftResolution(
            employee_id=identity.employee_id,
            employee_name=identity.employee_name,
            employee_role=identity.employee_role,
            check_in=check_in.record,
            check_out=check_out.record,
            status=determine_shift_status(has_check_in=check_in.found, has_check_out=check_out.found),
            total_records=int(total_records),
        )
