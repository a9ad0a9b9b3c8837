from __future__ import annotations

from typing import Iterable

from .model import EmployeeRecordGroup
from ..punches.model import PunchRecord


def group_by_employee(records: Iterable[PunchRecord]) -> dict[str, EmployeeRecordGroup]:
    """Partition punches by employee and sort each group chronologically.

    Groups keep the order in which employees first appear. The sort is
    stable, so punches sharing a timestamp stay in input order.
    """

    buckets: dict[str, list[PunchRecord]] = {}
    for r in records:
        buckets.setdefault(r.employee_id, []).append(r)

    return {
        employee_id: EmployeeRecordGroup(
            employee_id=employee_id,
            records=tuple(sorted(items, key=lambda r: r.timestamp)),
        )
        for employee_id, items in buckets.items()
    }
