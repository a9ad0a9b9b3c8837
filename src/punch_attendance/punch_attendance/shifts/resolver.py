from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import calendar_day, hour_in_buffer
from ..punches.model import PunchRecord
from .factory import SearchDayStrategyFactory
from .model import EmployeeRecordGroup, SearchDays, ShiftPunch, ShiftWindowConfig, ShiftWindowMatch


class ShiftWindowResolver:
    """Pick the check-in and check-out punch of one employee's overnight shift.

    The role of a punch depends on where ``now`` stands relative to the pivot
    hour: before it we look back at yesterday's evening arrival and this
    morning's departure, after it at this evening's arrival and tomorrow
    morning's departure. Within the chosen day the punch must fall into the
    side's hour buffer; check-in takes the latest match, check-out the
    earliest.
    """

    def __init__(self, *, strategy_factory: Optional[SearchDayStrategyFactory] = None):
        self._factory = strategy_factory or SearchDayStrategyFactory()

    def search_days(self, *, now: datetime, config: ShiftWindowConfig) -> SearchDays:
        strategy = self._factory.for_now(now=now, config=config)
        return strategy.search_days(today=calendar_day(now))

    def resolve(self, group: EmployeeRecordGroup, *, now: datetime, config: ShiftWindowConfig) -> ShiftWindowMatch:
        days = self.search_days(now=now, config=config)
        return ShiftWindowMatch(
            check_in=self._side(group, self._check_in_record(group, days.check_in_day, config)),
            check_out=self._side(group, self._check_out_record(group, days.check_out_day, config)),
        )

    def resolve_check_in(self, group: EmployeeRecordGroup, *, now: datetime, config: ShiftWindowConfig) -> ShiftPunch:
        days = self.search_days(now=now, config=config)
        return self._side(group, self._check_in_record(group, days.check_in_day, config))

    def resolve_check_out(self, group: EmployeeRecordGroup, *, now: datetime, config: ShiftWindowConfig) -> ShiftPunch:
        days = self.search_days(now=now, config=config)
        return self._side(group, self._check_out_record(group, days.check_out_day, config))

    @staticmethod
    def _check_in_record(group: EmployeeRecordGroup, day: date, config: ShiftWindowConfig) -> Optional[PunchRecord]:
        matches = [
            r
            for r in group.on_day(day)
            if hour_in_buffer(r.timestamp.hour, config.check_in_buffer_start, config.check_in_buffer_end)
        ]
        return matches[-1] if matches else None

    @staticmethod
    def _check_out_record(group: EmployeeRecordGroup, day: date, config: ShiftWindowConfig) -> Optional[PunchRecord]:
        matches = [
            r
            for r in group.on_day(day)
            if hour_in_buffer(r.timestamp.hour, config.check_out_buffer_start, config.check_out_buffer_end)
        ]
        return matches[0] if matches else None

    @staticmethod
    def _side(group: EmployeeRecordGroup, record: Optional[PunchRecord]) -> ShiftPunch:
        base = record or group.representative
        return ShiftPunch(
            employee_id=group.employee_id,
            employee_name=base.employee_name,
            employee_role=base.employee_role,
            record=record,
            source_ip=base.source_ip,
        )
