from __future__ import annotations

from datetime import date

from ...common.datetime_utils import shift_days
from ..model import SearchDays
from .base import SearchDayStrategy


class AfterPivotStrategy(SearchDayStrategy):
    """Shift starts this evening; check-out is due tomorrow morning."""

    def search_days(self, *, today: date) -> SearchDays:
        return SearchDays(check_in_day=today, check_out_day=shift_days(today, 1))
