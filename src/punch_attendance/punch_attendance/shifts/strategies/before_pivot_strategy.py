from __future__ import annotations

from datetime import date

from ...common.datetime_utils import shift_days
from ..model import SearchDays
from .base import SearchDayStrategy


class BeforePivotStrategy(SearchDayStrategy):
    """Shift started yesterday evening; check-out is due this morning."""

    def search_days(self, *, today: date) -> SearchDays:
        return SearchDays(check_in_day=shift_days(today, -1), check_out_day=today)
