from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .model import ShiftWindowConfig
from .strategies.after_pivot_strategy import AfterPivotStrategy
from .strategies.base import SearchDayStrategy
from .strategies.before_pivot_strategy import BeforePivotStrategy


@dataclass
class SearchDayStrategyFactory:
    """Factory Pattern: choose the search-day strategy from the evaluation instant."""

    def for_now(self, *, now: datetime, config: ShiftWindowConfig) -> SearchDayStrategy:
        # 00:00 sharp counts as before the pivot even when the pivot is 0.
        if now.hour < config.day_pivot_hour or (now.hour == 0 and now.minute == 0):
            return BeforePivotStrategy()
        return AfterPivotStrategy()
