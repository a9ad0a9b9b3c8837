from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date

from ..model import SearchDays


class SearchDayStrategy(ABC):
    """Strategy Pattern: which calendar days hold this shift's check-in/check-out."""

    @abstractmethod
    def search_days(self, *, today: date) -> SearchDays:
        raise NotImplementedError
