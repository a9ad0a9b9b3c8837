from datetime import date, datetime

from src.punch_attendance.punch_attendance.shifts.factory import SearchDayStrategyFactory
from src.punch_attendance.punch_attendance.shifts.model import ShiftWindowConfig
from src.punch_attendance.punch_attendance.shifts.strategies.after_pivot_strategy import AfterPivotStrategy
from src.punch_attendance.punch_attendance.shifts.strategies.before_pivot_strategy import BeforePivotStrategy


def test_factory_one_minute_before_pivot_looks_back():
    factory = SearchDayStrategyFactory()
    strategy = factory.for_now(now=datetime(2026, 3, 10, 11, 59), config=ShiftWindowConfig())

    assert isinstance(strategy, BeforePivotStrategy)
    days = strategy.search_days(today=date(2026, 3, 10))
    assert days.check_in_day == date(2026, 3, 9)
    assert days.check_out_day == date(2026, 3, 10)


def test_factory_at_pivot_looks_forward():
    factory = SearchDayStrategyFactory()
    strategy = factory.for_now(now=datetime(2026, 3, 10, 12, 0), config=ShiftWindowConfig())

    assert isinstance(strategy, AfterPivotStrategy)
    days = strategy.search_days(today=date(2026, 3, 10))
    assert days.check_in_day == date(2026, 3, 10)
    assert days.check_out_day == date(2026, 3, 11)


def test_factory_midnight_is_before_pivot_even_when_pivot_is_zero():
    factory = SearchDayStrategyFactory()
    config = ShiftWindowConfig(day_pivot_hour=0)

    assert isinstance(factory.for_now(now=datetime(2026, 3, 10, 0, 0), config=config), BeforePivotStrategy)
    assert isinstance(factory.for_now(now=datetime(2026, 3, 10, 0, 1), config=config), AfterPivotStrategy)


def test_after_pivot_crosses_month_boundary():
    days = AfterPivotStrategy().search_days(today=date(2026, 2, 28))
    assert days.check_out_day == date(2026, 3, 1)

    days = BeforePivotStrategy().search_days(today=date(2026, 1, 1))
    assert days.check_in_day == date(2025, 12, 31)
