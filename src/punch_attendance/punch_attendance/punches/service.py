from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Mapping, Optional

from ..common.datetime_utils import calendar_day, now_local
from ..common.fleet import run_per_device
from ..core.constants import (
    DEFAULT_BASE_DELAY_SECONDS,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_MAX_CONCURRENT_DEVICES,
    DEFAULT_MAX_DELAY_SECONDS,
    DEFAULT_MIN_ACCEPTABLE_COUNT,
)
from ..core.exceptions import DeviceNotFoundError, DomainError, ValidationError
from ..devices.adapter import DeviceAdapter
from ..devices.model import DeviceConfig
from .fetcher import ResilientFetcher
from .model import AttendanceSlice, FetchResult


@dataclass(frozen=True)
class FetchPolicy:
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    min_acceptable_count: int = DEFAULT_MIN_ACCEPTABLE_COUNT
    base_delay: float = DEFAULT_BASE_DELAY_SECONDS
    max_delay: float = DEFAULT_MAX_DELAY_SECONDS


@dataclass(frozen=True)
class FleetAttendanceReport:
    now: datetime
    country: Optional[str]
    results: dict[str, FetchResult]
    failures: dict[str, DomainError]


class AttendanceService:
    """Use case: pull enriched punch logs from configured devices and slice them by day."""

    def __init__(
        self,
        devices: Mapping[str, DeviceConfig],
        adapter_factory: Callable[[DeviceConfig], DeviceAdapter],
        *,
        fetch_policy: Optional[FetchPolicy] = None,
        clock: Callable[[], datetime] = now_local,
        sleep: Callable[[float], None] = time.sleep,
        max_concurrent_devices: int = DEFAULT_MAX_CONCURRENT_DEVICES,
    ):
        self._devices = dict(devices)
        self._adapter_factory = adapter_factory
        self._policy = fetch_policy or FetchPolicy()
        self._clock = clock
        self._sleep = sleep
        self._max_concurrent = max(1, int(max_concurrent_devices))

    @property
    def max_concurrent_devices(self) -> int:
        return self._max_concurrent

    def now(self) -> datetime:
        return self._clock()

    def list_devices(self) -> list[DeviceConfig]:
        return list(self._devices.values())

    def get_device(self, prefix: str) -> DeviceConfig:
        device = self._devices.get((prefix or "").strip().lower())
        if not device:
            raise DeviceNotFoundError(f"Device not found: {prefix}")
        return device

    def devices_by_country(self, country: str) -> list[DeviceConfig]:
        code = (country or "").strip().upper()
        return [d for d in self._devices.values() if (d.country or "").upper() == code]

    def latest(self, prefix: str) -> FetchResult:
        device = self.get_device(prefix)
        # New adapter + fetcher per run: no connection or retry state is shared.
        fetcher = ResilientFetcher(
            self._adapter_factory(device),
            max_attempts=self._policy.max_attempts,
            min_acceptable_count=self._policy.min_acceptable_count,
            base_delay=self._policy.base_delay,
            max_delay=self._policy.max_delay,
            sleep=self._sleep,
        )
        return fetcher.fetch()

    def in_range(self, prefix: str, start: Optional[date] = None, end: Optional[date] = None) -> AttendanceSlice:
        if start and end and start > end:
            raise ValidationError("Start date must be before or equal to end date")

        fetched = self.latest(prefix)
        records = tuple(
            r
            for r in fetched.records
            if (start is None or calendar_day(r.timestamp) >= start)
            and (end is None or calendar_day(r.timestamp) <= end)
        )
        return AttendanceSlice(fetch=fetched, start=start, end=end, records=records)

    def on_date(self, prefix: str, day: date) -> AttendanceSlice:
        return self.in_range(prefix, day, day)

    def today(self, prefix: str, *, now: Optional[datetime] = None) -> AttendanceSlice:
        day = calendar_day(now or self._clock())
        return self.on_date(prefix, day)

    def all_devices(self) -> FleetAttendanceReport:
        return self._fleet(list(self._devices), country=None)

    def by_country(self, country: str) -> FleetAttendanceReport:
        code = (country or "").strip().upper()
        if not code:
            raise ValidationError("Country code is required")
        return self._fleet([d.prefix for d in self.devices_by_country(code)], country=code)

    def _fleet(self, prefixes: list[str], *, country: Optional[str]) -> FleetAttendanceReport:
        now = self._clock()
        results, failures = run_per_device(prefixes, self.latest, max_workers=self._max_concurrent)
        return FleetAttendanceReport(now=now, country=country, results=results, failures=failures)
