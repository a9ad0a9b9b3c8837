from __future__ import annotations

import logging
import time
from typing import Any, Callable, Optional

from ..common.validators import require_positive
from ..core.constants import (
    DEFAULT_BASE_DELAY_SECONDS,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_MAX_DELAY_SECONDS,
    DEFAULT_MIN_ACCEPTABLE_COUNT,
)
from ..core.enums import ConfidenceFlag
from ..core.exceptions import DataUnavailableError, DeviceError
from ..devices.adapter import DeviceAdapter
from .enrichment import enrich_records
from .model import FetchResult

logger = logging.getLogger(__name__)


def backoff_delay(attempt: int, base_delay: float, max_delay: float = DEFAULT_MAX_DELAY_SECONDS) -> float:
    """Wait after failed attempt ``attempt`` (1-based): base doubled per attempt, capped."""
    return min(base_delay * (2 ** (attempt - 1)), max_delay)


class ResilientFetcher:
    """Pull a complete-enough punch set from an unreliable terminal.

    A result is accepted as soon as it reaches ``min_acceptable_count``;
    otherwise the largest result seen is kept and the call is retried with
    exponential backoff. When attempts run out the best result is returned,
    unless it is empty, in which case ``DataUnavailableError`` is raised.
    The connection is always released before returning.
    """

    def __init__(
        self,
        adapter: DeviceAdapter,
        *,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        min_acceptable_count: int = DEFAULT_MIN_ACCEPTABLE_COUNT,
        base_delay: float = DEFAULT_BASE_DELAY_SECONDS,
        max_delay: float = DEFAULT_MAX_DELAY_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._adapter = adapter
        self._max_attempts = int(max_attempts)
        self._min_acceptable_count = int(min_acceptable_count)
        self._base_delay = float(base_delay)
        self._max_delay = float(max_delay)
        self._sleep = sleep

    def fetch(self, max_attempts: Optional[int] = None, min_acceptable_count: Optional[int] = None) -> FetchResult:
        attempts_allowed = require_positive(
            self._max_attempts if max_attempts is None else max_attempts, "max_attempts"
        )
        threshold = self._min_acceptable_count if min_acceptable_count is None else int(min_acceptable_count)
        device = self._adapter.device

        best: Optional[FetchResult] = None
        last_error: Optional[BaseException] = None
        conn: Any = None
        attempt = 0

        try:
            for attempt in range(1, attempts_allowed + 1):
                logger.info("[%s] fetching punch logs (attempt %s/%s)", device, attempt, attempts_allowed)
                try:
                    if conn is None:
                        conn = self._adapter.connect()
                    result = self._read(conn, attempt)
                except DeviceError as e:
                    logger.warning("[%s] attempt %s failed: %s", device, attempt, e)
                    last_error = e
                    # State of the session is unknown after a failure: reconnect next time.
                    self._release(conn)
                    conn = None
                else:
                    if result.count >= threshold and result.count > 0:
                        logger.info("[%s] accepted %s punch records", device, result.count)
                        return result

                    if result.count == 0:
                        logger.warning("[%s] no punch records received", device)
                        last_error = DataUnavailableError("No attendance data received", device=device, attempts=attempt)
                    else:
                        logger.warning(
                            "[%s] only %s punch records (want >= %s), retrying", device, result.count, threshold
                        )
                        last_error = DataUnavailableError(
                            f"Very low data: only {result.count} records retrieved", device=device, attempts=attempt
                        )
                    if best is None or result.count > best.count:
                        best = result

                if attempt < attempts_allowed:
                    wait = backoff_delay(attempt, self._base_delay, self._max_delay)
                    logger.info("[%s] waiting %.1fs before retry", device, wait)
                    self._sleep(wait)
        finally:
            self._release(conn)

        if best is not None and best.count > 0:
            logger.warning("[%s] returning best available data: %s records", device, best.count)
            flags = best.flags
            if ConfidenceFlag.BELOW_ACCEPTABLE_COUNT not in flags:
                flags = flags + (ConfidenceFlag.BELOW_ACCEPTABLE_COUNT,)
            return FetchResult(
                device=best.device,
                records=best.records,
                attempts=attempt,
                identity_enriched=best.identity_enriched,
                flags=flags,
            )

        raise DataUnavailableError(
            f"[{device}] failed to fetch attendance logs after {attempt} attempts. "
            f"Last error: {last_error or 'unknown error'}",
            device=device,
            attempts=attempt,
            last_error=last_error,
        ) from last_error

    def _read(self, conn: Any, attempt: int) -> FetchResult:
        device = self._adapter.device
        raw = self._adapter.list_punch_records(conn)

        identities = None
        try:
            identities = self._adapter.list_enrolled_users(conn)
        except DeviceError as e:
            logger.warning("[%s] user lookup failed, punches stay unnamed: %s", device, e)

        flags: tuple[ConfidenceFlag, ...] = ()
        if identities is None:
            flags = (ConfidenceFlag.IDENTITY_LOOKUP_FAILED,)

        return FetchResult(
            device=device,
            records=enrich_records(raw, identities),
            attempts=attempt,
            identity_enriched=identities is not None,
            flags=flags,
        )

    def _release(self, conn: Any) -> None:
        if conn is None:
            return
        try:
            self._adapter.disconnect(conn)
        except Exception as e:
            logger.warning("[%s] could not disconnect cleanly: %s", self._adapter.device, e)
