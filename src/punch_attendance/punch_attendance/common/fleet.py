from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable, TypeVar

from ..core.exceptions import DeviceRunError, DomainError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def run_per_device(
    prefixes: Iterable[str],
    task: Callable[[str], T],
    *,
    max_workers: int,
) -> tuple[dict[str, T], dict[str, DomainError]]:
    """Run ``task(prefix)`` for every device, at most ``max_workers`` at a time.

    Returns ``(results, failures)`` keyed by prefix. A device that raises ends
    up in ``failures``; errors outside the domain tree are wrapped in
    ``DeviceRunError`` with the original as ``__cause__``.
    """

    results: dict[str, T] = {}
    failures: dict[str, DomainError] = {}

    with ThreadPoolExecutor(max_workers=max(1, int(max_workers))) as pool:
        futures = {prefix: pool.submit(task, prefix) for prefix in prefixes}
        for prefix, future in futures.items():
            try:
                results[prefix] = future.result()
            except DomainError as e:
                logger.error("[%s] device run failed: %s", prefix, e)
                failures[prefix] = e
            except Exception as e:
                logger.exception("[%s] unexpected error during device run", prefix)
                wrapped = DeviceRunError(f"[{prefix}] unexpected error: {e}", device=prefix)
                wrapped.__cause__ = e
                failures[prefix] = wrapped

    return results, failures
