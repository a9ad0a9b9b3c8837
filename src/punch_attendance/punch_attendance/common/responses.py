from __future__ import annotations

from ..core.exceptions import (
    DataUnavailableError,
    DeviceNotFoundError,
    DeviceRunError,
    DomainError,
    ValidationError,
)


def error_payload(exc: BaseException) -> tuple[dict, int]:
    """Structured failure body + HTTP status for a failed pipeline run."""

    if isinstance(exc, DomainError):
        body = {"success": False, "stage": exc.stage.value, "error": str(exc)}
    else:
        body = {"success": False, "stage": "unknown", "error": "Internal error"}

    if isinstance(exc, DataUnavailableError):
        body["device"] = exc.device
        body["attempts"] = exc.attempts
        body["cause"] = str(exc.last_error) if exc.last_error else None
        return body, 503
    if isinstance(exc, DeviceRunError):
        body["device"] = exc.device
        return body, 500
    if isinstance(exc, DeviceNotFoundError):
        return body, 404
    if isinstance(exc, ValidationError):
        return body, 400
    return body, 500
