from __future__ import annotations

from typing import Optional

from .enums import PipelineStage


class DomainError(Exception):
    """Base exception for business rule violations."""

    stage: PipelineStage = PipelineStage.RESOLVE


class ValidationError(DomainError):
    """Raised when input data or configuration is invalid."""

    stage = PipelineStage.CONFIG


class DeviceNotFoundError(DomainError):
    """Raised when a device prefix is not configured."""

    stage = PipelineStage.CONFIG


class DeviceError(DomainError):
    """Raised by a device adapter when the terminal call fails."""

    stage = PipelineStage.FETCH


class DeviceConnectionError(DeviceError):
    """Transient connect/transport failure, retried by the fetcher."""


class IdentityLookupError(DeviceError):
    """Enrolled user list could not be read; recovered with placeholder identity."""


class DataUnavailableError(DomainError):
    """No usable punch records after every fetch attempt."""

    stage = PipelineStage.FETCH

    def __init__(
        self,
        message: str,
        *,
        device: str = "unknown",
        attempts: int = 0,
        last_error: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.device = device
        self.attempts = attempts
        self.last_error = last_error


class DeviceRunError(DomainError):
    """Unexpected failure while processing one device in a multi-device run."""

    stage = PipelineStage.FETCH

    def __init__(self, message: str, *, device: str):
        super().__init__(message)
        self.device = device
