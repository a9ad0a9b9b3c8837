from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..core.constants import DEFAULT_DEVICE_PORT, DEFAULT_DEVICE_TIMEOUT_SECONDS
from ..shifts.model import ShiftWindowConfig


@dataclass(frozen=True)
class DeviceConfig:
    """One configured terminal, addressed by its location prefix (pk01, us01, ...)."""

    prefix: str
    name: str
    ip: str
    port: int = DEFAULT_DEVICE_PORT
    timeout: int = DEFAULT_DEVICE_TIMEOUT_SECONDS
    password: int = 0
    location: Optional[str] = None
    country: Optional[str] = None
    shift: ShiftWindowConfig = field(default_factory=ShiftWindowConfig)
