from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Mapping, Optional, Sequence

from .common.datetime_utils import now_local
from .common.validators import require_int, require_non_empty, require_positive
from .core.constants import (
    DEFAULT_BASE_DELAY_SECONDS,
    DEFAULT_DEVICE_PORT,
    DEFAULT_DEVICE_TIMEOUT_SECONDS,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_MAX_CONCURRENT_DEVICES,
    DEFAULT_MAX_DELAY_SECONDS,
    DEFAULT_MIN_ACCEPTABLE_COUNT,
)
from .core.exceptions import ValidationError
from .devices.adapter import DeviceAdapter
from .devices.model import DeviceConfig
from .devices.zk_adapter import ZKDeviceAdapter
from .punches.service import AttendanceService, FetchPolicy
from .shifts.aggregator import ShiftAggregator
from .shifts.model import ShiftWindowConfig
from .shifts.resolver import ShiftWindowResolver
from .shifts.service import ShiftService


@dataclass(frozen=True)
class Container:
    devices: dict[str, DeviceConfig]
    default_device: str
    clock: Callable[[], datetime]

    resolver: ShiftWindowResolver
    aggregator: ShiftAggregator
    attendance_service: AttendanceService
    shift_service: ShiftService


def build_device(raw: Mapping) -> DeviceConfig:
    prefix = require_non_empty(raw.get("prefix", ""), "prefix").lower()
    shift_raw = dict(raw.get("shift") or {})
    shift = ShiftWindowConfig.create(**shift_raw)
    return DeviceConfig(
        prefix=prefix,
        name=str(raw.get("name") or f"ZKTeco Device {prefix.upper()}"),
        ip=require_non_empty(raw.get("ip", ""), f"{prefix} ip"),
        port=require_int(raw.get("port", DEFAULT_DEVICE_PORT), f"{prefix} port"),
        timeout=require_int(raw.get("timeout", DEFAULT_DEVICE_TIMEOUT_SECONDS), f"{prefix} timeout"),
        password=require_int(raw.get("password", 0), f"{prefix} password"),
        location=raw.get("location"),
        country=raw.get("country"),
        shift=shift,
    )


def build_container(
    *,
    device_configs: Sequence[Mapping],
    default_device: Optional[str] = None,
    fetch_config: Optional[Mapping] = None,
    max_concurrent_devices: int = DEFAULT_MAX_CONCURRENT_DEVICES,
    adapter_factory: Optional[Callable[[DeviceConfig], DeviceAdapter]] = None,
    clock: Callable[[], datetime] = now_local,
    sleep: Callable[[float], None] = time.sleep,
) -> Container:
    devices: dict[str, DeviceConfig] = {}
    for raw in device_configs:
        device = build_device(raw)
        if device.prefix in devices:
            raise ValidationError(f"Duplicate device prefix: {device.prefix}")
        devices[device.prefix] = device

    if not devices:
        raise ValidationError("No biometric devices configured. Please set at least one device configuration.")

    default = (default_device or next(iter(devices))).lower()
    if default not in devices:
        raise ValidationError(f"DEFAULT_DEVICE {default!r} is not a configured device")

    fetch_config = dict(fetch_config or {})
    policy = FetchPolicy(
        max_attempts=require_positive(fetch_config.get("max_attempts", DEFAULT_MAX_ATTEMPTS), "max_attempts"),
        min_acceptable_count=require_int(
            fetch_config.get("min_acceptable_count", DEFAULT_MIN_ACCEPTABLE_COUNT), "min_acceptable_count"
        ),
        base_delay=float(fetch_config.get("base_delay", DEFAULT_BASE_DELAY_SECONDS)),
        max_delay=float(fetch_config.get("max_delay", DEFAULT_MAX_DELAY_SECONDS)),
    )

    resolver = ShiftWindowResolver()
    aggregator = ShiftAggregator()
    attendance_service = AttendanceService(
        devices,
        adapter_factory or ZKDeviceAdapter.from_config,
        fetch_policy=policy,
        clock=clock,
        sleep=sleep,
        max_concurrent_devices=max_concurrent_devices,
    )
    shift_service = ShiftService(attendance_service, resolver=resolver, aggregator=aggregator)

    return Container(
        devices=devices,
        default_device=default,
        clock=clock,
        resolver=resolver,
        aggregator=aggregator,
        attendance_service=attendance_service,
        shift_service=shift_service,
    )
