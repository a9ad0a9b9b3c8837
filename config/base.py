"""Settings shared by every environment.

Devices are discovered from ``<PREFIX>_IP`` / ``<PREFIX>_PORT`` pairs; each
device may override its shift window with ``<PREFIX>_DAY_PIVOT_HOUR``,
``<PREFIX>_CHECKIN_BUFFER_START`` and friends, and describe the nominal shift
with ``<PREFIX>_SHIFT_START_HOUR``, ``<PREFIX>_SHIFT_END_HOUR`` and
``<PREFIX>_TIMEZONE``.
"""

import os

DEVICE_PREFIXES = [
    # Pakistan
    {"prefix": "pk01", "country": "PK", "location": "Pakistan"},
    {"prefix": "pk02", "country": "PK", "location": "Pakistan"},
    {"prefix": "pk03", "country": "PK", "location": "Pakistan"},
    # USA
    {"prefix": "us01", "country": "US", "location": "USA"},
    {"prefix": "us02", "country": "US", "location": "USA"},
    {"prefix": "us03", "country": "US", "location": "USA"},
    # UK
    {"prefix": "uk01", "country": "UK", "location": "United Kingdom"},
    {"prefix": "uk02", "country": "UK", "location": "United Kingdom"},
    # UAE
    {"prefix": "ae01", "country": "AE", "location": "UAE"},
    {"prefix": "ae02", "country": "AE", "location": "UAE"},
]

SHIFT_ENV_KEYS = {
    "day_pivot_hour": "DAY_PIVOT_HOUR",
    "check_in_buffer_start": "CHECKIN_BUFFER_START",
    "check_in_buffer_end": "CHECKIN_BUFFER_END",
    "check_out_buffer_start": "CHECKOUT_BUFFER_START",
    "check_out_buffer_end": "CHECKOUT_BUFFER_END",
    "description": "SHIFT_DESCRIPTION",
    "shift_start_hour": "SHIFT_START_HOUR",
    "shift_end_hour": "SHIFT_END_HOUR",
    "timezone": "TIMEZONE",
}


def _shift_overrides(key: str) -> dict:
    overrides = {}
    for field_name, suffix in SHIFT_ENV_KEYS.items():
        value = os.getenv(f"{key}_{suffix}")
        if value is not None and value.strip():
            overrides[field_name] = value.strip()
    return overrides


def load_devices() -> list:
    """Device dicts for ``build_container``; validation happens there."""

    devices = []
    seen = set()

    # Legacy single device (MB460_*) is registered as pk01.
    if os.getenv("MB460_IP"):
        devices.append(
            {
                "prefix": "pk01",
                "name": "ZKTeco MB460 (Pakistan Primary)",
                "ip": os.environ["MB460_IP"],
                "port": os.getenv("MB460_PORT", "4370"),
                "timeout": os.getenv("MB460_TIMEOUT", "10"),
                "location": "Pakistan",
                "country": "PK",
                "shift": _shift_overrides("PK01"),
            }
        )
        seen.add("pk01")

    for item in DEVICE_PREFIXES:
        key = item["prefix"].upper()
        ip = os.getenv(f"{key}_IP")
        port = os.getenv(f"{key}_PORT")
        if not ip or not port or item["prefix"] in seen:
            continue
        devices.append(
            {
                "prefix": item["prefix"],
                "name": os.getenv(f"{key}_NAME", f"ZKTeco Device {key}"),
                "ip": ip,
                "port": port,
                "timeout": os.getenv(f"{key}_TIMEOUT", "10"),
                "password": os.getenv(f"{key}_PASSWORD", "0"),
                "location": item["location"],
                "country": item["country"],
                "shift": _shift_overrides(key),
            }
        )
    return devices


DEFAULT_DEVICE = os.getenv("DEFAULT_DEVICE") or None

FETCH_CONFIG = {
    "max_attempts": int(os.getenv("FETCH_MAX_ATTEMPTS", "3")),
    "min_acceptable_count": int(os.getenv("FETCH_MIN_ACCEPTABLE_COUNT", "10")),
    "base_delay": float(os.getenv("FETCH_BASE_DELAY_SECONDS", "2.0")),
    "max_delay": float(os.getenv("FETCH_MAX_DELAY_SECONDS", "10.0")),
}

MAX_CONCURRENT_DEVICES = int(os.getenv("MAX_CONCURRENT_DEVICES", "3"))
