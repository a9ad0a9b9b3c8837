"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

UNKNOWN_EMPLOYEE_NAME = "Unknown Employee"
UNKNOWN_EMPLOYEE_ROLE = 0

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_MIN_ACCEPTABLE_COUNT = 10
DEFAULT_BASE_DELAY_SECONDS = 2.0
DEFAULT_MAX_DELAY_SECONDS = 10.0
DEFAULT_MAX_CONCURRENT_DEVICES = 3

DEFAULT_DAY_PIVOT_HOUR = 12
DEFAULT_CHECKIN_BUFFER_START = 12
DEFAULT_CHECKIN_BUFFER_END = 24
DEFAULT_CHECKOUT_BUFFER_START = 0
DEFAULT_CHECKOUT_BUFFER_END = 12
DEFAULT_SHIFT_DESCRIPTION = "Overnight shift (6 PM - 2 AM) with buffer zones"
DEFAULT_SHIFT_START_HOUR = 18
DEFAULT_SHIFT_END_HOUR = 2
DEFAULT_SHIFT_TIMEZONE = "local"

DEFAULT_DEVICE_PORT = 4370
DEFAULT_DEVICE_TIMEOUT_SECONDS = 10
