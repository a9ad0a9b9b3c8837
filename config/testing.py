import os

from config.base import DEFAULT_DEVICE, load_devices  # noqa: F401

DEBUG = False
TESTING = True

LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")

# No real backoff waits and a single attempt when a test hits the HTTP layer.
FETCH_CONFIG = {
    "max_attempts": 1,
    "min_acceptable_count": 1,
    "base_delay": 0.0,
    "max_delay": 0.0,
}

MAX_CONCURRENT_DEVICES = 1
