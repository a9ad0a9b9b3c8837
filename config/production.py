import os

from config.base import DEFAULT_DEVICE, FETCH_CONFIG, MAX_CONCURRENT_DEVICES, load_devices  # noqa: F401

DEBUG = False

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
