from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import Container, build_container
from .devices.controller import register as register_devices
from .punches.controller import register as register_punches
from .shifts.controller import register as register_shifts

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if container is None:
        container = build_container(
            device_configs=settings.load_devices(),
            default_device=getattr(settings, "DEFAULT_DEVICE", None),
            fetch_config=getattr(settings, "FETCH_CONFIG", None),
            max_concurrent_devices=int(getattr(settings, "MAX_CONCURRENT_DEVICES", 3)),
        )

    logger.info(
        "[punch-attendance] settings=%s devices=%s default=%s",
        settings_module,
        ",".join(container.devices),
        container.default_device,
    )

    register_devices(app, container)
    register_punches(app, container)
    register_shifts(app, container)

    return app
