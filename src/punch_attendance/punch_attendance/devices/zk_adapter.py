from __future__ import annotations

import logging
from typing import Sequence

from zk import ZK
from zk.exception import ZKError, ZKErrorConnection, ZKNetworkError

from ..core.constants import UNKNOWN_EMPLOYEE_ROLE
from ..core.exceptions import DeviceConnectionError, DeviceError, IdentityLookupError
from ..punches.model import EmployeeIdentity, PunchRecord
from .model import DeviceConfig

logger = logging.getLogger(__name__)


class ZKDeviceAdapter:
    """Device adapter for ZKTeco terminals backed by ``pyzk``.

    Every ``connect()`` opens a fresh ``ZK`` session.
    """

    def __init__(self, config: DeviceConfig):
        self._config = config

    @classmethod
    def from_config(cls, config: DeviceConfig) -> "ZKDeviceAdapter":
        return cls(config)

    @property
    def device(self) -> str:
        return self._config.prefix

    def connect(self):
        cfg = self._config
        logger.info("[%s] connecting to %s:%s", cfg.prefix, cfg.ip, cfg.port)
        client = ZK(cfg.ip, port=int(cfg.port), timeout=int(cfg.timeout), password=int(cfg.password))
        try:
            conn = client.connect()
        except (ZKNetworkError, ZKErrorConnection, OSError) as e:
            raise DeviceConnectionError(f"[{cfg.prefix}] cannot connect to {cfg.ip}:{cfg.port}: {e}") from e
        except ZKError as e:
            raise DeviceConnectionError(f"[{cfg.prefix}] device refused connection: {e}") from e
        if not conn:
            raise DeviceConnectionError(f"[{cfg.prefix}] cannot connect to {cfg.ip}:{cfg.port}")
        return conn

    def list_enrolled_users(self, conn) -> Sequence[EmployeeIdentity]:
        # Any roster failure (transport or a malformed user record) is an identity lookup failure.
        try:
            users = conn.get_users() or []
            return [
                EmployeeIdentity(
                    user_id=str(u.user_id),
                    name=(u.name or "").strip() or "Unknown",
                    role=int(getattr(u, "privilege", UNKNOWN_EMPLOYEE_ROLE) or 0),
                    card_no=int(getattr(u, "card", 0) or 0),
                )
                for u in users
                if u.user_id not in (None, "")
            ]
        except Exception as e:
            raise IdentityLookupError(f"[{self.device}] get_users failed: {e}") from e

    def list_punch_records(self, conn) -> Sequence[PunchRecord]:
        try:
            rows = conn.get_attendance() or []
        except (ZKNetworkError, ZKErrorConnection, OSError) as e:
            raise DeviceConnectionError(f"[{self.device}] connection lost while reading logs: {e}") from e
        except Exception as e:
            raise DeviceError(f"[{self.device}] get_attendance failed: {e}") from e

        return [
            PunchRecord(
                employee_id=str(r.user_id),
                timestamp=r.timestamp,
                source_ip=self._config.ip,
                user_sn=getattr(r, "uid", None),
            )
            for r in rows
            if r.timestamp is not None
        ]

    def disconnect(self, conn) -> None:
        try:
            conn.disconnect()
        except (ZKError, OSError) as e:
            raise DeviceError(f"[{self.device}] disconnect failed: {e}") from e
