from __future__ import annotations

from typing import Any, Protocol, Sequence

from ..punches.model import EmployeeIdentity, PunchRecord


class DeviceAdapter(Protocol):
    """Contract of a biometric terminal client.

    Connections are single-owner: one run acquires one connection and never
    shares it. Implementations raise ``DeviceConnectionError`` for transport
    failures and ``DeviceError`` for anything else the terminal reports.
    """

    @property
    def device(self) -> str:
        raise NotImplementedError

    def connect(self) -> Any:
        raise NotImplementedError

    def list_enrolled_users(self, conn: Any) -> Sequence[EmployeeIdentity]:
        raise NotImplementedError

    def list_punch_records(self, conn: Any) -> Sequence[PunchRecord]:
        raise NotImplementedError

    def disconnect(self, conn: Any) -> None:
        raise NotImplementedError
