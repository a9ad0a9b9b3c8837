from __future__ import annotations

from dataclasses import asdict
from typing import Optional

from ..common.datetime_utils import format_iso, format_record_date, format_time_only
from ..common.responses import error_payload
from ..devices.model import DeviceConfig
from ..punches.model import AttendanceSlice, FetchResult, PunchRecord
from .model import ShiftPunch, ShiftResolution, ShiftWindowConfig


def record_payload(r: Optional[PunchRecord]) -> Optional[dict]:
    if r is None:
        return None
    return {
        "userSn": r.user_sn,
        "deviceUserId": r.employee_id,
        "employeeName": r.employee_name,
        "employeeRole": r.employee_role,
        "employeeCardNo": r.employee_card_no,
        "recordTime": format_iso(r.timestamp),
        "recordDate": format_record_date(r.timestamp),
        "timeOnly": format_time_only(r.timestamp),
        "ip": r.source_ip,
    }


def shift_punch_payload(p: ShiftPunch) -> dict:
    """Found punch, or the identity-only placeholder with null times."""

    if p.record is not None:
        return record_payload(p.record)
    return {
        "userSn": None,
        "deviceUserId": p.employee_id,
        "employeeName": p.employee_name,
        "employeeRole": p.employee_role,
        "recordTime": None,
        "recordDate": None,
        "timeOnly": None,
        "ip": p.source_ip,
    }


def resolution_payload(s: ShiftResolution) -> dict:
    return {
        "deviceUserId": s.employee_id,
        "employeeName": s.employee_name,
        "employeeRole": s.employee_role,
        "totalRecords": s.total_records,
        "shiftCheckIn": record_payload(s.check_in),
        "shiftCheckOut": record_payload(s.check_out),
        "shiftStatus": s.status.value,
    }


def config_payload(c: ShiftWindowConfig) -> dict:
    d = asdict(c)
    return {
        "dayPivotHour": d["day_pivot_hour"],
        "checkInBufferStart": d["check_in_buffer_start"],
        "checkInBufferEnd": d["check_in_buffer_end"],
        "checkOutBufferStart": d["check_out_buffer_start"],
        "checkOutBufferEnd": d["check_out_buffer_end"],
        "description": d["description"],
        "startHour": d["shift_start_hour"],
        "endHour": d["shift_end_hour"],
        "timezone": d["timezone"],
    }


def device_payload(d: DeviceConfig) -> dict:
    return {
        "prefix": d.prefix,
        "name": d.name,
        "ip": d.ip,
        "port": d.port,
        "timeout": d.timeout,
        "location": d.location,
        "country": d.country,
        "shiftConfig": config_payload(d.shift),
    }


def fetch_meta_payload(f: FetchResult) -> dict:
    return {
        "recordCount": f.count,
        "attempts": f.attempts,
        "identityEnriched": f.identity_enriched,
        "lowConfidence": f.low_confidence,
        "flags": [flag.value for flag in f.flags],
    }


def attendance_slice_payload(s: AttendanceSlice) -> dict:
    return {
        "totalRecords": s.fetch.count,
        "filteredRecords": s.count,
        "uniqueEmployees": s.unique_employees,
        "filters": {
            "startDate": s.start.isoformat() if s.start else None,
            "endDate": s.end.isoformat() if s.end else None,
        },
        "fetch": fetch_meta_payload(s.fetch),
        "data": [record_payload(r) for r in s.records],
    }


def device_attendance_payload(device: DeviceConfig, f: FetchResult) -> dict:
    return {
        "deviceId": device.prefix,
        "deviceName": device.name,
        "location": device.location,
        "country": device.country,
        "recordCount": f.count,
        "uniqueEmployees": f.unique_employees,
        "fetch": fetch_meta_payload(f),
        "data": [record_payload(r) for r in f.records],
    }


def error_entry(prefix: str, err: BaseException) -> dict:
    """Per-device failure entry inside a multi-device response."""
    body, _ = error_payload(err)
    body["devicePrefix"] = prefix
    return body
