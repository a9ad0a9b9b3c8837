from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.responses import error_payload
from ..common.validators import require_iso_date
from ..core.exceptions import DomainError
from ..container import Container
from ..shifts.presenter import attendance_slice_payload, device_attendance_payload, error_entry

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    def _stamp() -> str:
        return container.clock().isoformat()

    def _failure(exc: Exception):
        if not isinstance(exc, DomainError):
            logger.exception("Unexpected error while pulling attendance")
        body, status = error_payload(exc)
        body["timestamp"] = _stamp()
        return jsonify(body), status

    def _slice_response(attendance_slice):
        body = {"success": True, "timestamp": _stamp(), "devicePrefix": attendance_slice.fetch.device}
        body.update(attendance_slice_payload(attendance_slice))
        return jsonify(body), 200

    def _fleet_response(report):
        devices = {
            prefix: {"success": True, **device_attendance_payload(service.get_device(prefix), fetched)}
            for prefix, fetched in report.results.items()
        }
        for prefix, err in report.failures.items():
            devices[prefix] = error_entry(prefix, err)

        body = {
            "success": True,
            "timestamp": _stamp(),
            "devices": devices,
            "summary": {
                "totalDevices": len(devices),
                "successfulDevices": len(report.results),
                "failedDevices": len(report.failures),
                "totalRecords": sum(f.count for f in report.results.values()),
                "totalUniqueEmployees": sum(f.unique_employees for f in report.results.values()),
            },
        }
        if report.country is not None:
            body["country"] = report.country
        return jsonify(body), 200

    @app.route("/<prefix>/attendance", methods=["GET"], endpoint="attendance_latest")
    def attendance_latest(prefix: str):
        try:
            device = service.get_device(prefix)
            fetched = service.latest(prefix)
        except Exception as e:
            return _failure(e)

        body = {"success": True, "timestamp": _stamp(), "devicePrefix": device.prefix}
        body.update(device_attendance_payload(device, fetched))
        return jsonify(body), 200

    @app.route("/<prefix>/attendance/today", methods=["GET"], endpoint="attendance_today")
    def attendance_today(prefix: str):
        try:
            attendance_slice = service.today(prefix)
        except Exception as e:
            return _failure(e)
        return _slice_response(attendance_slice)

    @app.route("/<prefix>/attendance/date/<day>", methods=["GET"], endpoint="attendance_by_date")
    def attendance_by_date(prefix: str, day: str):
        try:
            attendance_slice = service.on_date(prefix, require_iso_date(day, "date"))
        except Exception as e:
            return _failure(e)
        return _slice_response(attendance_slice)

    @app.route("/<prefix>/attendance/filter/<start>/<end>", methods=["GET"], endpoint="attendance_by_range")
    def attendance_by_range(prefix: str, start: str, end: str):
        try:
            attendance_slice = service.in_range(
                prefix, require_iso_date(start, "start date"), require_iso_date(end, "end date")
            )
        except Exception as e:
            return _failure(e)
        return _slice_response(attendance_slice)

    @app.route("/<prefix>/attendance/filter", methods=["GET"], endpoint="attendance_filter")
    def attendance_filter(prefix: str):
        start_raw = request.args.get("startDate")
        end_raw = request.args.get("endDate")
        try:
            attendance_slice = service.in_range(
                prefix,
                require_iso_date(start_raw, "startDate") if start_raw else None,
                require_iso_date(end_raw, "endDate") if end_raw else None,
            )
        except Exception as e:
            return _failure(e)
        return _slice_response(attendance_slice)

    @app.route("/attendance/all-devices", methods=["GET"], endpoint="attendance_all_devices")
    def attendance_all_devices():
        try:
            report = service.all_devices()
        except Exception as e:
            return _failure(e)
        return _fleet_response(report)

    @app.route("/country/<code>/attendance", methods=["GET"], endpoint="attendance_by_country")
    def attendance_by_country(code: str):
        try:
            report = service.by_country(code)
        except Exception as e:
            return _failure(e)
        return _fleet_response(report)
