from __future__ import annotations

import logging

from flask import Flask, jsonify

from ..common.datetime_utils import format_iso
from ..common.responses import error_payload
from ..core.exceptions import DomainError
from ..container import Container
from .presenter import config_payload, error_entry, fetch_meta_payload, resolution_payload, shift_punch_payload
from .service import ShiftReport, ShiftSideReport

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _stamp() -> str:
        return container.clock().isoformat()

    def _period(report) -> dict:
        return {
            "checkInDay": report.search_days.check_in_day.isoformat(),
            "checkOutDay": report.search_days.check_out_day.isoformat(),
            "description": report.config.description,
        }

    def _today_payload(report: ShiftReport) -> dict:
        config = config_payload(report.config)
        config["currentTime"] = format_iso(report.now)
        config["currentHour"] = report.now.hour
        return {
            "success": True,
            "timestamp": _stamp(),
            "devicePrefix": report.device.prefix,
            "shiftConfig": config,
            "shiftPeriod": _period(report),
            "fetch": fetch_meta_payload(report.fetch),
            "data": [resolution_payload(r) for r in report.resolutions],
        }

    def _side_payload(report: ShiftSideReport) -> dict:
        key = "checkIn" if report.side == "check_in" else "checkOut"
        config = config_payload(report.config)
        config["currentTime"] = format_iso(report.now)
        config["currentHour"] = report.now.hour
        return {
            "success": True,
            "timestamp": _stamp(),
            "devicePrefix": report.device.prefix,
            "shiftConfig": config,
            "shiftPeriod": _period(report),
            "fetch": fetch_meta_payload(report.fetch),
            "data": [
                {
                    "deviceUserId": p.employee_id,
                    "employeeName": p.employee_name,
                    "employeeRole": p.employee_role,
                    key: shift_punch_payload(p),
                }
                for p in report.punches
            ],
        }

    def _failure(exc: Exception):
        if not isinstance(exc, DomainError):
            logger.exception("Unexpected error while resolving shifts")
        body, status = error_payload(exc)
        body["timestamp"] = _stamp()
        return jsonify(body), status

    @app.route("/<prefix>/todayShift", methods=["GET"], endpoint="today_shift")
    def today_shift(prefix: str):
        try:
            report = container.shift_service.today_shift(prefix)
        except Exception as e:
            return _failure(e)
        return jsonify(_today_payload(report)), 200

    @app.route("/todayShift", methods=["GET"], endpoint="today_shift_default")
    def today_shift_default():
        return today_shift(container.default_device)

    @app.route("/<prefix>/shiftCheckin", methods=["GET"], endpoint="shift_checkin")
    def shift_checkin(prefix: str):
        try:
            report = container.shift_service.shift_check_in(prefix)
        except Exception as e:
            return _failure(e)
        return jsonify(_side_payload(report)), 200

    @app.route("/<prefix>/shiftCheckout", methods=["GET"], endpoint="shift_checkout")
    def shift_checkout(prefix: str):
        try:
            report = container.shift_service.shift_check_out(prefix)
        except Exception as e:
            return _failure(e)
        return jsonify(_side_payload(report)), 200

    @app.route("/shifts/all-devices", methods=["GET"], endpoint="all_devices_shift")
    def all_devices_shift():
        try:
            fleet = container.shift_service.all_devices_shift()
        except Exception as e:
            return _failure(e)

        results = {prefix: _today_payload(r) for prefix, r in fleet.reports.items()}
        for prefix, err in fleet.failures.items():
            results[prefix] = error_entry(prefix, err)

        return jsonify(
            {
                "success": True,
                "timestamp": _stamp(),
                "totalDevices": len(results),
                "failedDevices": len(fleet.failures),
                "results": results,
            }
        ), 200
