from __future__ import annotations

from flask import Flask, jsonify

from ..common.responses import error_payload
from ..core.exceptions import DomainError
from ..container import Container
from ..shifts.presenter import device_payload


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.route("/devices", methods=["GET"], endpoint="devices")
    def devices():
        items = [device_payload(d) for d in service.list_devices()]
        return jsonify({"success": True, "defaultDevice": container.default_device, "devices": items}), 200

    @app.route("/<prefix>/device/info", methods=["GET"], endpoint="device_info")
    def device_info(prefix: str):
        try:
            device = service.get_device(prefix)
        except DomainError as e:
            body, status = error_payload(e)
            body["timestamp"] = container.clock().isoformat()
            return jsonify(body), status
        body = {"success": True, "timestamp": container.clock().isoformat(), "data": device_payload(device)}
        return jsonify(body), 200

    @app.route("/country/<code>/devices", methods=["GET"], endpoint="devices_by_country")
    def devices_by_country(code: str):
        items = service.devices_by_country(code)
        return jsonify(
            {
                "success": True,
                "timestamp": container.clock().isoformat(),
                "data": [device_payload(d) for d in items],
                "summary": {
                    "country": code.strip().upper(),
                    "count": len(items),
                    "devices": [d.prefix for d in items],
                },
            }
        ), 200
