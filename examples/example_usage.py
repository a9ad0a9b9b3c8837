"""Ví dụ: dùng service layer (không qua Flask).

Pulls the default device once and prints the resolved overnight shift per employee.
"""

import importlib
import logging

from dotenv import load_dotenv

from config import get_settings_module

from src.punch_attendance.punch_attendance.container import build_container


def main():
    load_dotenv(override=False)
    logging.basicConfig(level=logging.INFO)

    settings = importlib.import_module(get_settings_module())
    container = build_container(
        device_configs=settings.load_devices(),
        default_device=settings.DEFAULT_DEVICE,
        fetch_config=settings.FETCH_CONFIG,
    )

    report = container.shift_service.today_shift(container.default_device)
    print(f"{report.device.name}: {len(report.resolutions)} employees, now={report.now:%Y-%m-%d %H:%M}")
    for s in report.resolutions:
        check_in = s.check_in.timestamp.strftime("%m-%d %H:%M") if s.check_in else "-"
        check_out = s.check_out.timestamp.strftime("%m-%d %H:%M") if s.check_out else "-"
        print(f"  {s.employee_id:>6} {s.employee_name:<24} in={check_in:<12} out={check_out:<12} {s.status.value}")


if __name__ == "__main__":
    main()
