"""Punch Attendance package.

Pulls raw punch logs from biometric terminals and resolves overnight shift
check-ins/check-outs per employee. Organized by feature modules (devices,
punches, shifts) with a thin Flask controller layer over the services.
"""
