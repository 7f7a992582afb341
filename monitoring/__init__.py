# PATH: monitoring/__init__.py
"""
Monitoring package for the teleport demo.

Stable exports:
- TeleportReport
- build_teleport_report
- exit_code_for
- print_settlement_verdict
- print_teleport_report
"""

from monitoring.teleport_report import (
    TeleportReport,
    build_teleport_report,
    exit_code_for,
    print_settlement_verdict,
    print_teleport_report,
)

__all__ = [
    "TeleportReport",
    "build_teleport_report",
    "exit_code_for",
    "print_settlement_verdict",
    "print_teleport_report",
]
