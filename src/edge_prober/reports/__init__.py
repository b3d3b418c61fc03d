"""Reports module - Console and JSON output."""

from edge_prober.reports.console import ConsoleReporter
from edge_prober.reports.json_report import generate_json_report, save_json_report

__all__ = [
    "ConsoleReporter",
    "generate_json_report",
    "save_json_report",
]
