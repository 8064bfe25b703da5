"""Report rendering: JSON and plain-text terminal output."""

from preflight.report.json_report import render_json_report, report_dict
from preflight.report.terminal import render_terminal_report

__all__ = ["render_json_report", "render_terminal_report", "report_dict"]
