"""Reporting package for skillgate outputs."""

from __future__ import annotations

from .stdout import CheckReporter, RunReporter, render_plan
from .writer import build_check_report, build_run_report, write_report

__all__ = [
    "CheckReporter",
    "RunReporter",
    "build_check_report",
    "build_run_report",
    "render_plan",
    "write_report",
]
