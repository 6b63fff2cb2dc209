"""Constants for report files, atomic writing, and stdout formatting."""

from __future__ import annotations

REPORT_TEMP_PREFIX: str = ".tmp-"
REPORT_TEMP_SUFFIX: str = ".json"

SCHEMA_VERSION: str = "1.0.0"

STATUS_PASSED: str = "passed"
STATUS_FAILED: str = "failed"
STATUS_NOT_RUN: str = "not_run"

# ANSI escape codes for terminal colouring.
ANSI_RESET: str = "\033[0m"
ANSI_RED: str = "\033[31;1m"
ANSI_YELLOW: str = "\033[33;1m"
ANSI_GREEN: str = "\033[32;1m"
ANSI_DIM: str = "\033[2m"

SEVERITY_COLORS: dict[str, str] = {
    "error": ANSI_RED,
    "warning": ANSI_YELLOW,
}

STATUS_COLORS: dict[str, str] = {
    STATUS_PASSED: ANSI_GREEN,
    STATUS_FAILED: ANSI_RED,
    STATUS_NOT_RUN: ANSI_DIM,
}
