"""JSON report writers for check results and pipeline runs."""

from __future__ import annotations

from pathlib import Path

from skillgate import __version__
from skillgate.constants.reporting import REPORT_TEMP_PREFIX, REPORT_TEMP_SUFFIX, SCHEMA_VERSION
from skillgate.io import write_json_atomic
from skillgate.model import CheckResult, PipelineRun
from skillgate.types import JsonObject


def build_check_report(result: CheckResult, *, fail_on: str = "error") -> JsonObject:
    """Build the JSON payload for a guidance check."""
    return {
        "schema_version": SCHEMA_VERSION,
        "tool_version": __version__,
        "kind": "check",
        "fail_on": fail_on,
        "exit_code": result.exit_code(fail_on),
        **result.to_dict(),
    }


def build_run_report(run: PipelineRun, *, cwd: Path) -> JsonObject:
    """Build the JSON payload for a pipeline run."""
    return {
        "schema_version": SCHEMA_VERSION,
        "tool_version": __version__,
        "kind": "run",
        "cwd": str(cwd),
        "exit_code": run.exit_code,
        **run.to_dict(),
    }


def write_report(path: Path, payload: JsonObject) -> None:
    """Write a report atomically."""
    write_json_atomic(
        path=path,
        payload=payload,
        temp_prefix=REPORT_TEMP_PREFIX,
        temp_suffix=REPORT_TEMP_SUFFIX,
    )
