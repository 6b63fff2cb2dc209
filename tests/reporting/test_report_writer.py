"""Tests for JSON report payloads and atomic writing."""

from __future__ import annotations

import json
from pathlib import Path

from skillgate import __version__
from skillgate.guidance import check_workspace
from skillgate.model import PipelineRun, StepResult
from skillgate.reporting import build_check_report, build_run_report, write_report


def test_check_report_payload(workspace_root: Path) -> None:
    result = check_workspace(workspace_root)

    payload = build_check_report(result, fail_on="warning")

    assert payload["schema_version"] == "1.0.0"
    assert payload["tool_version"] == __version__
    assert payload["kind"] == "check"
    assert payload["exit_code"] == 1
    assert payload["skills_checked"] == 2
    assert payload["counts"] == {"error": 3, "warning": 5}
    drifted = payload["skills"][0]
    assert drifted["skill"] == "drifted-skill"
    assert drifted["documented_stages"] == ["format", "test", "lint", "build"]
    assert {issue["rule_id"] for issue in drifted["issues"]} >= {"STAGE_ORDER", "README_DRIFT"}


def test_run_report_payload(tmp_path: Path) -> None:
    run = PipelineRun(
        steps=(
            StepResult(stage="format", command=("cargo", "fmt"), status="passed", exit_code=0),
            StepResult(stage="lint", command=("cargo", "clippy"), status="failed", exit_code=1),
            StepResult(stage="test", command=("cargo", "test"), status="not_run"),
        ),
    )

    payload = build_run_report(run, cwd=tmp_path)

    assert payload["kind"] == "run"
    assert payload["cwd"] == str(tmp_path)
    assert payload["ok"] is False
    assert payload["exit_code"] == 1
    assert payload["failed_stage"] == "lint"
    assert payload["counts"] == {"passed": 1, "failed": 1, "not_run": 1}
    assert [step["status"] for step in payload["steps"]] == ["passed", "failed", "not_run"]
    assert payload["steps"][2]["exit_code"] is None


def test_write_report_creates_parent_and_leaves_no_temp_files(tmp_path: Path) -> None:
    target = tmp_path / "out" / "report.json"

    write_report(target, {"b": 1, "a": [1, 2]})

    assert json.loads(target.read_text(encoding="utf-8")) == {"a": [1, 2], "b": 1}
    assert target.read_text(encoding="utf-8").endswith("\n")
    assert sorted(path.name for path in target.parent.iterdir()) == ["report.json"]
