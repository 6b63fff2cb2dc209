"""Tests for terminal reporters."""

from __future__ import annotations

from pathlib import Path

from skillgate.config import SkillgateConfig
from skillgate.constants.reporting import ANSI_RED
from skillgate.guidance import check_skill
from skillgate.model import CheckResult, PipelineRun, PipelineStep, StepResult
from skillgate.reporting import CheckReporter, RunReporter, render_plan


def _drifted_result(workspace_root: Path) -> CheckResult:
    skill = check_skill(workspace_root / "skills" / "drifted" / "SKILL.md", config=SkillgateConfig())
    return CheckResult(root=workspace_root, skills=(skill,), disabled_checks=("POLICY_FILE_MISSING",))


def test_check_reporter_lists_issues_without_color(workspace_root: Path) -> None:
    output = CheckReporter(_drifted_result(workspace_root), color=False).render()

    assert "Guidance check" in output
    assert "Skills      1 checked / 0 clean" in output
    assert "Issues      3 error · 5 warning" in output
    assert "Checks off  POLICY_FILE_MISSING" in output
    assert "Verdict     FAIL (fail on error)" in output
    assert "pipeline: format -> test -> lint -> build" in output
    assert "STAGE_ORDER" in output
    assert "SKILL.md:11" in output
    assert "hint: append `-- -D warnings`" in output
    assert "\033[" not in output


def test_check_reporter_colors_severities(workspace_root: Path) -> None:
    output = CheckReporter(_drifted_result(workspace_root), color=True).render()

    assert f"{ANSI_RED}error" in output


def test_check_reporter_passes_clean_workspace(workspace_root: Path) -> None:
    skill = check_skill(workspace_root / "skills" / "rust-style" / "SKILL.md", config=SkillgateConfig())
    result = CheckResult(root=workspace_root, skills=(skill,))

    output = CheckReporter(result, color=False, fail_on="warning").render()

    assert "1 checked / 1 clean" in output
    assert "Verdict     PASS (fail on warning)" in output
    assert "Checks off" not in output


def test_run_reporter_shows_failure_and_output_tail() -> None:
    run = PipelineRun(
        steps=(
            StepResult(stage="format", command=("cargo", "fmt"), status="passed", exit_code=0, duration_seconds=0.5),
            StepResult(
                stage="lint",
                command=("cargo", "clippy"),
                status="failed",
                exit_code=101,
                duration_seconds=1.25,
                output="error: unused variable\nerror: aborting",
            ),
            StepResult(stage="test", command=("cargo", "test"), status="not_run"),
        ),
        duration_seconds=1.75,
    )

    output = RunReporter(run, color=False).render()

    assert "1. format   passed" in output
    assert "2. lint     failed" in output
    assert "3. test     not_run" in output
    assert "Verdict     FAIL at lint (exit code 101)" in output
    assert "Output of lint (tail):" in output
    assert "    error: aborting" in output


def test_run_reporter_reports_missing_tool_error() -> None:
    run = PipelineRun(
        steps=(
            StepResult(
                stage="audit",
                command=("cargo-audit",),
                status="failed",
                exit_code=127,
                error="command not found: cargo-audit",
            ),
        ),
    )

    output = RunReporter(run, color=False).render()

    assert "Error       command not found: cargo-audit" in output


def test_run_reporter_pass_and_dry_run() -> None:
    passed = PipelineRun(steps=(StepResult(stage="test", command=("cargo", "test"), status="passed", exit_code=0),))
    dry = PipelineRun(steps=(StepResult(stage="test", command=("cargo", "test"), status="not_run"),), dry_run=True)

    assert "Verdict     PASS (1 step(s))" in RunReporter(passed, color=False).render()
    assert "DRY RUN" in RunReporter(dry, color=False).render()


def test_render_plan_shows_source_and_quoted_command() -> None:
    steps = [
        PipelineStep(stage="format", command=("cargo", "fmt", "--check"), source="skill"),
        PipelineStep(stage="test", command=("cargo", "test", "--", "name with space"), source="config"),
    ]

    assert render_plan(steps).splitlines() == [
        "  1. format   [skill] cargo fmt --check",
        "  2. test     [config] cargo test -- 'name with space'",
    ]
