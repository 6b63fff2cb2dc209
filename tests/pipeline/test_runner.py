"""Tests for the fail-fast pipeline runner."""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path
from typing import Any

from skillgate.config import SkillgateConfig
from skillgate.model import DocumentedCommand, PipelineStep
from skillgate.pipeline import build_pipeline, run_pipeline


def _python_step(stage: str, code: str) -> PipelineStep:
    return PipelineStep(stage=stage, command=(sys.executable, "-c", code))


def test_run_pipeline_runs_all_steps_in_order(tmp_path: Path) -> None:
    log = tmp_path / "order.log"
    code = "import sys; open(sys.argv[1], 'a').write(sys.argv[2] + '\\n')"
    steps = [
        PipelineStep(stage=stage, command=(sys.executable, "-c", code, str(log), stage))
        for stage in ("format", "lint", "test")
    ]

    run = run_pipeline(steps, cwd=tmp_path)

    assert run.ok is True
    assert run.exit_code == 0
    assert [step.status for step in run.steps] == ["passed", "passed", "passed"]
    assert log.read_text(encoding="utf-8").split() == ["format", "lint", "test"]


def test_run_pipeline_stops_at_first_failure(tmp_path: Path) -> None:
    marker = tmp_path / "touched"
    steps = [
        _python_step("format", "pass"),
        _python_step("lint", "raise SystemExit(3)"),
        PipelineStep(stage="test", command=(sys.executable, "-c", "import pathlib, sys; pathlib.Path(sys.argv[1]).touch()", str(marker))),
    ]

    run = run_pipeline(steps, cwd=tmp_path)

    assert [step.status for step in run.steps] == ["passed", "failed", "not_run"]
    assert run.failed_step is not None
    assert run.failed_step.stage == "lint"
    assert run.failed_step.exit_code == 3
    assert run.exit_code == 1
    assert not marker.exists()
    assert run.steps[2].exit_code is None


def test_run_pipeline_never_invokes_steps_after_failure(tmp_path: Path) -> None:
    calls: list[list[str]] = []

    def fake_runner(argv: list[str], **kwargs: Any) -> subprocess.CompletedProcess[str]:
        calls.append(argv)
        return subprocess.CompletedProcess(argv, 1 if argv[0] == "lint-tool" else 0)

    steps = [
        PipelineStep(stage="format", command=("fmt-tool",)),
        PipelineStep(stage="lint", command=("lint-tool",)),
        PipelineStep(stage="test", command=("test-tool",)),
        PipelineStep(stage="build", command=("build-tool",)),
    ]

    run = run_pipeline(steps, cwd=tmp_path, runner=fake_runner)

    assert calls == [["fmt-tool"], ["lint-tool"]]
    assert run.counts_by_status == {"passed": 1, "failed": 1, "not_run": 2}


def test_run_pipeline_reports_missing_tool_as_127(tmp_path: Path) -> None:
    steps = [
        PipelineStep(stage="format", command=("skillgate-definitely-missing-tool", "--check")),
        _python_step("lint", "pass"),
    ]

    run = run_pipeline(steps, cwd=tmp_path)

    failed = run.steps[0]
    assert failed.status == "failed"
    assert failed.exit_code == 127
    assert failed.error == "command not found: skillgate-definitely-missing-tool"
    assert run.steps[1].status == "not_run"


def test_run_pipeline_reports_os_error_as_126(tmp_path: Path) -> None:
    def fake_runner(argv: list[str], **kwargs: Any) -> subprocess.CompletedProcess[str]:
        raise PermissionError(13, "Permission denied")

    run = run_pipeline([PipelineStep(stage="test", command=("./tool",))], cwd=tmp_path, runner=fake_runner)

    assert run.steps[0].exit_code == 126
    assert run.steps[0].error is not None
    assert "cannot execute ./tool" in run.steps[0].error


def test_run_pipeline_dry_run_spawns_nothing(tmp_path: Path) -> None:
    def fake_runner(argv: list[str], **kwargs: Any) -> subprocess.CompletedProcess[str]:
        raise AssertionError("dry run must not execute")

    steps = [PipelineStep(stage="format", command=("a",)), PipelineStep(stage="lint", command=("b",))]

    run = run_pipeline(steps, cwd=tmp_path, dry_run=True, runner=fake_runner)

    assert run.dry_run is True
    assert run.ok is True
    assert [step.status for step in run.steps] == ["not_run", "not_run"]


def test_run_pipeline_captures_output_tail(tmp_path: Path) -> None:
    code = "import sys\nfor i in range(60): print(f'line {i}')\nsys.stdout.flush()\nsys.stderr.write('boom\\n')\nsys.exit(2)"

    run = run_pipeline([_python_step("test", code)], cwd=tmp_path, capture=True)

    output = run.steps[0].output
    assert output is not None
    lines = output.splitlines()
    assert len(lines) == 40
    assert "boom" in lines
    assert "line 0" not in lines


def test_run_pipeline_without_capture_records_no_output(tmp_path: Path) -> None:
    run = run_pipeline([_python_step("test", "print('hello')")], cwd=tmp_path)

    assert run.steps[0].output is None


def test_run_pipeline_passes_env_and_cwd(tmp_path: Path) -> None:
    code = "import os, pathlib; pathlib.Path('env.txt').write_text(os.environ['SKILLGATE_PROBE'])"

    run = run_pipeline([_python_step("test", code)], cwd=tmp_path, env={"SKILLGATE_PROBE": "on"})

    assert run.ok is True
    assert (tmp_path / "env.txt").read_text() == "on"


def test_run_pipeline_layers_step_env_over_config_env(tmp_path: Path) -> None:
    code = (
        "import os, pathlib; "
        "pathlib.Path('env.txt').write_text(os.environ['RUSTDOCFLAGS'] + '|' + os.environ['SHARED'])"
    )
    step = PipelineStep(
        stage="doc",
        command=(sys.executable, "-c", code),
        env={"RUSTDOCFLAGS": "-D warnings", "SHARED": "step"},
    )

    run = run_pipeline([step], cwd=tmp_path, env={"SHARED": "config"})

    assert run.ok is True
    assert (tmp_path / "env.txt").read_text() == "-D warnings|step"


def test_run_pipeline_runs_documented_env_prefixed_command(tmp_path: Path) -> None:
    calls: list[tuple[list[str], dict[str, str] | None]] = []

    def fake_runner(argv: list[str], **kwargs: Any) -> subprocess.CompletedProcess[str]:
        calls.append((argv, kwargs["env"]))
        return subprocess.CompletedProcess(argv, 0)

    documented = [
        DocumentedCommand(
            command='RUSTDOCFLAGS="-D warnings" cargo doc --no-deps',
            stage="doc",
            path="SKILL.md",
            line=1,
            snippet="",
        )
    ]
    steps = build_pipeline(SkillgateConfig(), documented=documented, only=["doc"])

    run = run_pipeline(steps, cwd=tmp_path, runner=fake_runner)

    assert run.steps[0].status == "passed"
    argv, env = calls[0]
    assert argv == ["cargo", "doc", "--no-deps"]
    assert env is not None
    assert env["RUSTDOCFLAGS"] == "-D warnings"


def test_run_pipeline_inherits_environment_without_overrides(tmp_path: Path) -> None:
    seen: list[object] = []

    def fake_runner(argv: list[str], **kwargs: Any) -> subprocess.CompletedProcess[str]:
        seen.append(kwargs["env"])
        return subprocess.CompletedProcess(argv, 0)

    run_pipeline([PipelineStep(stage="test", command=("cargo", "test"))], cwd=tmp_path, runner=fake_runner)

    assert seen == [None]
