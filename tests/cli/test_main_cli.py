"""End-to-end tests for the skillgate command line."""

from __future__ import annotations

import json
import shlex
import sys
from pathlib import Path

import pytest
import yaml

from skillgate.cli.init_flow import build_unified_diff, prompt_yes_no, render_init_yaml
from skillgate.cli.main import build_parser, main


def _python(code: str) -> str:
    return shlex.join([sys.executable, "-c", code])


def _write_config(root: Path, payload: dict) -> None:
    (root / "skillgate.yaml").write_text(yaml.safe_dump(payload), encoding="utf-8")


def test_parser_requires_subcommand() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_parser_rejects_unknown_stage() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args(["run", "-r", ".", "--only", "deploy"])


def test_check_workspace_fails_on_drift(workspace_root: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["check", "-r", str(workspace_root), "--no-color"])

    out = capsys.readouterr().out
    assert code == 1
    assert "2 checked / 1 clean" in out
    assert "README_DRIFT" in out


def test_check_clean_skill_passes(workspace_root: Path, capsys: pytest.CaptureFixture[str]) -> None:
    skill = workspace_root / "skills" / "rust-style" / "SKILL.md"

    code = main(
        ["check", "-r", str(workspace_root), "-s", str(skill), "-P", str(workspace_root), "--fail-on", "warning"]
    )

    assert code == 0
    assert "Verdict     PASS" in capsys.readouterr().out


def test_check_fail_on_from_config(workspace_copy: Path) -> None:
    skill = workspace_copy / "skills" / "drifted" / "SKILL.md"
    _write_config(
        workspace_copy,
        {"fail_on": "warning", "checks": {"disabled": ["STAGE_ORDER", "LINT_DENY_WARNINGS", "README_DRIFT"]}},
    )

    assert main(["check", "-r", str(workspace_copy), "-s", str(skill), "--no-stdout"]) == 1
    assert main(["check", "-r", str(workspace_copy), "-s", str(skill), "--no-stdout", "--fail-on", "error"]) == 0


def test_check_writes_json_report(workspace_root: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    report = tmp_path / "reports" / "check.json"

    code = main(["check", "-r", str(workspace_root), "-o", str(report), "--no-stdout"])

    assert code == 1
    assert capsys.readouterr().out == ""
    payload = json.loads(report.read_text(encoding="utf-8"))
    assert payload["kind"] == "check"
    assert payload["counts"] == {"error": 3, "warning": 5}


def test_check_invalid_config_exits_2(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (tmp_path / "skillgate.yaml").write_text("fail_on: sometimes\n", encoding="utf-8")

    assert main(["check", "-r", str(tmp_path)]) == 2
    assert "[CFG006]" in capsys.readouterr().err


def test_check_missing_root_exits_2(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["check", "-r", str(tmp_path / "missing")]) == 2
    assert "[CFG010]" in capsys.readouterr().err


def test_validate_config_reports_all_errors(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (tmp_path / "skillgate.yaml").write_text("max_file_mb: 0\nstpes: {}\n", encoding="utf-8")

    code = main(["validate-config", "-r", str(tmp_path)])

    err = capsys.readouterr().err
    assert code == 2
    assert "[CFG004]" in err
    assert "did you mean `steps`?" in err
    assert "[CFG007]" in err


def test_validate_config_ok(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["validate-config", "-r", str(tmp_path)]) == 0
    assert "Configuration is valid." in capsys.readouterr().out


def test_plan_prints_resolved_steps(workspace_root: Path, capsys: pytest.CaptureFixture[str]) -> None:
    skill = workspace_root / "skills" / "drifted" / "SKILL.md"

    code = main(["plan", "-r", str(workspace_root), "-s", str(skill), "--skip", "audit", "--skip", "license"])

    lines = capsys.readouterr().out.splitlines()
    assert code == 0
    assert lines == [
        "  1. format   [skill] cargo fmt --check",
        "  2. lint     [skill] cargo clippy",
        "  3. test     [skill] cargo test",
        "  4. build    [skill] cargo build",
        "  5. doc      [default] cargo doc --no-deps",
    ]


def test_plan_with_everything_disabled_exits_2(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _write_config(tmp_path, {"disabled_stages": ["test"]})

    assert main(["plan", "-r", str(tmp_path), "--only", "test"]) == 2
    assert "No pipeline stages selected" in capsys.readouterr().err


def test_run_passes_and_writes_report(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _write_config(tmp_path, {"steps": {"format": _python("pass"), "test": _python("print('ok')")}})
    report = tmp_path / "run.json"

    code = main(
        ["run", "-r", str(tmp_path), "--only", "format", "--only", "test", "--capture", "-o", str(report), "--no-color"]
    )

    assert code == 0
    assert "Verdict     PASS (2 step(s))" in capsys.readouterr().out
    payload = json.loads(report.read_text(encoding="utf-8"))
    assert payload["ok"] is True
    assert [step["output"] for step in payload["steps"]] == ["", "ok"]


def test_run_stops_at_first_failure(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _write_config(
        tmp_path,
        {
            "steps": {
                "format": _python("print('diff in src/lib.rs'); raise SystemExit(1)"),
                "lint": _python("import pathlib; pathlib.Path('linted').touch()"),
            }
        },
    )

    code = main(["run", "-r", str(tmp_path), "--only", "format", "--only", "lint", "--capture", "--no-color"])

    out = capsys.readouterr().out
    assert code == 1
    assert "Verdict     FAIL at format (exit code 1)" in out
    assert "diff in src/lib.rs" in out
    assert "not_run" in out
    assert not (tmp_path / "linted").exists()


def test_run_dry_run_executes_nothing(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _write_config(tmp_path, {"steps": {"test": _python("import pathlib; pathlib.Path('ran').touch()")}})

    code = main(["run", "-r", str(tmp_path), "--dry-run", "--no-color"])

    assert code == 0
    assert "DRY RUN" in capsys.readouterr().out
    assert not (tmp_path / "ran").exists()


def test_init_writes_valid_config(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["init", "-r", str(tmp_path), "--yes"]) == 0
    assert (tmp_path / "skillgate.yaml").is_file()
    assert main(["validate-config", "-r", str(tmp_path)]) == 0

    assert main(["init", "-r", str(tmp_path), "--yes"]) == 0
    assert "is already up to date" in capsys.readouterr().out


def test_init_dry_run_writes_nothing(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["init", "-r", str(tmp_path), "--dry-run"]) == 0

    out = capsys.readouterr().out
    assert "# Dry run: no file written." in out
    assert "cargo clippy --all-targets --all-features -- -D warnings" in out
    assert not (tmp_path / "skillgate.yaml").exists()


def test_init_shows_diff_and_respects_decline(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    config = tmp_path / "skillgate.yaml"
    config.write_text("fail_on: warning\n", encoding="utf-8")
    monkeypatch.setattr("builtins.input", lambda _prompt: "n")

    assert main(["init", "-r", str(tmp_path)]) == 0

    out = capsys.readouterr().out
    assert "(current)" in out
    assert "Skipped writing" in out
    assert config.read_text(encoding="utf-8") == "fail_on: warning\n"


def test_init_cancelled_exits_130(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def _interrupt(_prompt: str) -> str:
        raise EOFError

    monkeypatch.setattr("builtins.input", _interrupt)

    assert main(["init", "-r", str(tmp_path)]) == 130
    assert not (tmp_path / "skillgate.yaml").exists()


def test_init_skill_template_passes_check(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (tmp_path / "deny.toml").write_text("[licenses]\n", encoding="utf-8")

    assert main(["init", "-r", str(tmp_path), "--skill", "--yes"]) == 0
    assert (tmp_path / "SKILL.md").is_file()

    code = main(["check", "-r", str(tmp_path), "-P", str(tmp_path), "--fail-on", "warning", "--no-color"])
    assert code == 0


def test_init_missing_root_exits_2(tmp_path: Path) -> None:
    assert main(["init", "-r", str(tmp_path / "missing"), "--yes"]) == 2


def test_render_init_yaml_lists_every_stage() -> None:
    payload = yaml.safe_load(render_init_yaml(("audit",)))

    assert list(payload["steps"]) == ["format", "lint", "test", "build", "doc", "license", "audit"]
    assert payload["disabled_stages"] == ["audit"]
    assert payload["fail_on"] == "error"


def test_build_unified_diff(tmp_path: Path) -> None:
    diff = build_unified_diff("a: 1\n", "a: 2\n", tmp_path / "skillgate.yaml")

    assert "-a: 1" in diff
    assert "+a: 2" in diff


def test_prompt_yes_no_reprompts_until_understood() -> None:
    answers = iter(["maybe", "", "YES"])
    written: list[str] = []

    assert prompt_yes_no("Write?", default=False, read=lambda _q: next(answers), write=written.append) is False
    assert written == ["Please answer 'y' or 'n'."]
