"""CLI subcommand handlers."""

from __future__ import annotations

import argparse
import logging
import sys
import tempfile
from contextlib import suppress
from pathlib import Path

from skillgate.cli.init_flow import build_unified_diff, prompt_yes_no, render_init_yaml
from skillgate.config import load_config, validate_config_file
from skillgate.constants.config import CONFIG_FILENAME, INIT_CONFIG_TEMP_PREFIX, INIT_CONFIG_TEMP_SUFFIX
from skillgate.constants.discovery import SKILL_MARKDOWN_FILENAME
from skillgate.exceptions import ConfigError, PipelineError, SkillParseError
from skillgate.exceptions.validation import ValidationError, format_errors
from skillgate.guidance import check_workspace, render_skill_markdown
from skillgate.io import write_text_atomic
from skillgate.pipeline import build_pipeline
from skillgate.reporting import (
    CheckReporter,
    RunReporter,
    build_check_report,
    build_run_report,
    render_plan,
    write_report,
)
from skillgate.validation import preflight_validate
from skillgate.verify import resolve_steps, verify_workspace

logger = logging.getLogger(__name__)

DEFAULT_SKILL_NAME = "verification-pipeline"
DEFAULT_SKILL_DESCRIPTION = (
    "Run the format, lint, test, build, doc, license and audit checks in order after every code change."
)


def handle_check(args: argparse.Namespace) -> int:
    """Lint guidance skills and report consistency issues."""
    errors = preflight_validate(args.root, args.config)
    if errors:
        print(format_errors(errors), file=sys.stderr)
        return 2

    try:
        result = check_workspace(
            args.root,
            config_path=args.config,
            skill_paths=tuple(args.skill) if args.skill else None,
            project_root=args.project,
        )
        fail_on = args.fail_on or load_config(args.root, args.config).fail_on
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    if args.output is not None:
        write_report(args.output, build_check_report(result, fail_on=fail_on))
        logger.info("Wrote check report to %s", args.output)

    if not args.no_stdout:
        print(CheckReporter(result, color=not args.no_color, fail_on=fail_on).render())
    return result.exit_code(fail_on)


def handle_run(args: argparse.Namespace) -> int:
    """Run the verification pipeline fail-fast."""
    errors = preflight_validate(args.root, args.config)
    if errors:
        print(format_errors(errors), file=sys.stderr)
        return 2

    try:
        run = verify_workspace(
            args.root,
            config_path=args.config,
            skill_path=args.skill,
            only=args.only,
            skip=args.skip,
            capture=args.capture,
            dry_run=args.dry_run,
        )
    except (ConfigError, PipelineError, SkillParseError) as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    if args.output is not None:
        write_report(args.output, build_run_report(run, cwd=args.root.resolve()))
        logger.info("Wrote run report to %s", args.output)

    print(RunReporter(run, color=not args.no_color).render())
    return run.exit_code


def handle_plan(args: argparse.Namespace) -> int:
    """Print the resolved pipeline without running anything."""
    try:
        _, steps = resolve_steps(
            args.root,
            config_path=args.config,
            skill_path=args.skill,
            only=args.only,
            skip=args.skip,
        )
    except (ConfigError, PipelineError, SkillParseError) as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    print(render_plan(steps))
    return 0


def handle_validate_config(args: argparse.Namespace) -> int:
    """Run config validation and report results."""
    errors = preflight_validate(args.root, args.config)
    if errors:
        print(format_errors(errors), file=sys.stderr)
        return 2

    print("Configuration is valid.")
    return 0


def handle_init(args: argparse.Namespace) -> int:
    """Write a default ``skillgate.yaml`` and, optionally, a SKILL.md template."""
    root = args.root.resolve()
    if not root.is_dir():
        print(f"Configuration error: root directory does not exist: {root}", file=sys.stderr)
        return 2

    target_path = args.config.resolve() if args.config is not None else (root / CONFIG_FILENAME)
    rendered = render_init_yaml()
    validation_errors = _validate_generated_config(root=root, rendered=rendered)
    if validation_errors:
        print(format_errors(validation_errors), file=sys.stderr)
        return 2

    outputs: list[tuple[Path, str]] = [(target_path, rendered)]
    if args.skill:
        try:
            config = load_config(root, target_path if target_path.exists() else None)
            steps = build_pipeline(config)
        except (ConfigError, PipelineError) as exc:
            print(f"Configuration error: {exc}", file=sys.stderr)
            return 2
        outputs.append(
            (root / SKILL_MARKDOWN_FILENAME, render_skill_markdown(DEFAULT_SKILL_NAME, DEFAULT_SKILL_DESCRIPTION, steps))
        )

    try:
        for path, content in outputs:
            _write_init_file(path, content, args=args)
    except (EOFError, KeyboardInterrupt):
        print("Init cancelled.", file=sys.stderr)
        return 130
    return 0


def _write_init_file(path: Path, content: str, *, args: argparse.Namespace) -> None:
    existing_content = path.read_text(encoding="utf-8") if path.exists() else None
    if existing_content is not None:
        if existing_content == content:
            print(f"{path} is already up to date.")
            return
        print(build_unified_diff(existing_content, content, path))

    if args.dry_run:
        print(f"# Dry run: no file written. Target: {path}")
        print(content, end="")
        return

    if not args.yes:
        question = "Overwrite existing file?" if existing_content is not None else f"Write {path}?"
        if not prompt_yes_no(question, default=existing_content is None, read=input, write=print):
            print(f"Skipped writing {path}.")
            return

    write_text_atomic(
        path=path,
        content=content,
        temp_prefix=INIT_CONFIG_TEMP_PREFIX,
        temp_suffix=path.suffix or INIT_CONFIG_TEMP_SUFFIX,
    )
    print(f"Wrote {path}")


def _validate_generated_config(*, root: Path, rendered: str) -> list[ValidationError]:
    """Validate generated YAML before writing it to disk."""
    temp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=root,
            prefix=INIT_CONFIG_TEMP_PREFIX,
            suffix=INIT_CONFIG_TEMP_SUFFIX,
            delete=False,
        ) as handle:
            handle.write(rendered)
            temp_path = Path(handle.name)
        return validate_config_file(root, temp_path, config_explicit=True)
    finally:
        if temp_path is not None:
            with suppress(FileNotFoundError):
                temp_path.unlink()
