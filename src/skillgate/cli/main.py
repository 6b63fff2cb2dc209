"""CLI entrypoint for skillgate."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from skillgate import __version__
from skillgate.cli.handlers import (
    handle_check,
    handle_init,
    handle_plan,
    handle_run,
    handle_validate_config,
)
from skillgate.constants.branding import CLI_DESCRIPTION
from skillgate.constants.config import VALID_FAIL_ON
from skillgate.constants.stages import CANONICAL_STAGES


def build_parser() -> argparse.ArgumentParser:
    """Build top-level CLI parser."""
    parser = argparse.ArgumentParser(
        prog="skillgate",
        description=CLI_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    check = subparsers.add_parser("check", help="Check guidance skills for internal consistency")
    _add_common_arguments(check)
    check.add_argument(
        "-s",
        "--skill",
        type=Path,
        action="append",
        default=None,
        help="SKILL.md to check (repeat flag for multiple files; default: discover under root)",
    )
    check.add_argument(
        "-P",
        "--project",
        type=Path,
        default=None,
        help="Project root used for policy-file checks (skipped if omitted)",
    )
    check.add_argument(
        "--fail-on",
        choices=sorted(VALID_FAIL_ON),
        default=None,
        help="Lowest issue severity that fails the check (default: config, then error)",
    )
    check.add_argument("-o", "--output", type=Path, default=None, help="Write a JSON report to this path")
    check.add_argument("--no-stdout", action="store_true", help="Silence stdout output")
    check.add_argument("--no-color", action="store_true", help="Disable colored output")

    run = subparsers.add_parser("run", help="Run the verification pipeline, stopping at the first failure")
    _add_common_arguments(run)
    _add_selection_arguments(run)
    run.add_argument("--dry-run", action="store_true", help="Report the steps without executing them")
    run.add_argument("--capture", action="store_true", help="Capture tool output and show the tail on failure")
    run.add_argument("-o", "--output", type=Path, default=None, help="Write a JSON report to this path")
    run.add_argument("--no-color", action="store_true", help="Disable colored output")

    plan = subparsers.add_parser("plan", help="Print the resolved pipeline without running it")
    _add_common_arguments(plan)
    _add_selection_arguments(plan)

    validate = subparsers.add_parser("validate-config", help="Validate configuration without running anything")
    _add_common_arguments(validate)

    init = subparsers.add_parser("init", help="Write a default skillgate.yaml")
    _add_common_arguments(init)
    init.add_argument("--skill", action="store_true", help="Also write a SKILL.md documenting the pipeline")
    init.add_argument("--dry-run", action="store_true", help="Print what would be written")
    init.add_argument("-y", "--yes", action="store_true", help="Write without prompting")

    return parser


def _add_common_arguments(subparser: argparse.ArgumentParser) -> None:
    subparser.add_argument("-r", "--root", type=Path, required=True, help="Project or workspace root path")
    subparser.add_argument("-c", "--config", type=Path, help="Explicit config file")
    subparser.add_argument("-v", "--verbose", action="store_true", help="Show debug logging")


def _add_selection_arguments(subparser: argparse.ArgumentParser) -> None:
    subparser.add_argument(
        "-s",
        "--skill",
        type=Path,
        default=None,
        help="Use commands documented in this SKILL.md for stages the config does not set",
    )
    subparser.add_argument(
        "--only",
        choices=CANONICAL_STAGES,
        action="append",
        default=None,
        help="Run only this stage (repeat flag for multiple stages)",
    )
    subparser.add_argument(
        "--skip",
        choices=CANONICAL_STAGES,
        action="append",
        default=None,
        help="Skip this stage (repeat flag for multiple stages)",
    )


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(message)s",
    )

    handlers = {
        "check": handle_check,
        "run": handle_run,
        "plan": handle_plan,
        "validate-config": handle_validate_config,
        "init": handle_init,
    }
    handler = handlers.get(args.command)
    if handler is None:
        parser.error(f"Unsupported command: {args.command}")
    return handler(args)


if __name__ == "__main__":
    raise SystemExit(main())
