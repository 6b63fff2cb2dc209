"""Helpers for the ``skillgate init`` bootstrap flow."""

from __future__ import annotations

import difflib
from collections.abc import Callable
from pathlib import Path

import yaml

from skillgate.constants.config import DEFAULT_FAIL_ON, DEFAULT_LICENSE_POLICY_FILE
from skillgate.constants.stages import CANONICAL_STAGES, DEFAULT_STAGE_COMMANDS

_INIT_HEADER = "# skillgate configuration: stages run in order and stop at the first failure.\n"


def render_init_yaml(disabled_stages: tuple[str, ...] = ()) -> str:
    """Render a default ``skillgate.yaml`` listing every stage command."""
    payload = {
        "steps": {stage: DEFAULT_STAGE_COMMANDS[stage] for stage in CANONICAL_STAGES},
        "disabled_stages": list(disabled_stages),
        "env": {},
        "license_policy_file": DEFAULT_LICENSE_POLICY_FILE,
        "checks": {"disabled": []},
        "fail_on": DEFAULT_FAIL_ON,
    }
    return _INIT_HEADER + yaml.safe_dump(payload, sort_keys=False, default_flow_style=False)


def build_unified_diff(existing: str, rendered: str, target: Path) -> str:
    """Return a unified diff between an existing file and its replacement."""
    diff = difflib.unified_diff(
        existing.splitlines(keepends=True),
        rendered.splitlines(keepends=True),
        fromfile=f"{target} (current)",
        tofile=f"{target} (new)",
    )
    return "".join(diff)


def prompt_yes_no(
    question: str,
    *,
    default: bool,
    read: Callable[[str], str],
    write: Callable[[str], None],
) -> bool:
    """Ask a yes/no question until the answer is understood."""
    suffix = "[Y/n]" if default else "[y/N]"
    while True:
        answer = read(f"{question} {suffix} ").strip().lower()
        if not answer:
            return default
        if answer in {"y", "yes"}:
            return True
        if answer in {"n", "no"}:
            return False
        write("Please answer 'y' or 'n'.")
