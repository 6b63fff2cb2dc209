"""Rendering of a guidance skill that documents a verification pipeline."""

from __future__ import annotations

from collections.abc import Sequence

import yaml

from skillgate.constants.stages import STAGE_TITLES
from skillgate.model import PipelineStep


def render_skill_markdown(name: str, description: str, steps: Sequence[PipelineStep]) -> str:
    """Render a SKILL.md documenting *steps* in order."""
    frontmatter = yaml.safe_dump(
        {"name": name, "description": description},
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
    )
    lines = [
        "---",
        frontmatter.rstrip("\n"),
        "---",
        "",
        f"# {name}",
        "",
        "## Verification",
        "",
        "After every change, run these checks in order. Stop at the first failure",
        "and fix it before running the next check.",
        "",
    ]
    for position, step in enumerate(steps, start=1):
        lines.append(f"{position}. {STAGE_TITLES.get(step.stage, step.stage)}")
    lines.extend(["", "```bash"])
    lines.extend(step.command_line for step in steps)
    lines.extend(["```", ""])
    return "\n".join(lines)
