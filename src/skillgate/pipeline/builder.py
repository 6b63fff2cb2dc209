"""Resolution of the ordered verification pipeline."""

from __future__ import annotations

import logging
import shlex
from collections.abc import Iterable

from skillgate.config import SkillgateConfig
from skillgate.constants.stages import (
    CANONICAL_STAGES,
    DEFAULT_STAGE_COMMANDS,
    ENV_ASSIGNMENT_PATTERN,
    VALID_STAGES,
)
from skillgate.exceptions import PipelineError
from skillgate.model import DocumentedCommand, PipelineStep
from skillgate.types import StepSource

logger = logging.getLogger(__name__)


def build_pipeline(
    config: SkillgateConfig,
    *,
    documented: Iterable[DocumentedCommand] | None = None,
    only: Iterable[str] | None = None,
    skip: Iterable[str] | None = None,
) -> tuple[PipelineStep, ...]:
    """Resolve pipeline steps in canonical order.

    Per stage, an explicit config command wins over a command documented in
    the skill, which wins over the built-in default. The first documented
    command for a stage is used when a skill documents it more than once.
    """
    only_set = _checked_stages(only, "--only")
    skip_set = _checked_stages(skip, "--skip")

    documented_by_stage: dict[str, str] = {}
    for command in documented or ():
        if command.stage is not None and command.stage not in documented_by_stage:
            documented_by_stage[command.stage] = command.command

    steps: list[PipelineStep] = []
    for stage in CANONICAL_STAGES:
        if stage in config.disabled_stages:
            logger.debug("Stage %s disabled by config", stage)
            continue
        if stage in skip_set:
            logger.debug("Stage %s skipped", stage)
            continue
        if only_set and stage not in only_set:
            continue

        source: StepSource
        if stage in config.steps:
            command_line, source = config.steps[stage], "config"
        elif stage in documented_by_stage:
            command_line, source = documented_by_stage[stage], "skill"
        else:
            command_line, source = DEFAULT_STAGE_COMMANDS[stage], "default"
        env, argv = split_env_prefix(split_command(command_line, stage), stage)
        steps.append(PipelineStep(stage=stage, command=argv, source=source, env=env))

    if not steps:
        raise PipelineError("No pipeline stages selected")
    return tuple(steps)


def split_command(command_line: str, stage: str) -> tuple[str, ...]:
    """Shell-split a command line into argv without invoking a shell."""
    try:
        argv = tuple(shlex.split(command_line, comments=True))
    except ValueError as exc:
        raise PipelineError(f"Cannot parse command for stage {stage!r}: {exc}") from exc
    if not argv:
        raise PipelineError(f"Empty command for stage {stage!r}")
    return argv


def _checked_stages(stages: Iterable[str] | None, label: str) -> frozenset[str]:
    selected = frozenset(stages or ())
    unknown = sorted(selected - VALID_STAGES)
    if unknown:
        raise PipelineError(
            f"{label}: unknown stage(s) {', '.join(unknown)}; expected one of {', '.join(CANONICAL_STAGES)}"
        )
    return selected


def split_env_prefix(argv: tuple[str, ...], stage: str) -> tuple[dict[str, str], tuple[str, ...]]:
    """Separate leading ``NAME=value`` words from the program and its arguments.

    ``RUSTDOCFLAGS="-D warnings" cargo doc`` runs ``cargo doc`` with the
    variable set, as a shell would.
    """
    env: dict[str, str] = {}
    index = 0
    while index < len(argv) and ENV_ASSIGNMENT_PATTERN.match(argv[index]):
        name, _, value = argv[index].partition("=")
        env[name] = value
        index += 1
    if index == len(argv):
        raise PipelineError(f"Command for stage {stage!r} only sets environment variables")
    return env, argv[index:]
