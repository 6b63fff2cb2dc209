"""End-to-end verification entry points: resolve the pipeline, then run it."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from skillgate.config import SkillgateConfig, load_config
from skillgate.exceptions import ConfigError
from skillgate.model import PipelineRun, PipelineStep
from skillgate.parsers import extract_commands, parse_skill_markdown_file
from skillgate.pipeline import build_pipeline, run_pipeline

logger = logging.getLogger(__name__)


def resolve_steps(
    root: Path,
    *,
    config_path: Path | None = None,
    skill_path: Path | None = None,
    only: Iterable[str] | None = None,
    skip: Iterable[str] | None = None,
) -> tuple[SkillgateConfig, tuple[PipelineStep, ...]]:
    """Load config and resolve the ordered steps for *root*.

    When *skill_path* is given, commands documented in that SKILL.md fill in
    stages the config does not override.
    """
    root = root.resolve()
    if not root.is_dir():
        raise ConfigError(f"Root does not exist or is not a directory: {root}")

    config = load_config(root, config_path)
    documented = None
    if skill_path is not None:
        documented = extract_commands(parse_skill_markdown_file(skill_path))
        logger.info("Using commands documented in %s", skill_path)
    return config, build_pipeline(config, documented=documented, only=only, skip=skip)


def verify_workspace(
    root: Path,
    *,
    config_path: Path | None = None,
    skill_path: Path | None = None,
    only: Iterable[str] | None = None,
    skip: Iterable[str] | None = None,
    capture: bool = False,
    dry_run: bool = False,
) -> PipelineRun:
    """Resolve and run the verification pipeline in *root*, stopping at the first failure."""
    config, steps = resolve_steps(
        root,
        config_path=config_path,
        skill_path=skill_path,
        only=only,
        skip=skip,
    )
    return run_pipeline(
        steps,
        cwd=root.resolve(),
        env=config.env or None,
        capture=capture,
        dry_run=dry_run,
    )
