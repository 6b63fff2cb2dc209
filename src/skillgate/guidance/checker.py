"""Orchestration of guidance checks for single skills and whole workspaces."""

from __future__ import annotations

import logging
import time
from pathlib import Path

from skillgate.config import SkillgateConfig, load_config
from skillgate.constants.checks import SKILL_PARSE_RULE_ID
from skillgate.exceptions import ConfigError, SkillParseError
from skillgate.guidance.base import GuidanceContext
from skillgate.guidance.discovery import derive_skill_name, discover_skill_files, find_readme
from skillgate.guidance.rules import build_checks
from skillgate.model import CheckResult, GuidanceIssue, ParsedSkillDocument, SkillCheckResult
from skillgate.parsers import documented_stage_order, extract_commands, parse_skill_markdown_file
from skillgate.utils import normalize_skill_name

logger = logging.getLogger(__name__)


def check_skill(
    skill_path: Path,
    *,
    config: SkillgateConfig,
    readme_path: Path | None = None,
    project_root: Path | None = None,
) -> SkillCheckResult:
    """Run every enabled check against one SKILL.md.

    README.md next to the skill is used when *readme_path* is not given.

    Raises:
        SkillParseError: if the SKILL.md or README.md cannot be parsed.
    """
    document = parse_skill_markdown_file(skill_path)
    readme_path = readme_path if readme_path is not None else find_readme(skill_path)
    readme: ParsedSkillDocument | None = None
    if readme_path is not None:
        readme = parse_skill_markdown_file(readme_path)

    commands = extract_commands(document)
    context = GuidanceContext(
        document=document,
        commands=commands,
        config=config,
        readme=readme,
        readme_commands=extract_commands(readme) if readme is not None else (),
        project_root=project_root.resolve() if project_root is not None else None,
    )

    issues: list[GuidanceIssue] = []
    for check in build_checks(config):
        issues.extend(check.run(context))

    return SkillCheckResult(
        skill_name=derive_skill_name(document),
        path=skill_path,
        issues=tuple(sorted(issues, key=_issue_sort_key)),
        documented_stages=documented_stage_order(commands),
        readme_path=readme_path,
    )


def check_workspace(
    root: Path,
    *,
    config_path: Path | None = None,
    skill_paths: tuple[Path, ...] | None = None,
    project_root: Path | None = None,
) -> CheckResult:
    """Discover and check every guidance skill under *root*.

    Unparseable files become ``SKILL_PARSE`` errors instead of aborting the run.
    """
    started_at = time.perf_counter()
    root = root.resolve()
    if not root.is_dir():
        raise ConfigError(f"Root does not exist or is not a directory: {root}")

    config = load_config(root, config_path)
    if skill_paths:
        files = [path.resolve() for path in skill_paths]
    else:
        files = discover_skill_files(root, config.skill_globs, config.max_file_mb)
    logger.info("Checking %d skill file(s) under %s", len(files), root)

    results: list[SkillCheckResult] = []
    for path in files:
        try:
            results.append(check_skill(path, config=config, project_root=project_root))
        except SkillParseError as exc:
            logger.warning("Skipping unparseable skill %s: %s", path, exc)
            results.append(_parse_failure(path, exc))

    return CheckResult(
        root=root,
        skills=tuple(results),
        duration_seconds=time.perf_counter() - started_at,
        disabled_checks=config.disabled_checks,
    )


def _parse_failure(path: Path, exc: SkillParseError) -> SkillCheckResult:
    return SkillCheckResult(
        skill_name=normalize_skill_name(path.parent.name),
        path=path,
        issues=(
            GuidanceIssue(
                rule_id=SKILL_PARSE_RULE_ID,
                severity="error",
                title="Unparseable guidance",
                message=str(exc),
                path=str(path),
            ),
        ),
    )


def _issue_sort_key(issue: GuidanceIssue) -> tuple[str, int, str]:
    return (issue.path, issue.line or 0, issue.rule_id)
