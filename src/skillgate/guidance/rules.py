"""Guidance consistency checks for SKILL.md and README.md."""

from __future__ import annotations

import logging

from skillgate.config import SkillgateConfig
from skillgate.constants.parsing import SKILL_NAME_MAX_LENGTH, SKILL_NAME_PATTERN
from skillgate.constants.stages import CANONICAL_STAGES, STAGE_BUILD, STAGE_LICENSE, STAGE_LINT
from skillgate.guidance.base import GuidanceCheck, GuidanceContext
from skillgate.model import GuidanceIssue
from skillgate.parsers import documented_pipeline, documented_stage_order
from skillgate.pipeline.stages import denies_warnings, is_optimized_build, stage_index

logger = logging.getLogger(__name__)


class FrontmatterFieldsCheck(GuidanceCheck):
    """Require ``name`` and ``description`` in the skill frontmatter."""

    rule_id = "FRONTMATTER_FIELDS"
    severity = "error"
    title = "Frontmatter incomplete"

    def run(self, context: GuidanceContext) -> list[GuidanceIssue]:
        frontmatter = context.document.frontmatter
        if frontmatter is None:
            return [
                self.issue(
                    "SKILL.md has no YAML frontmatter.",
                    path=context.path,
                    line=1,
                    hint="start the file with a `---` block declaring `name` and `description`",
                )
            ]

        issues: list[GuidanceIssue] = []
        for key in ("name", "description"):
            value = frontmatter.get(key)
            if not isinstance(value, str) or not value.strip():
                issues.append(
                    self.issue(
                        f"Frontmatter field `{key}` is missing or empty.",
                        path=context.path,
                        line=context.document.frontmatter_line(key) or 1,
                    )
                )
        return issues


class FrontmatterNameFormatCheck(GuidanceCheck):
    """Skill names are short lowercase hyphenated identifiers."""

    rule_id = "FRONTMATTER_NAME_FORMAT"
    severity = "warning"
    title = "Skill name format"

    def run(self, context: GuidanceContext) -> list[GuidanceIssue]:
        frontmatter = context.document.frontmatter or {}
        name = frontmatter.get("name")
        if not isinstance(name, str) or not name.strip():
            return []
        name = name.strip()
        if SKILL_NAME_PATTERN.match(name) and len(name) <= SKILL_NAME_MAX_LENGTH:
            return []
        return [
            self.issue(
                f"Skill name {name!r} should be lowercase letters, digits and hyphens "
                f"(at most {SKILL_NAME_MAX_LENGTH} characters).",
                path=context.path,
                line=context.document.frontmatter_line("name"),
            )
        ]


class PipelineMissingCheck(GuidanceCheck):
    """The guidance must document at least one verification command."""

    rule_id = "PIPELINE_MISSING"
    severity = "error"
    title = "No verification pipeline"

    def run(self, context: GuidanceContext) -> list[GuidanceIssue]:
        if documented_pipeline(context.commands):
            return []
        return [
            self.issue(
                "No recognised verification command is documented.",
                path=context.path,
                hint=f"list the check commands in order: {', '.join(CANONICAL_STAGES)}",
            )
        ]


class StageMissingCheck(GuidanceCheck):
    """Every enabled stage should be documented."""

    rule_id = "STAGE_MISSING"
    severity = "warning"
    title = "Stage not documented"

    def run(self, context: GuidanceContext) -> list[GuidanceIssue]:
        documented = set(documented_stage_order(context.commands))
        if not documented:
            return []
        return [
            self.issue(
                f"Stage `{stage}` is not documented.",
                path=context.path,
                hint="disable the stage in config if it does not apply",
            )
            for stage in CANONICAL_STAGES
            if stage not in documented and stage not in context.config.disabled_stages
        ]


class StageOrderCheck(GuidanceCheck):
    """Documented stages must follow the canonical order.

    Only the first mention of each stage counts, so a later recap of the
    full pipeline does not trip the check.
    """

    rule_id = "STAGE_ORDER"
    severity = "error"
    title = "Stages out of order"

    def run(self, context: GuidanceContext) -> list[GuidanceIssue]:
        seen: set[str] = set()
        highest: str | None = None
        for command in documented_pipeline(context.commands):
            assert command.stage is not None
            if command.stage in seen:
                continue
            seen.add(command.stage)
            if highest is not None and stage_index(command.stage) < stage_index(highest):
                return [
                    self.issue(
                        f"Stage `{command.stage}` (`{command.command}`) is documented after `{highest}`.",
                        path=command.path,
                        line=command.line,
                        hint=f"expected order: {' -> '.join(CANONICAL_STAGES)}",
                    )
                ]
            highest = command.stage
        return []


class StageDuplicateCheck(GuidanceCheck):
    """A stage should not be documented with two different commands."""

    rule_id = "STAGE_DUPLICATE"
    severity = "warning"
    title = "Conflicting stage commands"

    def run(self, context: GuidanceContext) -> list[GuidanceIssue]:
        first_by_stage: dict[str, str] = {}
        reported: set[str] = set()
        issues: list[GuidanceIssue] = []
        for command in documented_pipeline(context.commands):
            assert command.stage is not None
            first = first_by_stage.setdefault(command.stage, command.command)
            if _normalize(first) == _normalize(command.command) or command.stage in reported:
                continue
            reported.add(command.stage)
            issues.append(
                self.issue(
                    f"Stage `{command.stage}` is documented as both `{first}` and `{command.command}`.",
                    path=command.path,
                    line=command.line,
                    hint="the first command is the one `skillgate run --skill` executes",
                )
            )
        return issues


class LintDenyWarningsCheck(GuidanceCheck):
    """Lint commands must promote warnings to errors."""

    rule_id = "LINT_DENY_WARNINGS"
    severity = "error"
    title = "Lint allows warnings"

    def run(self, context: GuidanceContext) -> list[GuidanceIssue]:
        return [
            self.issue(
                f"Lint command `{command.command}` does not deny warnings.",
                path=command.path,
                line=command.line,
                hint="append `-- -D warnings` (or the linter's equivalent)",
            )
            for command in documented_pipeline(context.commands)
            if command.stage == STAGE_LINT and not denies_warnings(command.command)
        ]


class BuildOptimizedCheck(GuidanceCheck):
    """Build commands should target the optimized profile."""

    rule_id = "BUILD_OPTIMIZED"
    severity = "warning"
    title = "Build not optimized"

    def run(self, context: GuidanceContext) -> list[GuidanceIssue]:
        return [
            self.issue(
                f"Build command `{command.command}` does not build in optimized mode.",
                path=command.path,
                line=command.line,
                hint="add `--release`",
            )
            for command in documented_pipeline(context.commands)
            if command.stage == STAGE_BUILD and not is_optimized_build(command.command)
        ]


class ReadmeDriftCheck(GuidanceCheck):
    """README.md and SKILL.md must describe the same stage order."""

    rule_id = "README_DRIFT"
    severity = "error"
    title = "README pipeline drift"

    def run(self, context: GuidanceContext) -> list[GuidanceIssue]:
        if context.readme is None:
            return []
        readme_order = documented_stage_order(context.readme_commands)
        if not readme_order:
            return []
        skill_order = documented_stage_order(context.commands)
        readme_path = str(context.readme.file_path)
        first_line = documented_pipeline(context.readme_commands)[0].line

        extra = [stage for stage in readme_order if stage not in skill_order]
        if extra:
            return [
                self.issue(
                    f"README.md documents stage(s) missing from SKILL.md: {', '.join(extra)}.",
                    path=readme_path,
                    line=first_line,
                )
            ]

        common_skill = [stage for stage in skill_order if stage in readme_order]
        if list(readme_order) != common_skill:
            return [
                self.issue(
                    f"README.md orders stages as {' -> '.join(readme_order)} "
                    f"but SKILL.md uses {' -> '.join(common_skill)}.",
                    path=readme_path,
                    line=first_line,
                )
            ]
        return []


class PolicyFileMissingCheck(GuidanceCheck):
    """A documented license stage needs its policy file in the project."""

    rule_id = "POLICY_FILE_MISSING"
    severity = "warning"
    title = "License policy file missing"

    def run(self, context: GuidanceContext) -> list[GuidanceIssue]:
        if context.project_root is None:
            return []
        license_commands = [
            command for command in documented_pipeline(context.commands) if command.stage == STAGE_LICENSE
        ]
        if not license_commands:
            return []
        policy_file = context.config.license_policy_file
        if (context.project_root / policy_file).is_file():
            return []
        command = license_commands[0]
        return [
            self.issue(
                f"License check is documented but `{policy_file}` is missing from {context.project_root}.",
                path=command.path,
                line=command.line,
                hint="add the policy file or set `license_policy_file` in skillgate.yaml",
            )
        ]


def _normalize(command: str) -> str:
    return " ".join(command.split())


CHECK_CLASSES: tuple[type[GuidanceCheck], ...] = (
    FrontmatterFieldsCheck,
    FrontmatterNameFormatCheck,
    PipelineMissingCheck,
    StageMissingCheck,
    StageOrderCheck,
    StageDuplicateCheck,
    LintDenyWarningsCheck,
    BuildOptimizedCheck,
    ReadmeDriftCheck,
    PolicyFileMissingCheck,
)


def build_checks(config: SkillgateConfig) -> list[GuidanceCheck]:
    """Build check instances for every check the config leaves enabled."""
    checks: list[GuidanceCheck] = []
    for check_cls in CHECK_CLASSES:
        if config.check_enabled(check_cls.rule_id):
            checks.append(check_cls())
        else:
            logger.debug("Check %s disabled by config", check_cls.rule_id)
    return checks
