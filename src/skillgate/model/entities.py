"""Frozen dataclasses shared across parsing, checks, and the pipeline runner."""

from __future__ import annotations

import shlex
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from skillgate.constants.checks import SEVERITY_RANK
from skillgate.constants.parsing import FRONTMATTER_ALT_DELIMITER, FRONTMATTER_DELIMITER
from skillgate.constants.reporting import STATUS_FAILED, STATUS_NOT_RUN, STATUS_PASSED
from skillgate.types import FieldSource, JsonObject, Severity, StepSource, StepStatus


@dataclass(frozen=True)
class DocumentLine:
    """A non-empty body line of a guidance document."""

    line: int
    value: str
    snippet: str
    in_code_block: bool = False
    fence_info: str | None = None
    field_source: FieldSource = "prose"


@dataclass(frozen=True)
class DocumentHeading:
    """A markdown ATX heading."""

    line: int
    level: int
    text: str


@dataclass(frozen=True)
class ParsedSkillDocument:
    """Parsed SKILL.md or README.md content."""

    file_path: Path
    raw_text: str
    frontmatter: dict[str, Any] | None
    body: str
    lines: tuple[DocumentLine, ...]
    headings: tuple[DocumentHeading, ...] = ()

    def frontmatter_line(self, key: str) -> int | None:
        """Return the 1-based line of a top-level frontmatter key, if present."""
        if self.frontmatter is None:
            return None
        prefix = f"{key}:"
        raw_lines = self.raw_text.lstrip("\ufeff").splitlines()
        for index, raw_line in enumerate(raw_lines[1:], start=2):
            if raw_line.strip() in {FRONTMATTER_DELIMITER, FRONTMATTER_ALT_DELIMITER}:
                break
            if raw_line.startswith(prefix):
                return index
        return None


@dataclass(frozen=True)
class DocumentedCommand:
    """A check command found in a guidance document."""

    command: str
    stage: str | None
    path: str
    line: int
    snippet: str


@dataclass(frozen=True)
class PipelineStep:
    """One resolved step of the verification pipeline."""

    stage: str
    command: tuple[str, ...]
    source: StepSource = "default"
    env: dict[str, str] = field(default_factory=dict)

    @property
    def command_line(self) -> str:
        """The step as a shell would read it, including leading variable assignments."""
        assignments = [f"{name}={shlex.quote(value)}" for name, value in self.env.items()]
        return " ".join([*assignments, shlex.join(self.command)])

    def to_dict(self) -> JsonObject:
        return {
            "stage": self.stage,
            "command": list(self.command),
            "env": dict(self.env),
            "source": self.source,
        }


@dataclass(frozen=True)
class StepResult:
    """Outcome of one pipeline step."""

    stage: str
    command: tuple[str, ...]
    status: StepStatus
    exit_code: int | None = None
    duration_seconds: float = 0.0
    output: str | None = None
    error: str | None = None

    @property
    def command_line(self) -> str:
        return shlex.join(self.command)

    def to_dict(self) -> JsonObject:
        return {
            "stage": self.stage,
            "command": list(self.command),
            "status": self.status,
            "exit_code": self.exit_code,
            "duration_seconds": round(self.duration_seconds, 6),
            "output": self.output,
            "error": self.error,
        }


@dataclass(frozen=True)
class PipelineRun:
    """Outcome of a full pipeline run."""

    steps: tuple[StepResult, ...]
    duration_seconds: float = 0.0
    dry_run: bool = False

    @property
    def failed_step(self) -> StepResult | None:
        """The step that stopped the pipeline, if any."""
        return next((step for step in self.steps if step.status == STATUS_FAILED), None)

    @property
    def ok(self) -> bool:
        return self.failed_step is None

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1

    @property
    def counts_by_status(self) -> dict[str, int]:
        counts = Counter(step.status for step in self.steps)
        return {status: counts.get(status, 0) for status in (STATUS_PASSED, STATUS_FAILED, STATUS_NOT_RUN)}

    def to_dict(self) -> JsonObject:
        failed = self.failed_step
        return {
            "ok": self.ok,
            "dry_run": self.dry_run,
            "failed_stage": failed.stage if failed else None,
            "duration_seconds": round(self.duration_seconds, 6),
            "counts": dict(self.counts_by_status),
            "steps": [step.to_dict() for step in self.steps],
        }


@dataclass(frozen=True)
class GuidanceIssue:
    """A consistency problem found in a guidance document."""

    rule_id: str
    severity: Severity
    title: str
    message: str
    path: str
    line: int | None = None
    hint: str = ""

    def to_dict(self) -> JsonObject:
        return {
            "rule_id": self.rule_id,
            "severity": self.severity,
            "title": self.title,
            "message": self.message,
            "path": self.path,
            "line": self.line,
            "hint": self.hint,
        }


@dataclass(frozen=True)
class SkillCheckResult:
    """Check outcome for one SKILL.md (and its README, when present)."""

    skill_name: str
    path: Path
    issues: tuple[GuidanceIssue, ...]
    documented_stages: tuple[str, ...] = ()
    readme_path: Path | None = None

    def to_dict(self) -> JsonObject:
        return {
            "skill": self.skill_name,
            "path": str(self.path),
            "readme": str(self.readme_path) if self.readme_path else None,
            "documented_stages": list(self.documented_stages),
            "issues": [issue.to_dict() for issue in self.issues],
        }


@dataclass(frozen=True)
class CheckResult:
    """Check outcome for a whole workspace."""

    root: Path
    skills: tuple[SkillCheckResult, ...] = ()
    duration_seconds: float = 0.0
    disabled_checks: tuple[str, ...] = field(default_factory=tuple)

    @property
    def issues(self) -> tuple[GuidanceIssue, ...]:
        return tuple(issue for skill in self.skills for issue in skill.issues)

    @property
    def counts_by_severity(self) -> dict[str, int]:
        counts = Counter(issue.severity for issue in self.issues)
        return {"error": counts.get("error", 0), "warning": counts.get("warning", 0)}

    def exit_code(self, fail_on: str = "error") -> int:
        """Return 1 when any issue is at or above *fail_on*, 0 otherwise."""
        threshold = SEVERITY_RANK.get(fail_on, SEVERITY_RANK["error"])
        if any(SEVERITY_RANK.get(issue.severity, 0) >= threshold for issue in self.issues):
            return 1
        return 0

    def to_dict(self) -> JsonObject:
        return {
            "root": str(self.root),
            "skills_checked": len(self.skills),
            "counts": dict(self.counts_by_severity),
            "disabled_checks": list(self.disabled_checks),
            "duration_seconds": round(self.duration_seconds, 6),
            "skills": [skill.to_dict() for skill in self.skills],
        }
