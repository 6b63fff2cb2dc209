"""Check interface and shared context for guidance consistency rules."""

from __future__ import annotations

import inspect
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar

from skillgate.config import SkillgateConfig
from skillgate.model import DocumentedCommand, GuidanceIssue, ParsedSkillDocument
from skillgate.types import Severity

_RULE_ID_PATTERN: re.Pattern[str] = re.compile(r"^[A-Z][A-Z0-9_]+$")


@dataclass(frozen=True)
class GuidanceContext:
    """Immutable inputs for checking one guidance skill."""

    document: ParsedSkillDocument
    commands: tuple[DocumentedCommand, ...]
    config: SkillgateConfig
    readme: ParsedSkillDocument | None = None
    readme_commands: tuple[DocumentedCommand, ...] = ()
    project_root: Path | None = None

    @property
    def path(self) -> str:
        return str(self.document.file_path)


class GuidanceCheck(ABC):
    """Abstract base class for guidance consistency checks."""

    rule_id: ClassVar[str]
    severity: ClassVar[Severity]
    title: ClassVar[str]

    def __init_subclass__(cls, **kwargs: object) -> None:
        """Validate check subclasses define an UPPER_SNAKE_CASE `rule_id`."""
        super().__init_subclass__(**kwargs)
        if inspect.isabstract(cls):
            return

        rule_id = getattr(cls, "rule_id", None)
        if not isinstance(rule_id, str) or not rule_id.strip():
            raise TypeError(f"{cls.__name__} must define a non-empty class attribute `rule_id`")
        if not _RULE_ID_PATTERN.match(rule_id):
            raise TypeError(f"{cls.__name__}.rule_id must be UPPER_SNAKE_CASE (got {rule_id!r})")

    @abstractmethod
    def run(self, context: GuidanceContext) -> list[GuidanceIssue]:
        """Run the check against one guidance skill."""

    def issue(
        self,
        message: str,
        *,
        path: str,
        line: int | None = None,
        hint: str = "",
    ) -> GuidanceIssue:
        """Build an issue carrying this check's identity."""
        return GuidanceIssue(
            rule_id=self.rule_id,
            severity=self.severity,
            title=self.title,
            message=message,
            path=path,
            line=line,
            hint=hint,
        )
