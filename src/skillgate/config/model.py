"""Config data model for skillgate."""

from __future__ import annotations

from dataclasses import dataclass, field

from skillgate.constants.config import (
    DEFAULT_FAIL_ON,
    DEFAULT_LICENSE_POLICY_FILE,
    DEFAULT_MAX_FILE_MB,
    DEFAULT_SKILL_GLOBS,
)
from skillgate.types import Severity


@dataclass(frozen=True)
class SkillgateConfig:
    """Resolved skillgate config."""

    steps: dict[str, str] = field(default_factory=dict)
    disabled_stages: tuple[str, ...] = ()
    env: dict[str, str] = field(default_factory=dict)
    license_policy_file: str = DEFAULT_LICENSE_POLICY_FILE
    skill_globs: tuple[str, ...] = DEFAULT_SKILL_GLOBS
    max_file_mb: int = DEFAULT_MAX_FILE_MB
    disabled_checks: tuple[str, ...] = ()
    fail_on: Severity = DEFAULT_FAIL_ON  # type: ignore[assignment]

    def check_enabled(self, rule_id: str) -> bool:
        """Return True unless the check is disabled in config."""
        return rule_id not in self.disabled_checks
