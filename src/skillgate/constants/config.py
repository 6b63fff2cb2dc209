"""Configuration defaults and filenames."""

from __future__ import annotations

CONFIG_FILENAME: str = "skillgate.yaml"
DEFAULT_MAX_FILE_MB: int = 2
DEFAULT_SKILL_GLOBS: tuple[str, ...] = ("**/SKILL.md",)
DEFAULT_LICENSE_POLICY_FILE: str = "deny.toml"
DEFAULT_FAIL_ON: str = "error"
VALID_FAIL_ON: frozenset[str] = frozenset({"error", "warning"})

INIT_CONFIG_TEMP_PREFIX: str = ".skillgate-init-"
INIT_CONFIG_TEMP_SUFFIX: str = ".yaml"
