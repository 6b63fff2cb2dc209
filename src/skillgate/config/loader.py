"""Config loading and normalization for skillgate."""

from __future__ import annotations

import logging
import shlex
from pathlib import Path
from typing import Any

import yaml

from skillgate.config.model import SkillgateConfig
from skillgate.constants.config import (
    CONFIG_FILENAME,
    DEFAULT_FAIL_ON,
    DEFAULT_LICENSE_POLICY_FILE,
    DEFAULT_MAX_FILE_MB,
    DEFAULT_SKILL_GLOBS,
    VALID_FAIL_ON,
)
from skillgate.constants.stages import CANONICAL_STAGES, VALID_STAGES
from skillgate.exceptions import ConfigError

logger = logging.getLogger(__name__)


def load_config(root: Path, config_path: Path | None = None) -> SkillgateConfig:
    """Load and validate config from ``skillgate.yaml`` or an explicit path."""
    root = root.resolve()
    path = config_path.resolve() if config_path else (root / CONFIG_FILENAME)
    if not path.exists():
        if config_path is not None:
            raise ConfigError(f"Config file not found: {path}")
        logger.debug("No %s under %s; using defaults", CONFIG_FILENAME, root)
        return SkillgateConfig()

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML config file at {path}: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file at {path} must be a YAML mapping")

    steps_raw = raw.get("steps", {})
    if steps_raw is None:
        steps_raw = {}
    if not isinstance(steps_raw, dict):
        raise ConfigError("steps must be a mapping of stage name to command")
    steps: dict[str, str] = {}
    for stage, command in steps_raw.items():
        _ensure_stage(stage, "steps")
        if not isinstance(command, str) or not command.strip():
            raise ConfigError(f"steps.{stage} must be a non-empty command string")
        try:
            shlex.split(command, comments=True)
        except ValueError as exc:
            raise ConfigError(f"steps.{stage} cannot be parsed: {exc}") from exc
        steps[stage] = command.strip()

    disabled_stages = _ensure_string_list(raw.get("disabled_stages", []), "disabled_stages")
    for stage in disabled_stages:
        _ensure_stage(stage, "disabled_stages")

    env_raw = raw.get("env", {})
    if env_raw is None:
        env_raw = {}
    if not isinstance(env_raw, dict):
        raise ConfigError("env must be a mapping")
    env: dict[str, str] = {}
    for key, value in env_raw.items():
        if not isinstance(key, str) or isinstance(value, (dict, list)) or value is None:
            raise ConfigError("env must map variable names to scalar values")
        env[key] = str(value).lower() if isinstance(value, bool) else str(value)

    checks_raw = raw.get("checks", {})
    if checks_raw is None:
        checks_raw = {}
    if not isinstance(checks_raw, dict):
        raise ConfigError("checks must be a mapping")

    license_policy_file = raw.get("license_policy_file", DEFAULT_LICENSE_POLICY_FILE)
    if not isinstance(license_policy_file, str) or not license_policy_file.strip():
        raise ConfigError("license_policy_file must be a non-empty string")

    max_file_mb = raw.get("max_file_mb", DEFAULT_MAX_FILE_MB)
    if isinstance(max_file_mb, bool) or not isinstance(max_file_mb, int) or max_file_mb <= 0:
        raise ConfigError("max_file_mb must be a positive integer")

    fail_on = raw.get("fail_on", DEFAULT_FAIL_ON)
    if not isinstance(fail_on, str) or fail_on not in VALID_FAIL_ON:
        raise ConfigError(f"fail_on must be one of {sorted(VALID_FAIL_ON)}, got {fail_on!r}")

    return SkillgateConfig(
        steps=steps,
        disabled_stages=tuple(stage for stage in CANONICAL_STAGES if stage in disabled_stages),
        env=env,
        license_policy_file=license_policy_file.strip(),
        skill_globs=tuple(_ensure_string_list(raw.get("skill_globs", DEFAULT_SKILL_GLOBS), "skill_globs")),
        max_file_mb=max_file_mb,
        disabled_checks=tuple(
            check.strip().upper()
            for check in _ensure_string_list(checks_raw.get("disabled", []), "checks.disabled")
            if check.strip()
        ),
        fail_on=fail_on,  # type: ignore[arg-type]
    )


def _ensure_string_list(value: Any, key_name: str) -> list[str]:
    """Coerce a value to a list of strings, raising ConfigError on type mismatch."""
    if value is None:
        return []
    if not isinstance(value, (list, tuple)) or not all(isinstance(item, str) for item in value):
        raise ConfigError(f"{key_name} must be a list of strings")
    return list(value)


def _ensure_stage(stage: object, key_name: str) -> None:
    if not isinstance(stage, str) or stage not in VALID_STAGES:
        raise ConfigError(f"{key_name}: unknown stage {stage!r}; expected one of {', '.join(CANONICAL_STAGES)}")
