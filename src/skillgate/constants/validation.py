"""Stable validation error codes and allowed-key sets for config validation."""

from __future__ import annotations

CFG001: str = "CFG001"  # config file not found (explicit --config)
CFG002: str = "CFG002"  # invalid YAML parse
CFG003: str = "CFG003"  # top-level value is not a mapping
CFG004: str = "CFG004"  # unknown key
CFG005: str = "CFG005"  # invalid value type
CFG006: str = "CFG006"  # invalid enum value
CFG007: str = "CFG007"  # value out of range
CFG008: str = "CFG008"  # unknown stage name
CFG009: str = "CFG009"  # invalid nested mapping
CFG010: str = "CFG010"  # root directory not found
CFG011: str = "CFG011"  # command cannot be shell-split

ALLOWED_CONFIG_KEYS: frozenset[str] = frozenset(
    {
        "steps",
        "disabled_stages",
        "env",
        "license_policy_file",
        "skill_globs",
        "max_file_mb",
        "checks",
        "fail_on",
    }
)

ALLOWED_CHECKS_KEYS: frozenset[str] = frozenset({"disabled"})

LIST_OF_STRINGS_KEYS: tuple[str, ...] = (
    "disabled_stages",
    "skill_globs",
)
