"""Configuration-related exceptions."""

from __future__ import annotations

from skillgate.exceptions.base import SkillgateError


class ConfigError(SkillgateError, ValueError):
    """Raised when skillgate configuration is invalid."""
