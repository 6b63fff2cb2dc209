"""Parsing-related exceptions."""

from __future__ import annotations

from skillgate.exceptions.base import SkillgateError


class SkillParseError(SkillgateError, ValueError):
    """Raised when a SKILL.md or README.md file cannot be parsed."""
