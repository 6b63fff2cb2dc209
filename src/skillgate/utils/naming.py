"""Skill name normalization."""

from __future__ import annotations

from skillgate.constants.discovery import SKILL_NAME_FALLBACK
from skillgate.constants.parsing import SKILL_NAME_MAX_LENGTH, SKILL_NAME_SEPARATOR_PATTERN


def normalize_skill_name(raw_name: str) -> str:
    """Fold a declared name or folder name into the lowercase hyphenated skill-name form.

    ``Drifted_Skill`` and ``drifted skill`` both become ``drifted-skill``.
    The result is used as the report key for the skill.
    """
    normalized = SKILL_NAME_SEPARATOR_PATTERN.sub("-", raw_name.strip().lower())
    normalized = normalized[:SKILL_NAME_MAX_LENGTH].strip("-")
    return normalized or SKILL_NAME_FALLBACK
