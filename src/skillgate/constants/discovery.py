"""Constants for skill discovery."""

from __future__ import annotations

SKILL_MARKDOWN_FILENAME: str = "SKILL.md"
README_FILENAME: str = "README.md"
SKILL_NAME_FALLBACK: str = "skill"
