"""Constants for guidance document parsing."""

from __future__ import annotations

import re
from re import Pattern

SNIPPET_MAX_LENGTH: int = 200
FRONTMATTER_DELIMITER: str = "---"
# YAML allows "..." as an explicit document end marker.
FRONTMATTER_ALT_DELIMITER: str = "..."

FENCED_CODE_BLOCK_PATTERN: Pattern[str] = re.compile(r"^(`{3,}|~{3,})\s*([^`\s]*)")
HEADING_PATTERN: Pattern[str] = re.compile(r"^(#{1,6})\s+(.+?)\s*#*\s*$")
LIST_ITEM_PATTERN: Pattern[str] = re.compile(r"^(?:[-*+]|\d+[.)])\s+")
INLINE_CODE_PATTERN: Pattern[str] = re.compile(r"`([^`]+)`")
COMMAND_CHAIN_PATTERN: Pattern[str] = re.compile(r"\s*(?:&&|;)\s*")
SHELL_PROMPT_PREFIX: str = "$ "
SHELL_COMMENT_CHAR: str = "#"

SHELL_FENCE_LANGUAGES: frozenset[str] = frozenset({"", "sh", "bash", "shell", "console", "zsh"})

SKILL_NAME_PATTERN: Pattern[str] = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
SKILL_NAME_MAX_LENGTH: int = 64
# Runs of anything outside the skill-name alphabet collapse to one hyphen.
SKILL_NAME_SEPARATOR_PATTERN: Pattern[str] = re.compile(r"[^a-z0-9]+")
