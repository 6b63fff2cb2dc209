"""Guidance check identifiers and severity ranks."""

from __future__ import annotations

SEVERITY_RANK: dict[str, int] = {"warning": 1, "error": 2}

SKILL_PARSE_RULE_ID: str = "SKILL_PARSE"

ALL_CHECK_IDS: tuple[str, ...] = (
    "FRONTMATTER_FIELDS",
    "FRONTMATTER_NAME_FORMAT",
    "PIPELINE_MISSING",
    "STAGE_MISSING",
    "STAGE_ORDER",
    "STAGE_DUPLICATE",
    "LINT_DENY_WARNINGS",
    "BUILD_OPTIMIZED",
    "README_DRIFT",
    "POLICY_FILE_MISSING",
)
