"""Guidance document parsers."""

from __future__ import annotations

from .commands import documented_pipeline, documented_stage_order, extract_commands
from .skill_markdown import parse_skill_markdown_file, parse_skill_markdown_text

__all__ = [
    "documented_pipeline",
    "documented_stage_order",
    "extract_commands",
    "parse_skill_markdown_file",
    "parse_skill_markdown_text",
]
