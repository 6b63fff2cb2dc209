"""Guidance consistency checks."""

from __future__ import annotations

from .base import GuidanceCheck, GuidanceContext
from .checker import check_skill, check_workspace
from .rules import CHECK_CLASSES, build_checks
from .template import render_skill_markdown

__all__ = [
    "CHECK_CLASSES",
    "GuidanceCheck",
    "GuidanceContext",
    "build_checks",
    "check_skill",
    "check_workspace",
    "render_skill_markdown",
]
