"""Shared exception hierarchy for skillgate."""

from __future__ import annotations

from .base import SkillgateError
from .config import ConfigError
from .parsing import SkillParseError
from .pipeline import PipelineError

__all__ = [
    "ConfigError",
    "PipelineError",
    "SkillParseError",
    "SkillgateError",
]
