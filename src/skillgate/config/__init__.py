"""Configuration loading, validation, and normalization for skillgate."""

from __future__ import annotations

from skillgate.config.loader import load_config
from skillgate.config.model import SkillgateConfig
from skillgate.config.validator import validate_config_file

__all__ = [
    "SkillgateConfig",
    "load_config",
    "validate_config_file",
]
