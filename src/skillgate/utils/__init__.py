"""Utility helpers for skillgate."""

from .naming import normalize_skill_name

__all__ = ["normalize_skill_name"]
