"""Root exception for skillgate."""

from __future__ import annotations


class SkillgateError(Exception):
    """Base class for all skillgate errors."""
