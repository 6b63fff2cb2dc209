"""Pipeline definition exceptions."""

from __future__ import annotations

from skillgate.exceptions.base import SkillgateError


class PipelineError(SkillgateError):
    """Raised when a verification pipeline definition is unusable."""
