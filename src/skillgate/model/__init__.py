"""Core data models for skillgate."""

from .entities import (
    CheckResult,
    DocumentedCommand,
    DocumentHeading,
    DocumentLine,
    GuidanceIssue,
    ParsedSkillDocument,
    PipelineRun,
    PipelineStep,
    SkillCheckResult,
    StepResult,
)

__all__ = [
    "CheckResult",
    "DocumentHeading",
    "DocumentLine",
    "DocumentedCommand",
    "GuidanceIssue",
    "ParsedSkillDocument",
    "PipelineRun",
    "PipelineStep",
    "SkillCheckResult",
    "StepResult",
]
