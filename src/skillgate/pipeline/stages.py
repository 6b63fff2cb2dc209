"""Stage catalog lookups."""

from __future__ import annotations

from skillgate.constants.stages import (
    CANONICAL_STAGES,
    DENY_WARNINGS_MARKERS,
    OPTIMIZED_BUILD_MARKERS,
    STAGE_PATTERNS,
    VALID_STAGES,
)


def classify_command(command: str) -> str | None:
    """Map a command line to its canonical stage, or ``None`` when unrecognised."""
    text = command.strip()
    if not text:
        return None
    for stage in CANONICAL_STAGES:
        if any(pattern.search(text) for pattern in STAGE_PATTERNS[stage]):
            return stage
    return None


def stage_index(stage: str) -> int:
    """Return the position of *stage* in the canonical order."""
    if stage not in VALID_STAGES:
        raise ValueError(f"Unknown stage {stage!r}; expected one of {', '.join(CANONICAL_STAGES)}")
    return CANONICAL_STAGES.index(stage)


def denies_warnings(command: str) -> bool:
    """Return True when a lint command promotes warnings to errors."""
    return any(marker.search(command) for marker in DENY_WARNINGS_MARKERS)


def is_optimized_build(command: str) -> bool:
    """Return True when a build command targets the optimized profile."""
    return any(marker.search(command) for marker in OPTIMIZED_BUILD_MARKERS)
