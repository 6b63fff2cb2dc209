"""Verification pipeline: stage catalog, resolution, and fail-fast runner."""

from __future__ import annotations

from .builder import build_pipeline, split_command, split_env_prefix
from .runner import run_pipeline
from .stages import classify_command, denies_warnings, is_optimized_build, stage_index

__all__ = [
    "build_pipeline",
    "classify_command",
    "denies_warnings",
    "is_optimized_build",
    "run_pipeline",
    "split_command",
    "split_env_prefix",
    "stage_index",
]
