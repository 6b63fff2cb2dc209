"""Shared type aliases for skillgate."""

from .common import FieldSource, JsonObject, JsonScalar, JsonValue, Severity, StepSource, StepStatus

__all__ = [
    "FieldSource",
    "JsonObject",
    "JsonScalar",
    "JsonValue",
    "Severity",
    "StepSource",
    "StepStatus",
]
