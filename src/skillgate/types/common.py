"""Cross-module type aliases."""

from __future__ import annotations

from typing import Literal, TypeAlias

Severity: TypeAlias = Literal["warning", "error"]
StepStatus: TypeAlias = Literal["passed", "failed", "not_run"]
StepSource: TypeAlias = Literal["default", "config", "skill"]
FieldSource: TypeAlias = Literal["prose", "code_block", "heading"]

JsonScalar: TypeAlias = str | int | float | bool | None
JsonValue: TypeAlias = JsonScalar | list["JsonValue"] | dict[str, "JsonValue"]
JsonObject: TypeAlias = dict[str, JsonValue]
