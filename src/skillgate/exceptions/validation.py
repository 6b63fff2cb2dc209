"""Config validation problems reported by ``validate-config`` and the preflight."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ValidationError:
    """One problem in ``skillgate.yaml``, with a stable CFG code.

    ``field`` is the dotted key path (``steps.lint``, ``checks.disabled``) or
    an empty string for file-level problems.
    """

    code: str
    path: str
    field: str
    message: str
    hint: str = ""
    line: int | None = None
    column: int | None = None

    @property
    def location(self) -> str:
        """``path``, ``path:line`` or ``path:line:column``."""
        parts = [self.path]
        if self.line is not None:
            parts.append(str(self.line))
            if self.column is not None:
                parts.append(str(self.column))
        return ":".join(parts)

    def format(self) -> str:
        """Render as ``[CODE] location message (hint)``."""
        text = f"[{self.code}] {self.location} {self.message}"
        return f"{text} ({self.hint})" if self.hint else text


def sort_errors(errors: list[ValidationError]) -> list[ValidationError]:
    """Order by code, then file, key path and position."""
    return sorted(errors, key=lambda e: (e.code, e.path, e.field, e.line or 0, e.column or 0))


def format_errors(errors: list[ValidationError]) -> str:
    """Render one problem per line, followed by a count."""
    lines = [error.format() for error in sort_errors(errors)]
    noun = "problem" if len(lines) == 1 else "problems"
    lines.append(f"{len(lines)} configuration {noun} found.")
    return "\n".join(lines)
