"""Human-readable stdout reporters for check results and pipeline runs."""

from __future__ import annotations

from collections.abc import Sequence

from skillgate.constants.branding import ASCII_LOGO_LINES, CHECK_SUMMARY_TITLE, RUN_SUMMARY_TITLE
from skillgate.constants.reporting import (
    ANSI_RESET,
    SEVERITY_COLORS,
    STATUS_COLORS,
)
from skillgate.model import CheckResult, PipelineRun, PipelineStep

_SEPARATOR = "  " + "─" * 38


def _colorize(text: str, color: str, enabled: bool) -> str:
    if not enabled or not color:
        return text
    return f"{color}{text}{ANSI_RESET}"


def _header(title: str) -> list[str]:
    return ["", f"  {ASCII_LOGO_LINES[0]}", f"  {ASCII_LOGO_LINES[1]}", f"  {title}", _SEPARATOR, ""]


class CheckReporter:
    """Formats guidance check results for the terminal."""

    def __init__(self, result: CheckResult, *, color: bool = True, fail_on: str = "error") -> None:
        self._result = result
        self._color = color
        self._fail_on = fail_on

    def render(self) -> str:
        """Render the full report as a single string."""
        r = self._result
        counts = r.counts_by_severity
        clean = sum(1 for skill in r.skills if not skill.issues)
        lines = _header(CHECK_SUMMARY_TITLE)
        lines.append(f"  Skills      {len(r.skills)} checked / {clean} clean")
        lines.append(
            "  Issues      "
            f"{counts['error']} {_colorize('error', SEVERITY_COLORS['error'], self._color)} · "
            f"{counts['warning']} {_colorize('warning', SEVERITY_COLORS['warning'], self._color)}"
        )
        if r.disabled_checks:
            lines.append(f"  Checks off  {', '.join(r.disabled_checks)}")
        verdict = "FAIL" if r.exit_code(self._fail_on) else "PASS"
        lines.append(f"  Verdict     {verdict} (fail on {self._fail_on})")
        lines.append(f"  Duration    {r.duration_seconds:.3f}s")
        lines.append("")

        for skill in r.skills:
            stages = " -> ".join(skill.documented_stages) if skill.documented_stages else "none"
            lines.append(f"  [{skill.skill_name}]  {skill.path}")
            lines.append(f"    pipeline: {stages}")
            for issue in skill.issues:
                severity = _colorize(issue.severity, SEVERITY_COLORS.get(issue.severity, ""), self._color)
                location = f"{issue.path}:{issue.line}" if issue.line is not None else issue.path
                lines.append(f"    {severity:<7} {issue.rule_id:<24} {location}")
                lines.append(f"            {issue.message}")
                if issue.hint:
                    lines.append(f"            hint: {issue.hint}")
            lines.append("")
        return "\n".join(lines)


class RunReporter:
    """Formats a pipeline run for the terminal."""

    def __init__(self, run: PipelineRun, *, color: bool = True) -> None:
        self._run = run
        self._color = color

    def render(self) -> str:
        """Render the step table and verdict."""
        r = self._run
        lines = _header(RUN_SUMMARY_TITLE)
        for position, step in enumerate(r.steps, start=1):
            status = _colorize(f"{step.status:<8}", STATUS_COLORS.get(step.status, ""), self._color)
            timing = f"{step.duration_seconds:7.2f}s" if step.exit_code is not None else " " * 8
            lines.append(f"  {position}. {step.stage:<8} {status} {timing}  {step.command_line}")

        failed = r.failed_step
        lines.append("")
        if r.dry_run:
            lines.append("  Verdict     DRY RUN (nothing executed)")
        elif failed is None:
            lines.append(f"  Verdict     PASS ({len(r.steps)} step(s))")
        else:
            lines.append(f"  Verdict     FAIL at {failed.stage} (exit code {failed.exit_code})")
            if failed.error:
                lines.append(f"  Error       {failed.error}")
            lines.append("  Fix the failure before running the remaining steps.")
            if failed.output:
                lines.append("")
                lines.append(f"  Output of {failed.stage} (tail):")
                lines.extend(f"    {line}" for line in failed.output.splitlines())
        lines.append(f"  Duration    {r.duration_seconds:.3f}s")
        lines.append("")
        return "\n".join(lines)


def render_plan(steps: Sequence[PipelineStep]) -> str:
    """Render resolved steps without running them."""
    return "\n".join(
        f"  {position}. {step.stage:<8} [{step.source}] {step.command_line}"
        for position, step in enumerate(steps, start=1)
    )
