"""Sequential fail-fast execution of verification steps."""

from __future__ import annotations

import logging
import os
import subprocess
import time
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path
from typing import Any, TypeAlias

from skillgate.constants.reporting import STATUS_FAILED, STATUS_NOT_RUN, STATUS_PASSED
from skillgate.constants.stages import (
    EXIT_CODE_CANNOT_EXECUTE,
    EXIT_CODE_COMMAND_NOT_FOUND,
    OUTPUT_TAIL_LINES,
)
from skillgate.model import PipelineRun, PipelineStep, StepResult

logger = logging.getLogger(__name__)

Runner: TypeAlias = Callable[..., subprocess.CompletedProcess[Any]]


def run_pipeline(
    steps: Sequence[PipelineStep],
    *,
    cwd: Path,
    env: Mapping[str, str] | None = None,
    capture: bool = False,
    dry_run: bool = False,
    runner: Runner = subprocess.run,
) -> PipelineRun:
    """Run *steps* one at a time and stop at the first failure.

    Steps after a failure are reported as ``not_run`` and never invoked.
    There is no retry and no timeout.
    """
    started_at = time.perf_counter()
    results: list[StepResult] = []
    failed: StepResult | None = None

    for step in steps:
        if dry_run or failed is not None:
            results.append(StepResult(stage=step.stage, command=step.command, status=STATUS_NOT_RUN))
            if failed is not None:
                logger.info("Not run: %s (stopped after %s)", step.stage, failed.stage)
            continue

        logger.info("Running %s: %s", step.stage, step.command_line)
        result = _run_step(step, cwd=cwd, env=_step_environment(env, step), capture=capture, runner=runner)
        results.append(result)
        if result.status == STATUS_FAILED:
            failed = result
            logger.warning("Step %s failed with exit code %s", step.stage, result.exit_code)
        else:
            logger.info("Step %s passed in %.2fs", step.stage, result.duration_seconds)

    return PipelineRun(
        steps=tuple(results),
        duration_seconds=time.perf_counter() - started_at,
        dry_run=dry_run,
    )


def _run_step(
    step: PipelineStep,
    *,
    cwd: Path,
    env: dict[str, str] | None,
    capture: bool,
    runner: Runner,
) -> StepResult:
    started_at = time.perf_counter()
    kwargs: dict[str, Any] = {"cwd": cwd, "env": env, "check": False}
    if capture:
        kwargs.update(stdout=subprocess.PIPE, stderr=subprocess.STDOUT, text=True, errors="replace")

    try:
        completed = runner(list(step.command), **kwargs)
    except FileNotFoundError:
        return StepResult(
            stage=step.stage,
            command=step.command,
            status=STATUS_FAILED,
            exit_code=EXIT_CODE_COMMAND_NOT_FOUND,
            duration_seconds=time.perf_counter() - started_at,
            error=f"command not found: {step.command[0]}",
        )
    except OSError as exc:
        return StepResult(
            stage=step.stage,
            command=step.command,
            status=STATUS_FAILED,
            exit_code=EXIT_CODE_CANNOT_EXECUTE,
            duration_seconds=time.perf_counter() - started_at,
            error=f"cannot execute {step.command[0]}: {exc}",
        )

    output = _tail(completed.stdout) if capture else None
    status = STATUS_PASSED if completed.returncode == 0 else STATUS_FAILED
    return StepResult(
        stage=step.stage,
        command=step.command,
        status=status,
        exit_code=completed.returncode,
        duration_seconds=time.perf_counter() - started_at,
        output=output,
    )


def _step_environment(env: Mapping[str, str] | None, step: PipelineStep) -> dict[str, str] | None:
    """Layer config env, then the step's own assignments, over the inherited environment."""
    if not env and not step.env:
        return None
    return {**os.environ, **(env or {}), **step.env}


def _tail(text: str | None, limit: int = OUTPUT_TAIL_LINES) -> str | None:
    if text is None:
        return None
    lines = text.rstrip("\n").splitlines()
    return "\n".join(lines[-limit:])
