"""Config file validation for skillgate."""

from __future__ import annotations

import difflib
import shlex
from pathlib import Path
from typing import Any

import yaml

from skillgate.constants.checks import ALL_CHECK_IDS
from skillgate.constants.config import CONFIG_FILENAME, VALID_FAIL_ON
from skillgate.constants.stages import CANONICAL_STAGES, VALID_STAGES
from skillgate.constants.validation import (
    ALLOWED_CHECKS_KEYS,
    ALLOWED_CONFIG_KEYS,
    CFG001,
    CFG002,
    CFG003,
    CFG004,
    CFG005,
    CFG006,
    CFG007,
    CFG008,
    CFG009,
    CFG011,
    LIST_OF_STRINGS_KEYS,
)
from skillgate.exceptions.validation import ValidationError


def validate_config_file(
    root: Path,
    config_path: Path | None = None,
    *,
    config_explicit: bool = False,
) -> list[ValidationError]:
    """Validate a skillgate.yaml file and return all validation errors.

    This is the collect-all entry point used by ``skillgate validate-config``
    and by the ``check`` and ``run`` preflight. It never raises; all problems
    are returned as :class:`ValidationError` instances.
    """
    errors: list[ValidationError] = []
    root = root.resolve()
    path = config_path.resolve() if config_path else (root / CONFIG_FILENAME)
    path_str = str(path)

    if not path.exists():
        if config_explicit:
            errors.append(
                ValidationError(
                    code=CFG001,
                    path=path_str,
                    field="",
                    message=f"config file not found: {path}",
                )
            )
        return errors

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        mark = getattr(exc, "problem_mark", None)
        errors.append(
            ValidationError(
                code=CFG002,
                path=path_str,
                field="",
                message=f"invalid YAML: {exc}",
                line=(mark.line + 1) if mark is not None else None,
                column=(mark.column + 1) if mark is not None else None,
            )
        )
        return errors

    if raw is None:
        return errors

    if not isinstance(raw, dict):
        errors.append(
            ValidationError(
                code=CFG003,
                path=path_str,
                field="",
                message=f"config must be a YAML mapping, got {type(raw).__name__}",
            )
        )
        return errors

    for key in sorted(raw.keys(), key=str):
        if key not in ALLOWED_CONFIG_KEYS:
            errors.append(
                ValidationError(
                    code=CFG004,
                    path=path_str,
                    field=str(key),
                    message=f"unknown key `{key}`",
                    hint=_suggest_key(str(key), ALLOWED_CONFIG_KEYS),
                )
            )

    if "max_file_mb" in raw:
        val = raw["max_file_mb"]
        if isinstance(val, bool) or not isinstance(val, int):
            errors.append(
                ValidationError(
                    code=CFG005,
                    path=path_str,
                    field="max_file_mb",
                    message="invalid type for `max_file_mb`",
                    hint="expected a positive integer",
                )
            )
        elif val <= 0:
            errors.append(
                ValidationError(
                    code=CFG007,
                    path=path_str,
                    field="max_file_mb",
                    message=f"`max_file_mb` must be a positive integer, got {val}",
                )
            )

    if "fail_on" in raw:
        val = raw["fail_on"]
        if not isinstance(val, str) or val not in VALID_FAIL_ON:
            errors.append(
                ValidationError(
                    code=CFG006,
                    path=path_str,
                    field="fail_on",
                    message="invalid value for `fail_on`",
                    hint=f"expected one of: {', '.join(sorted(VALID_FAIL_ON))}; got: {val!r}",
                )
            )

    if "license_policy_file" in raw:
        val = raw["license_policy_file"]
        if not isinstance(val, str) or not val.strip():
            errors.append(
                ValidationError(
                    code=CFG005,
                    path=path_str,
                    field="license_policy_file",
                    message="invalid type for `license_policy_file`",
                    hint="expected a non-empty file name",
                )
            )

    for key in LIST_OF_STRINGS_KEYS:
        if key in raw:
            val = raw[key]
            if val is not None and (not isinstance(val, (list, tuple)) or not all(isinstance(i, str) for i in val)):
                errors.append(
                    ValidationError(
                        code=CFG005,
                        path=path_str,
                        field=key,
                        message=f"invalid type for `{key}`",
                        hint="expected a list of strings",
                    )
                )

    _validate_disabled_stages(raw, path_str, errors)
    _validate_steps_block(raw, path_str, errors)
    _validate_env_block(raw, path_str, errors)
    _validate_checks_block(raw, path_str, errors)

    return errors


def _validate_disabled_stages(
    raw: dict[str, Any],
    path_str: str,
    errors: list[ValidationError],
) -> None:
    """Report unknown stage names listed in ``disabled_stages``."""
    val = raw.get("disabled_stages")
    if not isinstance(val, list):
        return
    for stage in val:
        if isinstance(stage, str) and stage not in VALID_STAGES:
            errors.append(_unknown_stage_error(path_str, "disabled_stages", stage))


def _validate_steps_block(
    raw: dict[str, Any],
    path_str: str,
    errors: list[ValidationError],
) -> None:
    """Validate the ``steps`` mapping of stage name to command line."""
    if "steps" not in raw:
        return
    steps = raw["steps"]
    if steps is None:
        return
    if not isinstance(steps, dict):
        errors.append(
            ValidationError(
                code=CFG009,
                path=path_str,
                field="steps",
                message="`steps` must be a mapping of stage name to command",
            )
        )
        return

    for stage in sorted(steps.keys(), key=str):
        command = steps[stage]
        field_name = f"steps.{stage}"
        if not isinstance(stage, str) or stage not in VALID_STAGES:
            errors.append(_unknown_stage_error(path_str, "steps", stage))
            continue
        if not isinstance(command, str) or not command.strip():
            errors.append(
                ValidationError(
                    code=CFG005,
                    path=path_str,
                    field=field_name,
                    message=f"invalid type for `{field_name}`",
                    hint="expected a non-empty command string",
                )
            )
            continue
        try:
            shlex.split(command, comments=True)
        except ValueError as exc:
            errors.append(
                ValidationError(
                    code=CFG011,
                    path=path_str,
                    field=field_name,
                    message=f"cannot parse command for `{field_name}`: {exc}",
                    hint="check quoting",
                )
            )


def _validate_env_block(
    raw: dict[str, Any],
    path_str: str,
    errors: list[ValidationError],
) -> None:
    """Validate the ``env`` mapping passed to every step."""
    if "env" not in raw or raw["env"] is None:
        return
    env = raw["env"]
    if not isinstance(env, dict):
        errors.append(
            ValidationError(
                code=CFG009,
                path=path_str,
                field="env",
                message="`env` must be a mapping",
            )
        )
        return
    for key in sorted(env.keys(), key=str):
        value = env[key]
        if not isinstance(key, str) or value is None or isinstance(value, (dict, list)):
            errors.append(
                ValidationError(
                    code=CFG005,
                    path=path_str,
                    field=f"env.{key}",
                    message=f"invalid value for `env.{key}`",
                    hint="expected a scalar value",
                )
            )


def _validate_checks_block(
    raw: dict[str, Any],
    path_str: str,
    errors: list[ValidationError],
) -> None:
    """Validate the ``checks`` nested mapping."""
    if "checks" not in raw or raw["checks"] is None:
        return
    checks = raw["checks"]
    if not isinstance(checks, dict):
        errors.append(
            ValidationError(
                code=CFG009,
                path=path_str,
                field="checks",
                message="`checks` must be a mapping",
            )
        )
        return

    for key in sorted(checks.keys(), key=str):
        if key not in ALLOWED_CHECKS_KEYS:
            errors.append(
                ValidationError(
                    code=CFG004,
                    path=path_str,
                    field=f"checks.{key}",
                    message=f"unknown key `checks.{key}`",
                    hint=_suggest_key(str(key), ALLOWED_CHECKS_KEYS),
                )
            )

    disabled = checks.get("disabled")
    if disabled is None:
        return
    if not isinstance(disabled, list) or not all(isinstance(item, str) for item in disabled):
        errors.append(
            ValidationError(
                code=CFG005,
                path=path_str,
                field="checks.disabled",
                message="invalid type for `checks.disabled`",
                hint="expected a list of strings",
            )
        )
        return
    for check_id in disabled:
        if check_id.strip().upper() not in ALL_CHECK_IDS:
            errors.append(
                ValidationError(
                    code=CFG006,
                    path=path_str,
                    field="checks.disabled",
                    message=f"unknown check `{check_id}`",
                    hint=_suggest_key(check_id.strip().upper(), frozenset(ALL_CHECK_IDS)),
                )
            )


def _unknown_stage_error(path_str: str, field_name: str, stage: object) -> ValidationError:
    hint = _suggest_key(str(stage), frozenset(CANONICAL_STAGES))
    return ValidationError(
        code=CFG008,
        path=path_str,
        field=field_name,
        message=f"unknown stage `{stage}`",
        hint=hint or f"expected one of: {', '.join(CANONICAL_STAGES)}",
    )


def _suggest_key(key: str, allowed: frozenset[str]) -> str:
    """Return a did-you-mean hint for a misspelled key, or an empty string."""
    matches = difflib.get_close_matches(key, sorted(allowed), n=1, cutoff=0.6)
    if matches:
        return f"did you mean `{matches[0]}`?"
    return ""
