"""JSON and text write helpers with atomic persistence."""

from __future__ import annotations

import json
import os
import tempfile
from collections.abc import Callable
from contextlib import suppress
from pathlib import Path
from typing import TextIO


def write_json_atomic(
    *,
    path: Path,
    payload: object,
    temp_prefix: str,
    temp_suffix: str,
) -> None:
    """Persist JSON atomically by writing to a temp file then renaming."""
    _write_atomic(
        path=path,
        temp_prefix=temp_prefix,
        temp_suffix=temp_suffix,
        write=lambda handle: (json.dump(payload, handle, indent=2, sort_keys=True), handle.write("\n")),
    )


def write_text_atomic(
    *,
    path: Path,
    content: str,
    temp_prefix: str,
    temp_suffix: str,
) -> None:
    """Persist text atomically by writing to a temp file then renaming."""
    _write_atomic(
        path=path,
        temp_prefix=temp_prefix,
        temp_suffix=temp_suffix,
        write=lambda handle: handle.write(content),
    )


def _write_atomic(
    *,
    path: Path,
    temp_prefix: str,
    temp_suffix: str,
    write: Callable[[TextIO], object],
) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)

    temp_name: str | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=path.parent,
            prefix=temp_prefix,
            suffix=temp_suffix,
            delete=False,
        ) as handle:
            temp_name = handle.name
            write(handle)
    except Exception:
        if temp_name:
            with suppress(FileNotFoundError):
                Path(temp_name).unlink()
        raise

    assert temp_name is not None
    os.replace(temp_name, path)
