"""Shared pytest fixtures for repository-local test data."""

from __future__ import annotations

import shutil
from collections.abc import Callable
from pathlib import Path

import pytest


@pytest.fixture(scope="session")
def fixtures_root() -> Path:
    """Return root directory for test fixtures."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture(scope="session")
def workspace_root(fixtures_root: Path) -> Path:
    """Return the fixture workspace holding a clean and a drifted skill."""
    return fixtures_root / "workspace"


@pytest.fixture()
def workspace_copy(workspace_root: Path, tmp_path: Path) -> Path:
    """Return a writable copy of the fixture workspace."""
    target = tmp_path / "workspace"
    shutil.copytree(workspace_root, target)
    return target


@pytest.fixture()
def write_skill(tmp_path: Path) -> Callable[..., Path]:
    """Return a helper that writes a SKILL.md (and optional README.md) and returns its path."""

    def _write(content: str, *, readme: str | None = None, folder: str = "skill") -> Path:
        skill_dir = tmp_path / folder
        skill_dir.mkdir(parents=True, exist_ok=True)
        skill_md = skill_dir / "SKILL.md"
        skill_md.write_text(content, encoding="utf-8")
        if readme is not None:
            (skill_dir / "README.md").write_text(readme, encoding="utf-8")
        return skill_md

    return _write

