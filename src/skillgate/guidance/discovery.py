"""Skill file discovery and naming helpers."""

from __future__ import annotations

import logging
from pathlib import Path

from skillgate.constants.discovery import README_FILENAME, SKILL_MARKDOWN_FILENAME
from skillgate.model import ParsedSkillDocument
from skillgate.utils import normalize_skill_name

logger = logging.getLogger(__name__)


def discover_skill_files(root: Path, skill_globs: tuple[str, ...], max_file_mb: int) -> list[Path]:
    """Discover SKILL.md files by configured glob patterns."""
    discovered: set[Path] = set()
    size_limit_bytes = max_file_mb * 1024 * 1024
    resolved_root = root.resolve()

    for pattern in skill_globs:
        for path in resolved_root.glob(pattern):
            if not path.is_file() or path.name != SKILL_MARKDOWN_FILENAME:
                continue
            try:
                if path.stat().st_size > size_limit_bytes:
                    logger.debug("Skipping %s: larger than %d MB", path, max_file_mb)
                    continue
            except OSError:
                continue
            discovered.add(path.resolve())

    return sorted(discovered, key=lambda path: _stable_path_key(path, resolved_root))


def find_readme(skill_path: Path) -> Path | None:
    """Return the README.md that sits next to a SKILL.md, if any."""
    candidate = skill_path.parent / README_FILENAME
    return candidate if candidate.is_file() else None


def derive_skill_name(parsed: ParsedSkillDocument) -> str:
    """Derive a stable skill name from frontmatter, falling back to the folder name."""
    frontmatter = parsed.frontmatter or {}
    declared = frontmatter.get("name")
    if isinstance(declared, str) and declared.strip():
        return normalize_skill_name(declared)
    return normalize_skill_name(parsed.file_path.resolve().parent.name)


def _stable_path_key(file_path: Path, root: Path) -> str:
    """Return a deterministic path key relative to *root* when possible."""
    try:
        return file_path.relative_to(root).as_posix()
    except ValueError:
        return file_path.as_posix()
