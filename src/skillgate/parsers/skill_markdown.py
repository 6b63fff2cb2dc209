"""Parser for SKILL.md and README.md files with YAML frontmatter."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from skillgate.constants.parsing import (
    FENCED_CODE_BLOCK_PATTERN,
    FRONTMATTER_ALT_DELIMITER,
    FRONTMATTER_DELIMITER,
    HEADING_PATTERN,
    SNIPPET_MAX_LENGTH,
)
from skillgate.exceptions import SkillParseError
from skillgate.model import DocumentHeading, DocumentLine, ParsedSkillDocument


def parse_skill_markdown_file(path: Path) -> ParsedSkillDocument:
    """Parse a guidance markdown file and extract frontmatter plus line metadata."""
    try:
        raw_text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise SkillParseError(f"{path} is not valid UTF-8 text") from exc
    except OSError as exc:
        raise SkillParseError(f"Cannot read {path}: {exc}") from exc
    return parse_skill_markdown_text(raw_text, path)


def parse_skill_markdown_text(raw_text: str, path: Path) -> ParsedSkillDocument:
    """Parse already-loaded markdown text; *path* is used for messages and evidence."""
    normalized = raw_text.lstrip("\ufeff")
    lines = normalized.splitlines()

    frontmatter: dict[str, Any] | None = None
    body_lines = lines

    if lines and lines[0].strip() == FRONTMATTER_DELIMITER:
        frontmatter_end = _find_frontmatter_end(lines)
        if frontmatter_end is None:
            raise SkillParseError(f"Unterminated frontmatter block in {path}")

        frontmatter_text = "\n".join(lines[1:frontmatter_end])
        try:
            frontmatter_payload = yaml.safe_load(frontmatter_text) if frontmatter_text.strip() else None
        except yaml.YAMLError as exc:
            raise SkillParseError(f"Failed to parse frontmatter in {path}: {exc}") from exc

        if frontmatter_payload is None:
            frontmatter = None
        elif isinstance(frontmatter_payload, dict):
            frontmatter = frontmatter_payload
        else:
            raise SkillParseError(f"Frontmatter in {path} must be a YAML mapping")

        body_lines = lines[frontmatter_end + 1 :]

    parsed_lines: list[DocumentLine] = []
    headings: list[DocumentHeading] = []

    body_start = len(lines) - len(body_lines) + 1
    active_fence: str | None = None
    active_info: str | None = None
    for offset, line in enumerate(body_lines):
        index = body_start + offset
        stripped = line.strip()
        fence = _extract_fence(stripped)
        if fence is not None:
            marker, info = fence
            if active_fence is None:
                active_fence = marker
                active_info = info.lower()
            elif marker[0] == active_fence[0] and len(marker) >= len(active_fence) and not info:
                active_fence = None
                active_info = None
            continue
        if not stripped:
            continue

        if active_fence is not None:
            parsed_lines.append(
                DocumentLine(
                    line=index,
                    value=stripped,
                    snippet=_line_snippet(stripped),
                    in_code_block=True,
                    fence_info=active_info,
                    field_source="code_block",
                )
            )
            continue

        heading = HEADING_PATTERN.match(stripped)
        if heading:
            headings.append(DocumentHeading(line=index, level=len(heading.group(1)), text=heading.group(2)))
        parsed_lines.append(
            DocumentLine(
                line=index,
                value=stripped,
                snippet=_line_snippet(stripped),
                field_source="heading" if heading else "prose",
            )
        )

    return ParsedSkillDocument(
        file_path=path,
        raw_text=raw_text,
        frontmatter=frontmatter,
        body="\n".join(body_lines).strip(),
        lines=tuple(parsed_lines),
        headings=tuple(headings),
    )


def _find_frontmatter_end(lines: list[str]) -> int | None:
    for index in range(1, len(lines)):
        if lines[index].strip() in {FRONTMATTER_DELIMITER, FRONTMATTER_ALT_DELIMITER}:
            return index
    return None


def _line_snippet(line: str) -> str:
    return line[:SNIPPET_MAX_LENGTH]


def _extract_fence(line: str) -> tuple[str, str] | None:
    match = FENCED_CODE_BLOCK_PATTERN.match(line)
    if not match:
        return None
    return match.group(1), match.group(2)
