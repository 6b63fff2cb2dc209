"""Extraction of verification commands from parsed guidance documents."""

from __future__ import annotations

import logging

from skillgate.constants.parsing import (
    COMMAND_CHAIN_PATTERN,
    INLINE_CODE_PATTERN,
    LIST_ITEM_PATTERN,
    SHELL_COMMENT_CHAR,
    SHELL_FENCE_LANGUAGES,
    SHELL_PROMPT_PREFIX,
)
from skillgate.model import DocumentedCommand, DocumentLine, ParsedSkillDocument
from skillgate.pipeline.stages import classify_command

logger = logging.getLogger(__name__)


def extract_commands(parsed: ParsedSkillDocument) -> tuple[DocumentedCommand, ...]:
    """Collect candidate commands from shell fences and inline code in list items."""
    path = str(parsed.file_path)
    commands: list[DocumentedCommand] = []
    for line in parsed.lines:
        for raw in _candidate_texts(line):
            for command in _split_chain(raw):
                commands.append(
                    DocumentedCommand(
                        command=command,
                        stage=classify_command(command),
                        path=path,
                        line=line.line,
                        snippet=line.snippet,
                    )
                )
    logger.debug("Extracted %d command(s) from %s", len(commands), path)
    return tuple(commands)


def documented_pipeline(commands: tuple[DocumentedCommand, ...]) -> tuple[DocumentedCommand, ...]:
    """Return classified commands in document order."""
    return tuple(command for command in commands if command.stage is not None)


def documented_stage_order(commands: tuple[DocumentedCommand, ...]) -> tuple[str, ...]:
    """Return the stage sequence of a documented pipeline, collapsing repeats."""
    order: list[str] = []
    for command in documented_pipeline(commands):
        assert command.stage is not None
        if command.stage not in order:
            order.append(command.stage)
    return tuple(order)


def _candidate_texts(line: DocumentLine) -> list[str]:
    if line.in_code_block:
        if (line.fence_info or "") not in SHELL_FENCE_LANGUAGES:
            return []
        text = line.value
        if text.startswith(SHELL_PROMPT_PREFIX):
            text = text[len(SHELL_PROMPT_PREFIX) :]
        text = _strip_trailing_comment(text)
        return [text] if text else []

    if line.field_source == "prose" and LIST_ITEM_PATTERN.match(line.value):
        return [_strip_trailing_comment(span) for span in INLINE_CODE_PATTERN.findall(line.value)]
    return []


def _strip_trailing_comment(text: str) -> str:
    """Drop an unquoted shell comment: a ``#`` at the start of a word up to end of line."""
    quote: str | None = None
    escaped = False
    for index, char in enumerate(text):
        if escaped:
            escaped = False
        elif char == "\\" and quote != "'":
            escaped = True
        elif quote is not None:
            if char == quote:
                quote = None
        elif char in "'\"":
            quote = char
        elif char == SHELL_COMMENT_CHAR and (index == 0 or text[index - 1].isspace()):
            return text[:index].strip()
    return text.strip()


def _split_chain(text: str) -> list[str]:
    parts = [part.strip() for part in COMMAND_CHAIN_PATTERN.split(text)]
    return [part for part in parts if part]
