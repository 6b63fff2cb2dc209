"""Canonical verification stages, default commands, and recognition patterns."""

from __future__ import annotations

import re
from re import Pattern

STAGE_FORMAT: str = "format"
STAGE_LINT: str = "lint"
STAGE_TEST: str = "test"
STAGE_BUILD: str = "build"
STAGE_DOC: str = "doc"
STAGE_LICENSE: str = "license"
STAGE_AUDIT: str = "audit"

# Order is the execution order.
CANONICAL_STAGES: tuple[str, ...] = (
    STAGE_FORMAT,
    STAGE_LINT,
    STAGE_TEST,
    STAGE_BUILD,
    STAGE_DOC,
    STAGE_LICENSE,
    STAGE_AUDIT,
)
VALID_STAGES: frozenset[str] = frozenset(CANONICAL_STAGES)

STAGE_TITLES: dict[str, str] = {
    STAGE_FORMAT: "Format check",
    STAGE_LINT: "Lint (deny warnings)",
    STAGE_TEST: "Tests",
    STAGE_BUILD: "Optimized build",
    STAGE_DOC: "Documentation",
    STAGE_LICENSE: "License policy",
    STAGE_AUDIT: "Vulnerability audit",
}

DEFAULT_STAGE_COMMANDS: dict[str, str] = {
    STAGE_FORMAT: "cargo fmt --all -- --check",
    STAGE_LINT: "cargo clippy --all-targets --all-features -- -D warnings",
    STAGE_TEST: "cargo test --all-features",
    STAGE_BUILD: "cargo build --release",
    STAGE_DOC: "cargo doc --no-deps",
    STAGE_LICENSE: "cargo deny check licenses",
    STAGE_AUDIT: "cargo audit",
}

# Checked in canonical order; first matching stage wins.
STAGE_PATTERNS: dict[str, tuple[Pattern[str], ...]] = {
    STAGE_FORMAT: (
        re.compile(r"\bcargo\s+(?:\+\S+\s+)?fmt\b"),
        re.compile(r"\brustfmt\b"),
        re.compile(r"\bruff\s+format\b"),
        re.compile(r"\bblack\b"),
        re.compile(r"\bprettier\b"),
        re.compile(r"\bgofmt\b"),
        re.compile(r"\bclang-format\b"),
    ),
    STAGE_LINT: (
        re.compile(r"\bcargo\s+(?:\+\S+\s+)?clippy\b"),
        re.compile(r"\bruff(?:\s+check)?\b"),
        re.compile(r"\bflake8\b"),
        re.compile(r"\bpylint\b"),
        re.compile(r"\beslint\b"),
        re.compile(r"\bgolangci-lint\b"),
        re.compile(r"\bgo\s+vet\b"),
    ),
    STAGE_TEST: (
        re.compile(r"\bcargo\s+(?:\+\S+\s+)?(?:test|nextest)\b"),
        re.compile(r"\bpytest\b"),
        re.compile(r"\bgo\s+test\b"),
        re.compile(r"\b(?:npm|yarn|pnpm)\s+(?:run\s+)?test\b"),
    ),
    STAGE_BUILD: (
        re.compile(r"\bcargo\s+(?:\+\S+\s+)?build\b"),
        re.compile(r"\bgo\s+build\b"),
        re.compile(r"\bpython\s+-m\s+build\b"),
        re.compile(r"\b(?:npm|yarn|pnpm)\s+(?:run\s+)?build\b"),
    ),
    STAGE_DOC: (
        re.compile(r"\bcargo\s+(?:\+\S+\s+)?doc\b"),
        re.compile(r"\bsphinx-build\b"),
        re.compile(r"\bmkdocs\s+build\b"),
        re.compile(r"\bpdoc\b"),
    ),
    STAGE_LICENSE: (
        re.compile(r"\bcargo\s+deny\b"),
        re.compile(r"\bpip-licenses\b"),
        re.compile(r"\blicense-checker\b"),
    ),
    STAGE_AUDIT: (
        re.compile(r"\bcargo\s+audit\b"),
        re.compile(r"\bpip-audit\b"),
        re.compile(r"\b(?:npm|yarn|pnpm)\s+audit\b"),
        re.compile(r"\bgovulncheck\b"),
    ),
}

DENY_WARNINGS_MARKERS: tuple[Pattern[str], ...] = (
    re.compile(r"(?:^|\s)-D\s*warnings\b"),
    re.compile(r"(?:^|\s)--deny[=\s]+warnings\b"),
    re.compile(r"(?:^|\s)--max-warnings[=\s]+0\b"),
    re.compile(r"(?:^|\s)RUSTFLAGS=[\"']?[^\"']*-D\s*warnings\b"),
)

OPTIMIZED_BUILD_MARKERS: tuple[Pattern[str], ...] = (
    re.compile(r"(?:^|\s)--release(?:\s|$)"),
    re.compile(r"(?:^|\s)--profile[=\s]+release(?:\s|$)"),
    re.compile(r"(?:^|\s)-O(?:\s|$)"),
)

EXIT_CODE_COMMAND_NOT_FOUND: int = 127
EXIT_CODE_CANNOT_EXECUTE: int = 126
OUTPUT_TAIL_LINES: int = 40

# A leading NAME=value word sets a variable for the command, as in a shell.
ENV_ASSIGNMENT_PATTERN: Pattern[str] = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*=")
