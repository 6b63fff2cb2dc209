"""Branding constants for docs and terminal output."""

from __future__ import annotations

BRAND_NAME: str = "SKILLGATE"
ASCII_LOGO_LINES: tuple[str, ...] = (
    ">_ SKILLGATE",
    "     // guidance checks and fail-fast verification",
)
CHECK_SUMMARY_TITLE: str = "Guidance check"
RUN_SUMMARY_TITLE: str = "Verification pipeline"
CLI_DESCRIPTION: str = "\n".join((*ASCII_LOGO_LINES, "", f"{BRAND_NAME} skill gate"))
