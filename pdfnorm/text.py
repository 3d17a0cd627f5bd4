"""Whitespace helpers used by the metadata and outline norms."""

from __future__ import annotations

TRIM_CHARS = " \r\n"


def can_be_trimmed(target: str) -> bool:
    """True if the string carries leading/trailing spaces, CR or LF."""
    return target != target.strip(TRIM_CHARS)


def trim(target: str) -> str:
    return target.strip(TRIM_CHARS)


def escape_eol(target: str) -> str:
    """Make line breaks visible in single-line console messages."""
    return target.replace("\r", "\\r").replace("\n", "\\n")
