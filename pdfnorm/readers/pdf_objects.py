"""
Codec for PDF destination arrays.

PyMuPDF's xref_get_key() hands back arrays as PDF source text, e.g.
``[12 0 R/XYZ 0 792 null]``. The norms work on plain Python lists:

    PageRef(12)  -> indirect reference
    "XYZ"        -> name (without the leading slash)
    0, 792.5     -> numbers
    None         -> null

Anything that is not one of these (strings, nested arrays or
dictionaries) makes the array unparseable; callers treat that as a
malformed destination.
"""

from __future__ import annotations

import re

from pdfnorm.models import PageRef

_TOKEN = re.compile(
    r"""
    (?P<ref>\d+)\s+(?P<gen>\d+)\s+R(?![A-Za-z0-9])
    | /(?P<name>[^\s/\[\]()<>{}%]*)
    | (?P<num>[+-]?(?:\d+\.\d*|\.\d+|\d+))
    | (?P<kw>null|true|false)
    | (?P<ws>\s+)
    """,
    re.VERBOSE,
)

_KEYWORDS = {"null": None, "true": True, "false": False}


def parse_array(text: str) -> list | None:
    """Parse a flat PDF array into a Python list, or None if it is not one."""
    text = text.strip()
    if not (text.startswith("[") and text.endswith("]")):
        return None

    body = text[1:-1]
    items: list = []
    pos = 0
    while pos < len(body):
        match = _TOKEN.match(body, pos)
        if match is None:
            return None
        pos = match.end()

        if match.group("ref") is not None:
            items.append(PageRef(int(match.group("ref")), int(match.group("gen"))))
        elif match.group("name") is not None:
            items.append(match.group("name"))
        elif match.group("num") is not None:
            raw = match.group("num")
            items.append(float(raw) if "." in raw else int(raw))
        elif match.group("kw") is not None:
            items.append(_KEYWORDS[match.group("kw")])

    return items


def format_value(value) -> str:
    """Render one list item as PDF source."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, PageRef):
        return str(value)
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return f"{value:.6f}".rstrip("0").rstrip(".")
    if isinstance(value, str):
        return f"/{value}"
    raise TypeError(f"Cannot render {value!r} as a PDF array item")


def format_array(items: list) -> str:
    """Render a Python list as a PDF array."""
    return "[" + " ".join(format_value(item) for item in items) + "]"


def parse_name(text: str) -> str | None:
    """``/UseOutlines`` -> ``UseOutlines``."""
    text = text.strip()
    if text.startswith("/"):
        return text[1:]
    return None


def parse_xref(text: str) -> int | None:
    """``12 0 R`` -> 12."""
    match = re.fullmatch(r"\s*(\d+)\s+\d+\s+R\s*", text)
    return int(match.group(1)) if match else None
