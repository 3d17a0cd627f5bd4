"""
Core data types shared by the norms and the document access layer.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PageRef:
    """An indirect reference to a page object (``N G R``)."""

    xref: int
    generation: int = 0

    def __str__(self) -> str:
        return f"{self.xref} {self.generation} R"


@dataclass(frozen=True)
class Issue:
    """A detected deviation from the canonical form, scoped to one document.

    Issues are handed to the progress reporter and then dropped.
    """

    document: str
    message: str


@dataclass(frozen=True)
class FixRecord:
    """Evidence that a corrective action was actually applied.

    A document's list of fix records is what decides whether
    the normalized copy replaces the original.
    """

    message: str
