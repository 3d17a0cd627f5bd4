"""
Normalization rules ("norms").

Each norm covers one facet of a PDF:
- MetadataNorm: XMP title and authors
- ViewNorm: viewer preferences, page mode/layout, open action
- OutlineNorm: bookmark titles and destinations

Norms run in a fixed order; default_norms() returns them in that order.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pdfnorm.norms.base import Norm
from pdfnorm.norms.canonical import (
    BOOKMARK_ZOOMS,
    PAGE_LAYOUTS,
    PAGE_MODES,
    canonicalize_destination,
    target_bookmark_zoom,
    target_open_page,
    target_page_layout,
    target_page_mode,
)
from pdfnorm.norms.metadata import MetadataNorm
from pdfnorm.norms.outline import OutlineNorm
from pdfnorm.norms.view import ViewNorm

if TYPE_CHECKING:
    from pdfnorm.reporting import IssueReporter


def default_norms(issue_reporter: IssueReporter) -> list[Norm]:
    """The standard norm set: metadata, view, outline."""
    return [
        MetadataNorm(issue_reporter),
        ViewNorm(issue_reporter),
        OutlineNorm(issue_reporter),
    ]


__all__ = [
    "Norm",
    "MetadataNorm",
    "ViewNorm",
    "OutlineNorm",
    "default_norms",
    # Canonical targets
    "PAGE_MODES",
    "PAGE_LAYOUTS",
    "BOOKMARK_ZOOMS",
    "target_page_mode",
    "target_page_layout",
    "target_bookmark_zoom",
    "target_open_page",
    "canonicalize_destination",
]
