"""
Outline norm: bookmark titles and destinations.

Bookmarks are visited breadth-first (all top-level bookmarks, then
their children, and so on) so that fixes are reported level by level.

Each bookmark must point at an explicit destination using the target
zoom mode. Named destinations are replaced by the explicit
``[page, zoom]`` pair they resolve to.
"""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

from pdfnorm.norms.base import Norm
from pdfnorm.norms.canonical import canonicalize_destination, describe_zoom, target_bookmark_zoom
from pdfnorm.text import can_be_trimmed, escape_eol, trim

if TYPE_CHECKING:
    from pdfnorm.models import FixRecord
    from pdfnorm.readers.pdf_document import OutlineItem, PdfDocument


class OutlineNorm(Norm):
    """Normalize every bookmark of the outline tree."""

    name = "outline"

    def normalize(
        self,
        document: PdfDocument,
        name: str,
        dry_run: bool,
        fix_records: list[FixRecord],
    ) -> None:
        queue: deque[OutlineItem] = deque(document.outline_roots())
        seen: set[int] = set()

        while queue:
            bookmark = queue.popleft()
            if bookmark.xref in seen:
                continue  # malformed outline pointing back at an ancestor
            seen.add(bookmark.xref)
            self._normalize_bookmark(document, bookmark, name, dry_run, fix_records)
            queue.extend(bookmark.children())

    def _normalize_bookmark(
        self,
        document: PdfDocument,
        bookmark: OutlineItem,
        name: str,
        dry_run: bool,
        fix_records: list[FixRecord],
    ) -> None:
        title = bookmark.title
        shown = escape_eol(title)

        if can_be_trimmed(title):
            trimmed = trim(title)
            self.issue_reporter.report_and_fix(
                name,
                f"PDF bookmark title '{shown}' can be trimmed.",
                f"Fix by trimming the bookmark title to '{trimmed}'",
                lambda: bookmark.set_title(trimmed),
                fix_records,
                dry_run,
            )

        dest = bookmark.destination
        is_explicit = isinstance(dest, list) and len(dest) >= 2 and dest[1] is not None
        is_named = isinstance(dest, str)

        if not (is_explicit or is_named):
            self.issue_reporter.report(
                name, f"PDF bookmark '{shown}' does not have a valid destination."
            )
            return

        target_zoom = target_bookmark_zoom(self.config.bookmark_zoom if self.config else None)

        if is_explicit:
            self._normalize_explicit(bookmark, dest, target_zoom, shown, name, dry_run, fix_records)
        else:
            self._normalize_named(
                document, bookmark, dest, target_zoom, shown, name, dry_run, fix_records
            )

    def _normalize_explicit(
        self,
        bookmark: OutlineItem,
        dest: list,
        target_zoom: str,
        shown: str,
        name: str,
        dry_run: bool,
        fix_records: list[FixRecord],
    ) -> None:
        zoom = dest[1]
        if zoom == target_zoom:
            return

        def set_zoom() -> None:
            canonicalize_destination(dest, target_zoom)
            bookmark.set_destination(dest)

        self.issue_reporter.report_and_fix(
            name,
            f"PDF bookmark '{shown}' does not have a valid destination location. "
            f"Expected: {target_zoom}, actual: {zoom}",
            f'Fix by updating the location to "{describe_zoom(target_zoom)}".',
            set_zoom,
            fix_records,
            dry_run,
        )

    def _normalize_named(
        self,
        document: PdfDocument,
        bookmark: OutlineItem,
        key: str,
        target_zoom: str,
        shown: str,
        name: str,
        dry_run: bool,
        fix_records: list[FixRecord],
    ) -> None:
        page = document.named_destination_page(key)
        if page is None:
            self.issue_reporter.report(
                name,
                f"PDF bookmark '{shown}' has a named destination '{key}' "
                "that cannot be resolved.",
            )
            return

        # Reported even when the named target already uses the target zoom:
        # named destinations are always made explicit.
        self.issue_reporter.report_and_fix(
            name,
            f"PDF bookmark '{shown}' has a named destination.",
            "Fix by updating the destination to explicit destination.",
            lambda: bookmark.set_destination([page, target_zoom]),
            fix_records,
            dry_run,
        )
