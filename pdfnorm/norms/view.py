"""
View norm: initial view settings in the document catalog.

Four independent checks, always run in this order:

1. ViewerPreferences /DisplayDocTitle   (default: true)
2. /PageMode                            (default: UseOutlines)
3. /PageLayout                          (default: TwoPageRight)
4. /OpenAction destination              (default: page 1, Fit)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pdfnorm.norms.base import Norm
from pdfnorm.norms.canonical import (
    FIT,
    canonicalize_destination,
    describe_zoom,
    target_open_page,
    target_page_layout,
    target_page_mode,
)

if TYPE_CHECKING:
    from pdfnorm.models import FixRecord
    from pdfnorm.readers.pdf_document import PdfDocument

logger = logging.getLogger(__name__)


class ViewNorm(Norm):
    """Normalize viewer preferences, page mode, page layout and open action."""

    name = "view"

    def normalize(
        self,
        document: PdfDocument,
        name: str,
        dry_run: bool,
        fix_records: list[FixRecord],
    ) -> None:
        self._normalize_display_doc_title(document, name, dry_run, fix_records)
        self._normalize_page_mode(document, name, dry_run, fix_records)
        self._normalize_page_layout(document, name, dry_run, fix_records)
        self._normalize_open_action(document, name, dry_run, fix_records)

    def _normalize_display_doc_title(
        self, document: PdfDocument, name: str, dry_run: bool, fix_records: list[FixRecord]
    ) -> None:
        if not document.has_viewer_preferences():
            self.issue_reporter.report_and_fix(
                name,
                "Display document title is set false because view preferences is null.",
                "Fix by creating view preferences and setting display document title to true.",
                document.create_viewer_preferences,
                fix_records,
                dry_run,
            )
            # Compare against the preferences as the fix creates them, so a
            # dry run announces the same follow-up fix as a live run.
            display_doc_title = True
        else:
            display_doc_title = bool(document.get_display_doc_title())

        target = True
        if self.config and self.config.display_doc_title is not None:
            target = self.config.display_doc_title

        if display_doc_title != target:
            self.issue_reporter.report_and_fix(
                name,
                f"Display document title is set to {display_doc_title}.",
                f"Fix by setting display document title to {target}.",
                lambda: document.set_display_doc_title(target),
                fix_records,
                dry_run,
            )

    def _normalize_page_mode(
        self, document: PdfDocument, name: str, dry_run: bool, fix_records: list[FixRecord]
    ) -> None:
        page_mode = document.get_page_mode()
        target = target_page_mode(self.config.page_mode if self.config else None)

        if page_mode != target:
            self.issue_reporter.report_and_fix(
                name,
                f"In initial view, page mode is not set to {target}, but {page_mode}.",
                f"Fix by setting the page mode to {target}.",
                lambda: document.set_page_mode(target),
                fix_records,
                dry_run,
            )

    def _normalize_page_layout(
        self, document: PdfDocument, name: str, dry_run: bool, fix_records: list[FixRecord]
    ) -> None:
        page_layout = document.get_page_layout()
        target = target_page_layout(self.config.page_layout if self.config else None)

        if page_layout != target:
            self.issue_reporter.report_and_fix(
                name,
                f"In initial view, page layout is not set to {target}, but {page_layout}.",
                f"Fix by setting the page layout to {target}.",
                lambda: document.set_page_layout(target),
                fix_records,
                dry_run,
            )

    def _normalize_open_action(
        self, document: PdfDocument, name: str, dry_run: bool, fix_records: list[FixRecord]
    ) -> None:
        requested = self.config.open_to_page if self.config else None
        target_page = target_open_page(requested, document.page_count)
        if requested is not None and target_page != requested:
            logger.debug(
                "%s: open-to-page %d outside 1..%d, using page %d",
                name,
                requested,
                document.page_count,
                target_page,
            )

        if not document.has_open_action():
            self.issue_reporter.report_and_fix(
                name,
                "PDF does not have an open action set.",
                f"Fix by creating open action to page {target_page} with Fit zoom.",
                lambda: document.create_open_action([document.page_ref(target_page), FIT]),
                fix_records,
                dry_run,
            )
            return

        dest = document.get_open_action_destination()
        if dest is None or len(dest) < 2:
            self.issue_reporter.report(name, "PDF open action destination is invalid.")
            return

        page_number = document.page_number(dest[0])
        if page_number is None:
            self.issue_reporter.report(name, "PDF open action page reference is invalid.")
            return

        if page_number != target_page:

            def set_page() -> None:
                dest[0] = document.page_ref(target_page)
                document.set_open_action_destination(dest)

            self.issue_reporter.report_and_fix(
                name,
                f"In initial view, page number is not set to {target_page}, but {page_number}.",
                f"Fix by setting the page number to {target_page}.",
                set_page,
                fix_records,
                dry_run,
            )

        zoom = dest[1]
        if zoom != FIT:

            def set_zoom() -> None:
                canonicalize_destination(dest, FIT)
                document.set_open_action_destination(dest)

            self.issue_reporter.report_and_fix(
                name,
                f"PDF open destination is not valid. Expected: {FIT}, actual: {zoom}",
                f'Fix by updating the location to "{describe_zoom(FIT)}".',
                set_zoom,
                fix_records,
                dry_run,
            )
