"""
Metadata norm: XMP title and authors.

With a configured title template or author, the configured value wins
and whitespace checks are skipped for that property. Without one, the
property is only checked for emptiness and stray whitespace.

The XMP MetadataDate is refreshed on every run so that viewers prefer
the XMP packet over the legacy Info dictionary. That refresh is not a
fix and is never recorded.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from functools import partial
from typing import TYPE_CHECKING

from pdfnorm.norms.base import Norm
from pdfnorm.text import can_be_trimmed, trim

if TYPE_CHECKING:
    from pdfnorm.models import FixRecord
    from pdfnorm.readers.pdf_document import PdfDocument
    from pdfnorm.readers.xmp import XmpMetadata

logger = logging.getLogger(__name__)


class MetadataNorm(Norm):
    """Normalize dc:title and dc:creator."""

    name = "metadata"

    def normalize(
        self,
        document: PdfDocument,
        name: str,
        dry_run: bool,
        fix_records: list[FixRecord],
    ) -> None:
        xmp = document.get_xmp_metadata()

        self._normalize_title(xmp, name, dry_run, fix_records)
        self._normalize_authors(xmp, name, dry_run, fix_records)

        xmp.set_metadata_date(datetime.now(timezone.utc).astimezone())
        document.set_xmp_metadata(xmp)
        logger.debug("%s: refreshed XMP MetadataDate", name)

    def _normalize_title(
        self, xmp: XmpMetadata, name: str, dry_run: bool, fix_records: list[FixRecord]
    ) -> None:
        title = xmp.title
        expected = self.config.title_for(name) if self.config else None

        if expected is not None and title != expected:

            def set_title() -> None:
                xmp.title = expected

            self.issue_reporter.report_and_fix(
                name,
                f"PDF title '{title}' doesn't match config.",
                f"Fix by setting title to '{expected}'",
                set_title,
                fix_records,
                dry_run,
            )
            return

        if not title:
            self.issue_reporter.report(name, "PDF title is empty.")

        if can_be_trimmed(title):
            trimmed = trim(title)

            def trim_title() -> None:
                xmp.title = trimmed

            self.issue_reporter.report_and_fix(
                name,
                f"PDF title '{title}' can be trimmed.",
                f"Fix by trimming the title to '{trimmed}'",
                trim_title,
                fix_records,
                dry_run,
            )

    def _normalize_authors(
        self, xmp: XmpMetadata, name: str, dry_run: bool, fix_records: list[FixRecord]
    ) -> None:
        authors = xmp.authors
        expected = self.config.author if self.config else None

        if expected:
            current = authors[0] if authors else ""
            if current != expected:

                def replace_authors() -> None:
                    for index in range(len(authors), 0, -1):
                        xmp.delete_author(index)
                    xmp.append_author(expected)

                self.issue_reporter.report_and_fix(
                    name,
                    f"PDF author '{current}' doesn't match config.",
                    f"Fix by setting author to '{expected}'",
                    replace_authors,
                    fix_records,
                    dry_run,
                )
                return

        if not authors:
            self.issue_reporter.report(name, "PDF does not have an author.")

        for index, author in enumerate(authors, start=1):
            if not author:
                self.issue_reporter.report(name, f"PDF author [{index}] is empty.")

            if can_be_trimmed(author):
                trimmed = trim(author)
                self.issue_reporter.report_and_fix(
                    name,
                    f"PDF author [{index}] '{author}' can be trimmed.",
                    f"Fix by trimming author [{index}] to '{trimmed}'",
                    partial(xmp.set_author, index, trimmed),
                    fix_records,
                    dry_run,
                )
