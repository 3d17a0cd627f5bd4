"""
Document normalization orchestrator.

This module provides the main `normalize()` function, wiring together:
- FileService (discovery, temp files)
- PdfDocument (document access)
- the norms (metadata, view, outline), via DocumentProcessor

Documents are processed one at a time: open, run every norm, save to a
temp file, replace the original only when something was fixed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from pdfnorm.exceptions import PdfNormError
from pdfnorm.files import FileService
from pdfnorm.norms import default_norms
from pdfnorm.readers.pdf_document import PdfDocument
from pdfnorm.reporting import ConsoleProgressReporter, IssueReporter, ProgressReporter

if TYPE_CHECKING:
    from collections.abc import Iterable

    from pdfnorm.config import NormalizationConfig
    from pdfnorm.models import FixRecord
    from pdfnorm.norms.base import Norm

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════════
# Single document
# ═══════════════════════════════════════════════════════════════════════════════


class DocumentProcessor:
    """
    Runs a fixed, ordered set of norms over one document.

    Usage:
        processor = DocumentProcessor(default_norms(issue_reporter))
        processor.set_config(config)
        records = processor.process(path, temp_path, "report", dry_run=False)
    """

    def __init__(self, norms: list[Norm]) -> None:
        self.norms = norms

    def set_config(self, config: NormalizationConfig | None) -> None:
        for norm in self.norms:
            norm.set_config(config)

    def process(
        self,
        document_path: str | Path,
        output_path: str | Path,
        display_name: str,
        dry_run: bool,
    ) -> list[FixRecord]:
        """
        Normalize one document.

        Args:
            document_path: The PDF to check.
            output_path: Where the fixed copy is written (live runs with fixes only).
            display_name: Name used in messages and for the {file_name} token.
            dry_run: Report only; never touch the document or the output path.

        Returns:
            The fixes applied, in order. Empty in dry-run mode.

        Raises:
            DocumentAccessError: If the document can't be opened or saved.
        """
        fix_records: list[FixRecord] = []

        with PdfDocument.open(document_path) as document:
            for norm in self.norms:
                norm.normalize(document, display_name, dry_run, fix_records)

            if not dry_run and fix_records:
                document.save(output_path)

        return fix_records


# ═══════════════════════════════════════════════════════════════════════════════
# Batch
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass
class FileResult:
    """Outcome for one document of a batch."""

    path: Path
    fix_records: list[FixRecord] = field(default_factory=list)
    error: Exception | None = None

    @property
    def modified(self) -> bool:
        return self.error is None and bool(self.fix_records)


class NormalizationService:
    """Normalizes a list of documents, one after the other.

    A document that can't be read or written is logged and skipped;
    the rest of the batch still runs.
    """

    def __init__(
        self,
        processor: DocumentProcessor,
        progress_reporter: ProgressReporter,
        file_service: FileService | None = None,
    ) -> None:
        self.processor = processor
        self.progress_reporter = progress_reporter
        self.file_service = file_service or FileService()

    def normalize_all(
        self,
        paths: list[Path],
        dry_run: bool,
        config: NormalizationConfig | None = None,
    ) -> list[FileResult]:
        self.processor.set_config(config)

        results: list[FileResult] = []
        total = len(paths)

        for current, path in enumerate(paths, start=1):
            path = Path(path)
            name = path.stem
            self.progress_reporter.report_progress(current, total, name)

            result = FileResult(path=path)
            temp_path: Path | None = None
            try:
                temp_path = self.file_service.create_temp_file_path(path)
                result.fix_records = self.processor.process(path, temp_path, name, dry_run)
                if not dry_run and result.fix_records:
                    self.file_service.move_temp_to_original(temp_path, path)
                    logger.info("%s: applied %d fixes", path, len(result.fix_records))
            except (PdfNormError, OSError) as e:
                logger.error("Failed to normalize %s: %s", path, e)
                result.fix_records = []
                result.error = e
            finally:
                if temp_path is not None:
                    self.file_service.delete_temp_file(temp_path)

            results.append(result)

        return results


# ═══════════════════════════════════════════════════════════════════════════════
# Public API
# ═══════════════════════════════════════════════════════════════════════════════


def normalize(
    paths: Iterable[str | Path],
    config: NormalizationConfig | None = None,
    dry_run: bool = False,
    reporter: ProgressReporter | None = None,
) -> list[FileResult]:
    """
    Normalize PDF files in place.

    Args:
        paths: PDF files and/or directories (top-level PDFs only).
        config: Overrides for the canonical profile (defaults if None).
        dry_run: Report issues and intended fixes without changing any file.
        reporter: Where messages go (console if None).

    Returns:
        One FileResult per document, in processing order.

    Example:
        >>> results = normalize(["reports/"], NormalizationConfig(author="A. Smith"))
        >>> sum(len(r.fix_records) for r in results)
        12
    """
    reporter = reporter or ConsoleProgressReporter()
    file_service = FileService()
    processor = DocumentProcessor(default_norms(IssueReporter(reporter)))
    service = NormalizationService(processor, reporter, file_service)
    return service.normalize_all(file_service.get_pdf_paths(paths), dry_run, config)
