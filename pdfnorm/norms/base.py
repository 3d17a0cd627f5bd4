"""
Common contract for normalization rules.

A norm covers one facet of a document. It holds a reference to the
run's configuration and, for each document, reports deviations and
registers fixes through the IssueReporter. Norms never mutate a
document outside a fix action.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pdfnorm.config import NormalizationConfig
    from pdfnorm.models import FixRecord
    from pdfnorm.readers.pdf_document import PdfDocument
    from pdfnorm.reporting import IssueReporter


class Norm(ABC):
    """Abstract base for normalization rules."""

    name: str = "base"

    def __init__(self, issue_reporter: IssueReporter):
        self.issue_reporter = issue_reporter
        self.config: NormalizationConfig | None = None

    def set_config(self, config: NormalizationConfig | None) -> None:
        """Install the (read-only) configuration used by later normalize() calls."""
        self.config = config

    @abstractmethod
    def normalize(
        self,
        document: PdfDocument,
        name: str,
        dry_run: bool,
        fix_records: list[FixRecord],
    ) -> None:
        """Check one document, fixing what can be fixed.

        Must be idempotent: a second call on the result finds nothing.
        """
        pass
