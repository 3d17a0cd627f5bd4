"""
Progress and issue reporting.

ProgressReporter is the rendering sink (console, memory, ...).
IssueReporter is the single path through which a norm reports an
issue and, outside dry-run mode, applies the matching fix.
"""

from __future__ import annotations

import logging
import sys
from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import datetime
from typing import TextIO

from pdfnorm.models import FixRecord, Issue

logger = logging.getLogger(__name__)


class ProgressReporter(ABC):
    """Abstract sink for progress, issue and fix messages."""

    @abstractmethod
    def report_progress(self, current: int, total: int, file_name: str) -> None:
        pass

    @abstractmethod
    def report_issue(self, file_name: str, message: str) -> None:
        pass

    @abstractmethod
    def report_fix(self, file_name: str, message: str) -> None:
        pass


class ConsoleProgressReporter(ProgressReporter):
    """Timestamped lines on a text stream (stdout by default).

    Example output:
        [14:02:11] 1/3 annual-report
        [14:02:11] annual-report PDF title 'Draft ' can be trimmed.
        [14:02:11] annual-report   -> Fix by trimming the title to 'Draft'
    """

    def __init__(self, stream: TextIO | None = None):
        self.stream = stream

    def _write(self, text: str) -> None:
        stream = self.stream or sys.stdout
        stamp = datetime.now().strftime("%H:%M:%S")
        print(f"[{stamp}] {text}", file=stream)

    def report_progress(self, current: int, total: int, file_name: str) -> None:
        self._write(f"{current}/{total} {file_name}")

    def report_issue(self, file_name: str, message: str) -> None:
        self._write(f"{file_name} {message}")

    def report_fix(self, file_name: str, message: str) -> None:
        self._write(f"{file_name}   -> {message}")


class CollectingProgressReporter(ProgressReporter):
    """Keeps every message in memory as (kind, file_name, message)."""

    def __init__(self) -> None:
        self.messages: list[tuple[str, str, str]] = []

    def report_progress(self, current: int, total: int, file_name: str) -> None:
        self.messages.append(("progress", file_name, f"{current}/{total}"))

    def report_issue(self, file_name: str, message: str) -> None:
        self.messages.append(("issue", file_name, message))

    def report_fix(self, file_name: str, message: str) -> None:
        self.messages.append(("fix", file_name, message))

    @property
    def issues(self) -> list[Issue]:
        return [Issue(name, msg) for kind, name, msg in self.messages if kind == "issue"]

    @property
    def fixes(self) -> list[str]:
        return [msg for kind, _name, msg in self.messages if kind == "fix"]


class IssueReporter:
    """Describe-now, apply-later-unless-dry-run.

    Usage:
        reporter.report(name, "PDF title is empty.")
        reporter.report_and_fix(
            name,
            "PDF title ' x' can be trimmed.",
            "Fix by trimming the title to 'x'",
            lambda: xmp_set_title("x"),
            fix_records,
            dry_run,
        )
    """

    def __init__(self, progress_reporter: ProgressReporter):
        self.progress_reporter = progress_reporter

    def report(self, document: str, issue_message: str) -> None:
        """Report an issue that has no generic fix."""
        logger.debug("%s: issue: %s", document, issue_message)
        self.progress_reporter.report_issue(document, issue_message)

    def report_and_fix(
        self,
        document: str,
        issue_message: str,
        fix_message: str,
        fix_action: Callable[[], None],
        fix_records: list[FixRecord],
        dry_run: bool,
    ) -> None:
        """Report an issue with its fix; run the fix and record it unless dry-run.

        The messages are identical in both modes, so a dry run previews
        exactly what a live run announces.
        """
        logger.debug("%s: issue: %s", document, issue_message)
        self.progress_reporter.report_issue(document, issue_message)
        self.progress_reporter.report_fix(document, fix_message)

        if dry_run:
            return

        fix_records.append(FixRecord(issue_message))
        fix_action()
        logger.debug("%s: fixed: %s", document, fix_message)
