"""
Pytest configuration and fixtures for pdfnorm tests.

Unit tests drive the norms through FakeDocument, an in-memory stand-in
for PdfDocument with the same accessors. Integration tests build real
PDFs with PyMuPDF (see make_pdf).
"""

from __future__ import annotations

import itertools
from pathlib import Path

import fitz
import pytest

from pdfnorm.models import PageRef
from pdfnorm.readers.xmp import XmpMetadata
from pdfnorm.reporting import CollectingProgressReporter, IssueReporter

_xrefs = itertools.count(1000)


def build_xmp(title: str | None = None, authors: list[str] | None = None) -> str:
    """Serialized XMP packet with the given title and authors."""
    xmp = XmpMetadata.empty()
    if title is not None:
        xmp.title = title
    for author in authors or []:
        xmp.append_author(author)
    return xmp.serialize()


class FakeOutlineItem:
    """In-memory bookmark with the OutlineItem accessors."""

    def __init__(self, title: str, destination=None, children=None):
        self.xref = next(_xrefs)
        self.title = title
        self.destination = destination
        self._children = list(children or [])
        self.destination_writes = 0

    def set_title(self, title: str) -> None:
        self.title = title

    def set_destination(self, destination: list) -> None:
        self.destination = list(destination)
        self.destination_writes += 1

    def children(self) -> list[FakeOutlineItem]:
        return list(self._children)


class FakeDocument:
    """In-memory document with the PdfDocument accessors.

    Page n is referenced by PageRef(100 + n). Arrays handed out are
    copies, so a fix that forgets to write back is visible in tests.
    """

    def __init__(
        self,
        page_count: int = 3,
        xmp: str = "",
        display_doc_title: bool | None = None,
        has_viewer_preferences: bool = False,
        page_mode: str | None = None,
        page_layout: str | None = None,
        open_action=None,
        outline: list[FakeOutlineItem] | None = None,
        named: dict[str, int] | None = None,
    ):
        self.page_count = page_count
        self.xmp = xmp
        self.viewer_preferences = (
            {"DisplayDocTitle": display_doc_title} if has_viewer_preferences else None
        )
        self.page_mode = page_mode
        self.page_layout = page_layout
        self.open_action = open_action  # None, a destination list, or any non-list
        self.outline = list(outline or [])
        self.named = dict(named or {})
        self.xmp_writes = 0

    # pages
    def page_ref(self, page_number: int) -> PageRef:
        return PageRef(100 + page_number)

    def page_number(self, ref) -> int | None:
        if isinstance(ref, PageRef) and 1 <= ref.xref - 100 <= self.page_count:
            return ref.xref - 100
        return None

    # metadata
    def get_xmp_metadata(self) -> XmpMetadata:
        return XmpMetadata.parse(self.xmp)

    def set_xmp_metadata(self, xmp: XmpMetadata) -> None:
        self.xmp = xmp.serialize()
        self.xmp_writes += 1

    # catalog
    def has_viewer_preferences(self) -> bool:
        return self.viewer_preferences is not None

    def create_viewer_preferences(self) -> None:
        self.viewer_preferences = {"DisplayDocTitle": True}

    def get_display_doc_title(self) -> bool | None:
        if self.viewer_preferences is None:
            return None
        return self.viewer_preferences.get("DisplayDocTitle")

    def set_display_doc_title(self, value: bool) -> None:
        if self.viewer_preferences is None:
            self.create_viewer_preferences()
        self.viewer_preferences["DisplayDocTitle"] = value

    def get_page_mode(self) -> str | None:
        return self.page_mode

    def set_page_mode(self, mode: str) -> None:
        self.page_mode = mode

    def get_page_layout(self) -> str | None:
        return self.page_layout

    def set_page_layout(self, layout: str) -> None:
        self.page_layout = layout

    def has_open_action(self) -> bool:
        return self.open_action is not None

    def get_open_action_destination(self) -> list | None:
        return list(self.open_action) if isinstance(self.open_action, list) else None

    def set_open_action_destination(self, destination: list) -> None:
        self.open_action = list(destination)

    def create_open_action(self, destination: list) -> None:
        self.open_action = list(destination)

    # outline
    def outline_roots(self) -> list[FakeOutlineItem]:
        return list(self.outline)

    def named_destination_page(self, key: str) -> PageRef | None:
        if key not in self.named:
            return None
        return self.page_ref(self.named[key])


def build_canonical_document(**overrides) -> FakeDocument:
    """A document that already matches the default profile."""
    values = {
        "xmp": build_xmp("Title", ["Author"]),
        "display_doc_title": True,
        "has_viewer_preferences": True,
        "page_mode": "UseOutlines",
        "page_layout": "TwoPageRight",
        "open_action": [PageRef(101), "Fit"],
    }
    values.update(overrides)
    return FakeDocument(**values)


@pytest.fixture
def make_xmp():
    """Factory for serialized XMP packets: make_xmp(title, authors)."""
    return build_xmp


@pytest.fixture
def make_document():
    """Factory for in-memory documents, see FakeDocument."""
    return FakeDocument


@pytest.fixture
def make_bookmark():
    """Factory for in-memory bookmarks, see FakeOutlineItem."""
    return FakeOutlineItem


@pytest.fixture
def make_canonical_document():
    """Factory for documents that already match the default profile."""
    return build_canonical_document


@pytest.fixture
def progress() -> CollectingProgressReporter:
    """Progress reporter that keeps every message."""
    return CollectingProgressReporter()


@pytest.fixture
def issue_reporter(progress) -> IssueReporter:
    return IssueReporter(progress)


@pytest.fixture
def make_pdf(tmp_path):
    """Factory writing a small real PDF to tmp_path.

    Args (of the returned function):
        name: File stem.
        pages: Page count.
        toc: PyMuPDF table of contents, [[level, title, page], ...].
        xmp: XMP packet text.
        catalog: {key: PDF source} written into the document catalog.
    """

    def _make(
        name: str = "sample",
        pages: int = 3,
        toc: list | None = None,
        xmp: str | None = None,
        catalog: dict[str, str] | None = None,
    ) -> Path:
        path = tmp_path / f"{name}.pdf"
        doc = fitz.open()
        for _ in range(pages):
            doc.new_page()
        if toc:
            doc.set_toc(toc)
        if xmp:
            doc.set_xml_metadata(xmp)
        cat = doc.pdf_catalog()
        for key, value in (catalog or {}).items():
            doc.xref_set_key(cat, key, value)
        doc.save(str(path))
        doc.close()
        return path

    return _make
