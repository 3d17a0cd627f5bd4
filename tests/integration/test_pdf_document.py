"""
Integration tests for PdfDocument against real PDFs built with PyMuPDF.
"""

import fitz
import pytest

from pdfnorm.exceptions import DocumentAccessError
from pdfnorm.models import PageRef
from pdfnorm.readers.pdf_document import PdfDocument
from pdfnorm.readers.xmp import XmpMetadata

TOC = [
    [1, "A", 1],
    [2, "A1", 2],
    [1, "B", 3],
]


def first_outline_item(doc: fitz.Document) -> int:
    _, outlines = doc.xref_get_key(doc.pdf_catalog(), "Outlines")
    _, first = doc.xref_get_key(int(outlines.split()[0]), "First")
    return int(first.split()[0])


def add_array_object(doc: fitz.Document, source: str) -> int:
    """Store an array as its own indirect object and return its xref."""
    xref = doc.get_new_xref()
    doc.update_object(xref, source)
    return xref


class TestOpen:
    def test_missing_file(self, tmp_path):
        with pytest.raises(DocumentAccessError, match="not found"):
            PdfDocument.open(tmp_path / "missing.pdf")

    def test_not_a_pdf(self, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_text("plain text")

        with pytest.raises(DocumentAccessError):
            PdfDocument.open(path)

    def test_context_manager_closes(self, make_pdf):
        with PdfDocument.open(make_pdf()) as document:
            assert document.page_count == 3
        assert document._doc.is_closed


class TestPages:
    def test_page_refs_round_trip(self, make_pdf):
        with PdfDocument.open(make_pdf()) as document:
            refs = [document.page_ref(n) for n in range(1, 4)]

            assert len(set(refs)) == 3
            assert [document.page_number(ref) for ref in refs] == [1, 2, 3]
            assert document.page_number(PageRef(99999)) is None
            assert document.page_number(0) is None


class TestCatalog:
    def test_fresh_document_has_no_view_settings(self, make_pdf):
        with PdfDocument.open(make_pdf()) as document:
            assert not document.has_viewer_preferences()
            assert document.get_display_doc_title() is None
            assert document.get_page_layout() is None
            assert not document.has_open_action()

    def test_existing_values_are_read(self, make_pdf):
        path = make_pdf(
            catalog={
                "ViewerPreferences": "<</DisplayDocTitle false>>",
                "PageMode": "/UseThumbs",
                "PageLayout": "/OneColumn",
            }
        )

        with PdfDocument.open(path) as document:
            assert document.has_viewer_preferences()
            assert document.get_display_doc_title() is False
            assert document.get_page_mode() == "UseThumbs"
            assert document.get_page_layout() == "OneColumn"

    def test_writes_survive_save(self, make_pdf, tmp_path):
        out = tmp_path / "out.pdf"
        with PdfDocument.open(make_pdf()) as document:
            document.set_display_doc_title(True)
            document.set_page_mode("UseOutlines")
            document.set_page_layout("TwoPageRight")
            document.create_open_action([document.page_ref(2), "Fit"])
            document.save(out)

        with PdfDocument.open(out) as document:
            assert document.get_display_doc_title() is True
            assert document.get_page_mode() == "UseOutlines"
            assert document.get_page_layout() == "TwoPageRight"
            assert document.get_open_action_destination() == [document.page_ref(2), "Fit"]

    def test_open_action_destination_is_rewritten_in_place(self, make_pdf):
        with PdfDocument.open(make_pdf()) as document:
            document.create_open_action([document.page_ref(1), "XYZ", 0, 792, 0])
            document.set_open_action_destination([document.page_ref(3), "Fit"])

            assert document.get_open_action_destination() == [document.page_ref(3), "Fit"]
            assert document.get_key(document._catalog, "OpenAction/S") == ("name", "/GoTo")

    def test_bare_array_open_action(self, make_pdf):
        with PdfDocument.open(make_pdf()) as document:
            ref = document.page_ref(2)
            document.set_key(document._catalog, "OpenAction", f"[{ref} /FitH 500]")

            assert document.has_open_action()
            assert document.get_open_action_destination() == [ref, "FitH", 500]


class TestMetadata:
    def test_missing_packet_reads_as_empty(self, make_pdf):
        with PdfDocument.open(make_pdf()) as document:
            xmp = document.get_xmp_metadata()
            assert xmp.title == ""
            assert xmp.authors == []

    def test_packet_round_trip(self, make_pdf, make_xmp, tmp_path):
        out = tmp_path / "out.pdf"
        with PdfDocument.open(make_pdf(xmp=make_xmp(" Title ", ["Ada"]))) as document:
            xmp = document.get_xmp_metadata()
            assert xmp.title == " Title "
            xmp.title = "Title"
            document.set_xmp_metadata(xmp)
            document.save(out)

        with PdfDocument.open(out) as document:
            assert document.get_xmp_metadata().title == "Title"
            assert document.get_xmp_metadata().authors == ["Ada"]

    def test_unreadable_packet_is_replaced(self, make_pdf, caplog):
        with PdfDocument.open(make_pdf(xmp="<x:xmpmeta><broken>")) as document:
            xmp = document.get_xmp_metadata()

        assert isinstance(xmp, XmpMetadata)
        assert xmp.title == ""
        assert "unreadable XMP" in caplog.text


class TestOutline:
    def test_no_outline(self, make_pdf):
        with PdfDocument.open(make_pdf()) as document:
            assert document.outline_roots() == []

    def test_tree_structure(self, make_pdf):
        with PdfDocument.open(make_pdf(toc=TOC)) as document:
            roots = document.outline_roots()

            assert [item.title for item in roots] == ["A", "B"]
            assert [item.title for item in roots[0].children()] == ["A1"]
            assert roots[1].children() == []

    def test_explicit_destination(self, make_pdf):
        with PdfDocument.open(make_pdf(toc=TOC)) as document:
            dest = document.outline_roots()[1].destination

            assert isinstance(dest, list)
            assert document.page_number(dest[0]) == 3

    def test_title_and_destination_writes(self, make_pdf, tmp_path):
        out = tmp_path / "out.pdf"
        with PdfDocument.open(make_pdf(toc=TOC)) as document:
            item = document.outline_roots()[0]
            item.set_title("Über A")
            item.set_destination([document.page_ref(1), "Fit"])
            document.save(out)

        with PdfDocument.open(out) as document:
            item = document.outline_roots()[0]
            assert item.title == "Über A"
            assert item.destination == [document.page_ref(1), "Fit"]

    def test_named_destination(self, tmp_path):
        path = tmp_path / "named.pdf"
        doc = fitz.open()
        for _ in range(3):
            doc.new_page()
        doc.set_toc([[1, "Chapter 3", 3]])
        page3 = doc.page_xref(2)
        doc.xref_set_key(
            doc.pdf_catalog(), "Names", f"<</Dests<</Names[(chap3)[{page3} 0 R/XYZ 0 0 0]]>>>>"
        )
        doc.xref_set_key(first_outline_item(doc), "Dest", "(chap3)")
        doc.save(str(path))
        doc.close()

        with PdfDocument.open(path) as document:
            item = document.outline_roots()[0]

            assert item.destination == "chap3"
            assert document.named_destination_page("chap3") == document.page_ref(3)
            assert document.named_destination_page("chap9") is None


class TestIndirectDestinations:
    """Destinations stored as indirect array objects (``/Dest 12 0 R``)."""

    @pytest.fixture
    def indirect_pdf(self, make_pdf, tmp_path):
        doc = fitz.open(make_pdf(toc=TOC))
        page2 = doc.page_xref(1)
        dest = add_array_object(doc, f"[{page2} 0 R/XYZ 0 0 0]")
        doc.xref_set_key(first_outline_item(doc), "Dest", f"{dest} 0 R")
        action = add_array_object(doc, f"[{page2} 0 R/FitH 500]")
        doc.xref_set_key(doc.pdf_catalog(), "OpenAction", f"{action} 0 R")
        path = tmp_path / "indirect.pdf"
        doc.save(str(path))
        doc.close()
        return path

    def test_bookmark_destination_is_resolved(self, indirect_pdf):
        with PdfDocument.open(indirect_pdf) as document:
            item = document.outline_roots()[0]
            assert item.destination == [document.page_ref(2), "XYZ", 0, 0, 0]

    def test_bookmark_destination_is_written_to_the_referenced_object(self, indirect_pdf):
        with PdfDocument.open(indirect_pdf) as document:
            item = document.outline_roots()[0]
            item.set_destination([document.page_ref(2), "Fit"])

            assert item.destination == [document.page_ref(2), "Fit"]
            assert document.get_key(item.xref, "Dest")[0] == "xref"

    def test_open_action_array_is_resolved(self, indirect_pdf):
        with PdfDocument.open(indirect_pdf) as document:
            assert document.has_open_action()
            assert document.get_open_action_destination() == [
                document.page_ref(2),
                "FitH",
                500,
            ]

    def test_open_action_array_is_written_to_the_referenced_object(self, indirect_pdf):
        with PdfDocument.open(indirect_pdf) as document:
            document.set_open_action_destination([document.page_ref(1), "Fit"])

            assert document.get_open_action_destination() == [document.page_ref(1), "Fit"]
            assert document.get_key(document._catalog, "OpenAction")[0] == "xref"
