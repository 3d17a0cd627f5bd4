"""
PDF document access using PyMuPDF (fitz).

Exposes the facets the norms work on, through PyMuPDF's low-level
object interface (xref_get_key / xref_set_key):

- metadata facet: the XMP packet (title, authors, metadata date)
- catalog facet: viewer preferences, page mode, page layout, open action
- outline facet: bookmark items, their titles and destinations
- name table: named destination -> page

Destination arrays cross this boundary as Python lists, see
pdfnorm.readers.pdf_objects.
"""

from __future__ import annotations

import logging
from pathlib import Path

import fitz  # PyMuPDF

from pdfnorm.exceptions import DocumentAccessError, UnsupportedFormatError
from pdfnorm.models import PageRef
from pdfnorm.readers.pdf_objects import format_array, parse_array, parse_name, parse_xref
from pdfnorm.readers.xmp import XmpMetadata

logger = logging.getLogger(__name__)


class OutlineItem:
    """One bookmark, bound to the document that owns it.

    The destination is read from /Dest, or from /A /D when the item
    carries a GoTo action instead. Either may be an indirect array.
    set_destination() writes back to the same place.
    """

    def __init__(self, document: PdfDocument, xref: int):
        self._document = document
        self.xref = xref

    def __repr__(self) -> str:
        return f"OutlineItem(xref={self.xref}, title={self.title!r})"

    @property
    def title(self) -> str:
        kind, value = self._document.get_key(self.xref, "Title")
        return value if kind == "string" else ""

    def set_title(self, title: str) -> None:
        self._document.set_key(self.xref, "Title", fitz.get_pdf_str(title))

    @property
    def destination(self) -> list | str | None:
        """Explicit array (list), named destination (str), or None."""
        key = self._destination_key()
        kind, value = self._document.get_key(self.xref, key)
        if kind == "xref":
            return self._document.get_array(self.xref, key)
        return _destination_value(kind, value)

    def set_destination(self, destination: list) -> None:
        self._document.set_array(self.xref, self._destination_key(), destination)

    def children(self) -> list[OutlineItem]:
        return self._document._linked_items(self.xref)

    def _destination_key(self) -> str:
        kind, _ = self._document.get_key(self.xref, "Dest")
        if kind != "null":
            return "Dest"
        action_kind, _ = self._document.get_key(self.xref, "A")
        if action_kind != "null":
            _, action_type = self._document.get_key(self.xref, "A/S")
            if parse_name(action_type) == "GoTo":
                return "A/D"
        return "Dest"


def _destination_value(kind: str, value: str) -> list | str | None:
    if kind == "array":
        return parse_array(value)
    if kind == "string":
        return value
    if kind == "name":
        return parse_name(value)
    return None


class PdfDocument:
    """An open PDF, with the accessors the norms need.

    Usage:
        with PdfDocument.open("/path/to/file.pdf") as doc:
            doc.get_page_mode()          # "UseOutlines" or None
            doc.outline_roots()          # [OutlineItem, ...]
            doc.save("/tmp/normalized.pdf")

    Page numbers are 1-based throughout.
    """

    def __init__(self, doc: fitz.Document, path: Path | None = None):
        self._doc = doc
        self.path = path
        self._catalog = doc.pdf_catalog()
        self._page_numbers: dict[int, int] | None = None
        self._names: dict | None = None

    @classmethod
    def open(cls, path: str | Path) -> PdfDocument:
        """Open a PDF file.

        Raises:
            DocumentAccessError: If the file can't be read.
            UnsupportedFormatError: If the file isn't a PDF.
        """
        path = Path(path)
        if not path.exists():
            raise DocumentAccessError(f"PDF not found: {path}")

        try:
            doc = fitz.open(path)
        except Exception as e:
            raise DocumentAccessError(f"Failed to open PDF {path}: {e}") from e

        if not doc.is_pdf:
            doc.close()
            raise UnsupportedFormatError(f"{path} is not a PDF document")

        return cls(doc, path)

    def __enter__(self) -> PdfDocument:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        if not self._doc.is_closed:
            self._doc.close()

    def save(self, path: str | Path) -> None:
        """Write the document (with every applied fix) to a new file."""
        try:
            self._doc.save(str(path), garbage=1)
        except Exception as e:
            raise DocumentAccessError(f"Failed to save PDF to {path}: {e}") from e

    # ------------------------------------------------------------------
    # Low-level object access
    # ------------------------------------------------------------------

    def get_key(self, xref: int, path: str) -> tuple[str, str]:
        """Read a (possibly nested) key; indirect objects on the way are followed."""
        xref, key = self._locate(xref, path)
        return self._doc.xref_get_key(xref, key)

    def set_key(self, xref: int, path: str, value: str) -> None:
        """Write PDF source text to a (possibly nested) key."""
        xref, key = self._locate(xref, path)
        self._doc.xref_set_key(xref, key, value)

    def get_array(self, xref: int, path: str) -> list | None:
        """Read an array stored at a key, directly or as an indirect object."""
        kind, value = self.get_key(xref, path)
        if kind == "array":
            return parse_array(value)
        target = self._array_object(kind, value)
        if target is None:
            return None
        return parse_array(self._doc.xref_object(target, compressed=True))

    def set_array(self, xref: int, path: str, items: list) -> None:
        """Write an array to a key; an indirect array is updated in its own object."""
        kind, value = self.get_key(xref, path)
        target = self._array_object(kind, value)
        if target is not None:
            self._doc.update_object(target, format_array(items))
        else:
            self.set_key(xref, path, format_array(items))

    def _array_object(self, kind: str, value: str) -> int | None:
        """xref of the indirect array a key points at, if it points at one."""
        target = parse_xref(value) if kind == "xref" else None
        if target is None:
            return None
        if not self._doc.xref_object(target, compressed=True).lstrip().startswith("["):
            return None
        return target

    def _locate(self, xref: int, path: str) -> tuple[int, str]:
        # xref_set_key refuses key paths that cross indirect objects,
        # so resolve every reference except the last key.
        parts = path.split("/")
        prefix: list[str] = []
        for part in parts[:-1]:
            kind, value = self._doc.xref_get_key(xref, "/".join([*prefix, part]))
            target = parse_xref(value) if kind == "xref" else None
            if target is not None:
                xref = target
                prefix = []
            else:
                prefix.append(part)
        return xref, "/".join([*prefix, parts[-1]])

    # ------------------------------------------------------------------
    # Pages
    # ------------------------------------------------------------------

    @property
    def page_count(self) -> int:
        return self._doc.page_count

    def page_ref(self, page_number: int) -> PageRef:
        return PageRef(self._doc.page_xref(page_number - 1))

    def page_number(self, ref) -> int | None:
        """1-based number of the page an array slot points at, if any."""
        if not isinstance(ref, PageRef):
            return None
        if self._page_numbers is None:
            self._page_numbers = {
                self._doc.page_xref(index): index + 1 for index in range(self.page_count)
            }
        return self._page_numbers.get(ref.xref)

    # ------------------------------------------------------------------
    # Metadata facet
    # ------------------------------------------------------------------

    def get_xmp_metadata(self) -> XmpMetadata:
        """The XMP packet, or a fresh one when the document has none or it is unreadable."""
        text = self._doc.get_xml_metadata()
        try:
            return XmpMetadata.parse(text)
        except ValueError as e:
            logger.warning("Replacing unreadable XMP metadata in %s: %s", self.path, e)
            return XmpMetadata.empty()

    def set_xmp_metadata(self, xmp: XmpMetadata) -> None:
        self._doc.set_xml_metadata(xmp.serialize())

    # ------------------------------------------------------------------
    # Catalog facet
    # ------------------------------------------------------------------

    def has_viewer_preferences(self) -> bool:
        kind, _ = self.get_key(self._catalog, "ViewerPreferences")
        return kind in ("dict", "xref")

    def create_viewer_preferences(self) -> None:
        self.set_key(self._catalog, "ViewerPreferences", "<</DisplayDocTitle true>>")

    def get_display_doc_title(self) -> bool | None:
        if not self.has_viewer_preferences():
            return None
        kind, value = self.get_key(self._catalog, "ViewerPreferences/DisplayDocTitle")
        if kind != "bool":
            return None
        return value == "true"

    def set_display_doc_title(self, value: bool) -> None:
        if not self.has_viewer_preferences():
            self.create_viewer_preferences()
        self.set_key(
            self._catalog, "ViewerPreferences/DisplayDocTitle", "true" if value else "false"
        )

    def get_page_mode(self) -> str | None:
        return self._get_name(self._catalog, "PageMode")

    def set_page_mode(self, mode: str) -> None:
        self.set_key(self._catalog, "PageMode", f"/{mode}")

    def get_page_layout(self) -> str | None:
        return self._get_name(self._catalog, "PageLayout")

    def set_page_layout(self, layout: str) -> None:
        self.set_key(self._catalog, "PageLayout", f"/{layout}")

    def has_open_action(self) -> bool:
        kind, _ = self.get_key(self._catalog, "OpenAction")
        return kind != "null"

    def get_open_action_destination(self) -> list | None:
        """The open action's destination array, or None if it has no usable array."""
        dest = self.get_array(self._catalog, "OpenAction")
        if dest is not None:
            return dest
        return self.get_array(self._catalog, "OpenAction/D")

    def set_open_action_destination(self, destination: list) -> None:
        bare = self.get_array(self._catalog, "OpenAction") is not None
        self.set_array(self._catalog, "OpenAction" if bare else "OpenAction/D", destination)

    def create_open_action(self, destination: list) -> None:
        self.set_key(
            self._catalog, "OpenAction", f"<</S/GoTo/D{format_array(destination)}>>"
        )

    def _get_name(self, xref: int, key: str) -> str | None:
        kind, value = self.get_key(xref, key)
        return parse_name(value) if kind == "name" else None

    # ------------------------------------------------------------------
    # Outline facet and name table
    # ------------------------------------------------------------------

    def outline_roots(self) -> list[OutlineItem]:
        """Top-level bookmarks, in document order."""
        kind, value = self.get_key(self._catalog, "Outlines")
        root = parse_xref(value) if kind == "xref" else None
        if root is None:
            return []
        return self._linked_items(root)

    def _linked_items(self, parent: int) -> list[OutlineItem]:
        """Follow /First then /Next, stopping at the first repeated item."""
        items: list[OutlineItem] = []
        seen: set[int] = set()
        kind, value = self._doc.xref_get_key(parent, "First")
        xref = parse_xref(value) if kind == "xref" else None
        while xref is not None and xref not in seen:
            seen.add(xref)
            items.append(OutlineItem(self, xref))
            kind, value = self._doc.xref_get_key(xref, "Next")
            xref = parse_xref(value) if kind == "xref" else None
        if xref is not None:
            logger.warning("Outline sibling chain in %s loops back to object %d", self.path, xref)
        return items

    def named_destination_page(self, key: str) -> PageRef | None:
        """Page reference behind a named destination, or None if it can't be resolved."""
        if self._names is None:
            self._names = self._doc.resolve_names()
        target = self._names.get(key)
        if not target:
            return None
        page_index = target.get("page", -1)
        if page_index is None or not 0 <= page_index < self.page_count:
            return None
        return PageRef(self._doc.page_xref(page_index))
