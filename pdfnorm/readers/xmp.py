"""
XMP metadata packet model.

Only the properties pdfnorm normalizes are exposed:

    dc:title           rdf:Alt, x-default entry
    dc:creator         rdf:Seq of author names
    xmp:MetadataDate   last time the metadata was touched

Packets are parsed with defusedxml (they come from untrusted files)
and rebuilt with the standard ElementTree serializer. Properties the
model does not know about are kept as they are.
"""

from __future__ import annotations

import io
import re
import xml.etree.ElementTree as ET
from datetime import datetime

from defusedxml import ElementTree as DefusedET

NS = {
    "x": "adobe:ns:meta/",
    "rdf": "http://www.w3.org/1999/02/22-rdf-syntax-ns#",
    "dc": "http://purl.org/dc/elements/1.1/",
    "xmp": "http://ns.adobe.com/xap/1.0/",
    "pdf": "http://ns.adobe.com/pdf/1.3/",
    "xmpMM": "http://ns.adobe.com/xap/1.0/mm/",
    "pdfaid": "http://www.aiim.org/pdfa/ns/id/",
    "photoshop": "http://ns.adobe.com/photoshop/1.0/",
    "xmpRights": "http://ns.adobe.com/xap/1.0/rights/",
}
XML_LANG = "{http://www.w3.org/XML/1998/namespace}lang"

for _prefix, _uri in NS.items():
    ET.register_namespace(_prefix, _uri)

PACKET_HEADER = '<?xpacket begin="\ufeff" id="W5M0MpCehiHzreSzNTczkc9d"?>'
PACKET_TRAILER = '<?xpacket end="w"?>'


_GENERATED_PREFIX = re.compile(r"ns\d+$")


def _register_prefixes(namespaces: list[tuple[str, str]]) -> None:
    """Serialize extension schemas (pdfx:, xmpTPg:, ...) under their own prefixes."""
    for prefix, uri in namespaces:
        if not prefix or prefix in NS or uri in NS.values() or _GENERATED_PREFIX.match(prefix):
            continue
        ET.register_namespace(prefix, uri)


def _q(prefixed: str) -> str:
    """``dc:title`` -> ``{http://purl.org/dc/elements/1.1/}title``."""
    prefix, local = prefixed.split(":")
    return f"{{{NS[prefix]}}}{local}"


class XmpMetadata:
    """An editable XMP packet.

    Usage:
        xmp = XmpMetadata.parse(doc.get_xml_metadata())
        xmp.title = "Annual Report"
        doc.set_xml_metadata(xmp.serialize())

    Author indexes are 1-based, as in the XMP array model.
    """

    def __init__(self, root: ET.Element):
        self._root = root
        if root.tag == _q("rdf:RDF"):
            self._rdf = root
        else:
            rdf = root.find(_q("rdf:RDF"))
            if rdf is None:
                rdf = ET.SubElement(root, _q("rdf:RDF"))
            self._rdf = rdf

    @classmethod
    def empty(cls) -> XmpMetadata:
        return cls(ET.Element(_q("x:xmpmeta")))

    @classmethod
    def parse(cls, text: str | None) -> XmpMetadata:
        """Parse a packet; blank input yields an empty packet.

        Raises:
            ValueError: If the packet is not well-formed XML.
        """
        if not text or not text.strip():
            return cls.empty()
        source = text.lstrip("\ufeff").strip()
        try:
            root = DefusedET.fromstring(source)
            events = DefusedET.iterparse(io.StringIO(source), events=("start-ns",))
            declared = [namespace for _event, namespace in events]
        except ET.ParseError as e:
            raise ValueError(f"Malformed XMP packet: {e}") from e
        _register_prefixes(declared)
        return cls(root)

    # ------------------------------------------------------------------
    # Title
    # ------------------------------------------------------------------

    @property
    def title(self) -> str:
        """The x-default title, or the first alternative, or ''."""
        alt = self._container("dc:title", "rdf:Alt", create=False)
        if alt is None:
            return ""
        items = alt.findall(_q("rdf:li"))
        for item in items:
            if item.get(XML_LANG) == "x-default":
                return item.text or ""
        return (items[0].text or "") if items else ""

    @title.setter
    def title(self, value: str) -> None:
        alt = self._container("dc:title", "rdf:Alt", create=True)
        items = alt.findall(_q("rdf:li"))
        target = next((i for i in items if i.get(XML_LANG) == "x-default"), None)
        if target is None:
            target = items[0] if items else ET.SubElement(alt, _q("rdf:li"))
            target.set(XML_LANG, "x-default")
        target.text = value

    # ------------------------------------------------------------------
    # Authors
    # ------------------------------------------------------------------

    @property
    def authors(self) -> list[str]:
        seq = self._container("dc:creator", "rdf:Seq", create=False)
        if seq is None:
            return []
        return [item.text or "" for item in seq.findall(_q("rdf:li"))]

    def set_author(self, index: int, value: str) -> None:
        self._author_items()[index - 1].text = value

    def delete_author(self, index: int) -> None:
        seq = self._container("dc:creator", "rdf:Seq", create=True)
        seq.remove(self._author_items()[index - 1])

    def append_author(self, value: str) -> None:
        seq = self._container("dc:creator", "rdf:Seq", create=True)
        ET.SubElement(seq, _q("rdf:li")).text = value

    def _author_items(self) -> list[ET.Element]:
        seq = self._container("dc:creator", "rdf:Seq", create=True)
        return seq.findall(_q("rdf:li"))

    # ------------------------------------------------------------------
    # Dates
    # ------------------------------------------------------------------

    @property
    def metadata_date(self) -> str | None:
        for desc in self._descriptions():
            if desc.get(_q("xmp:MetadataDate")) is not None:
                return desc.get(_q("xmp:MetadataDate"))
            element = desc.find(_q("xmp:MetadataDate"))
            if element is not None:
                return element.text
        return None

    def set_metadata_date(self, when: datetime) -> None:
        stamp = when.isoformat(timespec="seconds")
        for desc in self._descriptions():
            if desc.get(_q("xmp:MetadataDate")) is not None:
                desc.set(_q("xmp:MetadataDate"), stamp)
                return
            element = desc.find(_q("xmp:MetadataDate"))
            if element is not None:
                element.text = stamp
                return
        ET.SubElement(self._description(), _q("xmp:MetadataDate")).text = stamp

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def serialize(self) -> str:
        body = ET.tostring(self._root, encoding="unicode")
        return f"{PACKET_HEADER}\n{body}\n{PACKET_TRAILER}"

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _descriptions(self) -> list[ET.Element]:
        return self._rdf.findall(_q("rdf:Description"))

    def _description(self) -> ET.Element:
        """First rdf:Description, created when the packet has none."""
        descriptions = self._descriptions()
        if descriptions:
            return descriptions[0]
        desc = ET.SubElement(self._rdf, _q("rdf:Description"))
        desc.set(_q("rdf:about"), "")
        return desc

    def _container(self, prop: str, kind: str, *, create: bool) -> ET.Element | None:
        """Find (or create) the rdf:Alt/rdf:Seq holding a property's items."""
        for desc in self._descriptions():
            element = desc.find(_q(prop))
            if element is None:
                continue
            container = element.find(_q(kind))
            if container is None:
                # Some writers use rdf:Bag where rdf:Seq is expected
                for other in ("rdf:Bag", "rdf:Seq", "rdf:Alt"):
                    container = element.find(_q(other))
                    if container is not None:
                        break
            if container is None and create:
                container = ET.SubElement(element, _q(kind))
            if container is not None:
                return container
            if not create:
                return None

        if not create:
            return None
        element = ET.SubElement(self._description(), _q(prop))
        return ET.SubElement(element, _q(kind))
