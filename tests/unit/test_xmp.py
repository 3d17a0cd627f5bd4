"""
Unit tests for the XMP packet model.
"""

from datetime import datetime, timezone

import pytest

from pdfnorm.readers.xmp import XmpMetadata

PACKET = """<?xpacket begin="\ufeff" id="W5M0MpCehiHzreSzNTczkc9d"?>
<x:xmpmeta xmlns:x="adobe:ns:meta/">
  <rdf:RDF xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#">
    <rdf:Description rdf:about=""
        xmlns:dc="http://purl.org/dc/elements/1.1/"
        xmlns:xmp="http://ns.adobe.com/xap/1.0/"
        xmp:MetadataDate="2020-01-01T00:00:00Z">
      <dc:title>
        <rdf:Alt>
          <rdf:li xml:lang="de">Bericht</rdf:li>
          <rdf:li xml:lang="x-default"> Report </rdf:li>
        </rdf:Alt>
      </dc:title>
      <dc:creator>
        <rdf:Seq>
          <rdf:li>Ada</rdf:li>
          <rdf:li> Grace</rdf:li>
        </rdf:Seq>
      </dc:creator>
    </rdf:Description>
  </rdf:RDF>
</x:xmpmeta>
<?xpacket end="w"?>"""


@pytest.fixture
def xmp() -> XmpMetadata:
    return XmpMetadata.parse(PACKET)


class TestParse:
    def test_title_prefers_x_default(self, xmp):
        assert xmp.title == " Report "

    def test_authors_in_order(self, xmp):
        assert xmp.authors == ["Ada", " Grace"]

    def test_metadata_date_attribute(self, xmp):
        assert xmp.metadata_date == "2020-01-01T00:00:00Z"

    def test_blank_packet_is_empty(self):
        xmp = XmpMetadata.parse("")
        assert xmp.title == ""
        assert xmp.authors == []
        assert xmp.metadata_date is None

    def test_malformed_packet(self):
        with pytest.raises(ValueError, match="Malformed XMP"):
            XmpMetadata.parse("<x:xmpmeta><unclosed>")

    def test_bag_creators_are_read(self):
        packet = PACKET.replace("rdf:Seq", "rdf:Bag")
        assert XmpMetadata.parse(packet).authors == ["Ada", " Grace"]


class TestEdit:
    def test_set_title_overwrites_x_default(self, xmp):
        xmp.title = "Report"
        assert xmp.title == "Report"
        assert "Bericht" in xmp.serialize()

    def test_set_title_on_empty_packet(self):
        xmp = XmpMetadata.empty()
        xmp.title = "New"
        assert XmpMetadata.parse(xmp.serialize()).title == "New"

    def test_set_author(self, xmp):
        xmp.set_author(2, "Grace")
        assert xmp.authors == ["Ada", "Grace"]

    def test_delete_and_append_authors(self, xmp):
        xmp.delete_author(2)
        xmp.delete_author(1)
        xmp.append_author("A. Smith")
        assert xmp.authors == ["A. Smith"]

    def test_append_author_on_empty_packet(self):
        xmp = XmpMetadata.empty()
        xmp.append_author("Ada")
        assert XmpMetadata.parse(xmp.serialize()).authors == ["Ada"]

    def test_set_metadata_date_updates_attribute(self, xmp):
        xmp.set_metadata_date(datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc))
        assert xmp.metadata_date == "2024-05-01T12:00:00+00:00"

    def test_set_metadata_date_on_empty_packet(self):
        xmp = XmpMetadata.empty()
        xmp.set_metadata_date(datetime(2024, 5, 1, tzinfo=timezone.utc))
        assert XmpMetadata.parse(xmp.serialize()).metadata_date == "2024-05-01T00:00:00+00:00"


class TestSerialize:
    def test_packet_wrapper(self, xmp):
        text = xmp.serialize()
        assert text.startswith("<?xpacket begin=")
        assert text.endswith('<?xpacket end="w"?>')

    def test_uses_conventional_prefixes(self, xmp):
        text = xmp.serialize()
        assert "<dc:title>" in text
        assert "rdf:li" in text
        assert 'xml:lang="x-default"' in text

    def test_extension_schema_prefixes_are_kept(self):
        packet = PACKET.replace(
            'xmp:MetadataDate="2020-01-01T00:00:00Z">',
            'xmp:MetadataDate="2020-01-01T00:00:00Z"\n'
            '        xmlns:pdfx="http://ns.adobe.com/pdfx/1.3/"\n'
            '        pdfx:SourceModified="D:20200101">',
        )

        text = XmpMetadata.parse(packet).serialize()

        assert 'pdfx:SourceModified="D:20200101"' in text
        assert "ns0:" not in text
        assert XmpMetadata.parse(text).title == " Report "
