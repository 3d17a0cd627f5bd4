"""Document access layer.

Everything that touches PDF objects lives here; the norms only see
the accessors of PdfDocument and OutlineItem.
"""

from pdfnorm.readers.pdf_document import OutlineItem, PdfDocument
from pdfnorm.readers.pdf_objects import format_array, parse_array
from pdfnorm.readers.xmp import XmpMetadata

__all__ = [
    "PdfDocument",
    "OutlineItem",
    "XmpMetadata",
    "parse_array",
    "format_array",
]
