"""
Exception classes for pdfnorm.

All pdfnorm exceptions inherit from PdfNormError,
making it easy to catch all library errors.

Structural problems inside a document (a malformed destination, an
empty title) are never raised; the norms report them as issues.
Exceptions are reserved for the cases where a document or a
configuration file cannot be used at all.

Example:
    >>> try:
    ...     results = pdfnorm.normalize(["broken.pdf"])
    ... except pdfnorm.PdfNormError as e:
    ...     print(f"pdfnorm error: {e}")
"""


class PdfNormError(Exception):
    """
    Base exception for all pdfnorm errors.

    Catch this to handle any pdfnorm-specific error.
    """

    pass


class DocumentAccessError(PdfNormError):
    """
    Raised when a document cannot be opened or saved.

    The batch service catches this per document and moves on
    to the next file.
    """

    pass


class UnsupportedFormatError(DocumentAccessError):
    """
    Raised when a file opens but is not a PDF.

    Example:
        >>> PdfDocument.open("notes.epub")
        UnsupportedFormatError: notes.epub is not a PDF document
    """

    pass


class ConfigurationError(PdfNormError):
    """
    Raised for an unreadable or ill-typed configuration.

    load_config() turns this into "no configuration" unless
    it is called with strict=True.
    """

    pass
