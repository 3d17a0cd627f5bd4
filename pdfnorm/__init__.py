"""
pdfnorm: Audit and normalize PDF metadata, initial view and bookmarks.

Every deviation from a canonical profile is reported; unless running
in dry-run mode, it is also fixed in place.

Example:
    >>> import pdfnorm
    >>> config = pdfnorm.NormalizationConfig(title="Report - {file_name}")
    >>> results = pdfnorm.normalize(["reports/"], config, dry_run=True)
    >>> for result in results:
    ...     print(result.path.name, len(result.fix_records))
"""

__version__ = "0.1.0"

from pdfnorm.config import NormalizationConfig, load_config  # noqa: E402
from pdfnorm.exceptions import (  # noqa: E402
    ConfigurationError,
    DocumentAccessError,
    PdfNormError,
    UnsupportedFormatError,
)
from pdfnorm.models import FixRecord, Issue, PageRef  # noqa: E402
from pdfnorm.normalize import (  # noqa: E402
    DocumentProcessor,
    FileResult,
    NormalizationService,
    normalize,
)
from pdfnorm.norms import MetadataNorm, Norm, OutlineNorm, ViewNorm, default_norms  # noqa: E402
from pdfnorm.reporting import (  # noqa: E402
    CollectingProgressReporter,
    ConsoleProgressReporter,
    IssueReporter,
    ProgressReporter,
)

__all__ = [
    # Main API
    "normalize",
    "DocumentProcessor",
    "NormalizationService",
    "FileResult",
    # Configuration
    "NormalizationConfig",
    "load_config",
    # Norms
    "Norm",
    "MetadataNorm",
    "ViewNorm",
    "OutlineNorm",
    "default_norms",
    # Reporting
    "IssueReporter",
    "ProgressReporter",
    "ConsoleProgressReporter",
    "CollectingProgressReporter",
    # Models
    "FixRecord",
    "Issue",
    "PageRef",
    # Exceptions
    "PdfNormError",
    "DocumentAccessError",
    "UnsupportedFormatError",
    "ConfigurationError",
]
