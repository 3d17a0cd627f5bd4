"""Allow ``python -m pdfnorm``."""

import sys

from pdfnorm.cli import main

sys.exit(main())
