"""File discovery and temp-file handling for batch normalization."""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from collections.abc import Iterable
from pathlib import Path

logger = logging.getLogger(__name__)


class FileService:
    """Finds PDFs and manages the temp copy each document is written to.

    Normalized documents are saved to a temp file first and only moved
    over the original when at least one fix was applied.
    """

    def __init__(self, temp_dir: str | Path | None = None):
        self.temp_dir = Path(temp_dir) if temp_dir else Path(tempfile.gettempdir()) / "pdfnorm"
        self.temp_dir.mkdir(parents=True, exist_ok=True)

    def get_pdf_paths(self, paths: Iterable[str | Path]) -> list[Path]:
        """Expand the given files and directories into a list of PDF paths.

        Missing paths are skipped. Directories contribute their top-level
        ``*.pdf`` files only. Duplicates are removed, order is kept.
        """
        seen: set[Path] = set()
        result: list[Path] = []

        for raw in paths:
            path = Path(raw)
            if not path.exists():
                logger.warning("Skipping missing path: %s", path)
                continue
            path = path.resolve()
            if path in seen:
                continue
            seen.add(path)

            if path.is_dir():
                for pdf in sorted(path.iterdir()):
                    if pdf.is_file() and pdf.suffix.lower() == ".pdf" and pdf not in seen:
                        seen.add(pdf)
                        result.append(pdf)
            else:
                result.append(path)

        return result

    def create_temp_file_path(self, original: Path) -> Path:
        """A fresh, uniquely named file in temp_dir; never the original itself."""
        fd, name = tempfile.mkstemp(prefix=f"{original.stem}-", suffix=".pdf", dir=self.temp_dir)
        os.close(fd)
        return Path(name)

    def move_temp_to_original(self, temp_path: Path, original: Path) -> None:
        shutil.move(str(temp_path), str(original))

    def delete_temp_file(self, temp_path: Path) -> None:
        if temp_path.exists():
            temp_path.unlink()
