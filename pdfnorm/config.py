"""
Configuration for pdfnorm document normalization.

Every option is optional. An option left as None falls back to the
built-in canonical profile:

    title             no template; only whitespace is checked
    author            no override; only whitespace is checked
    displayDocTitle   true
    pageMode          Bookmarks   (UseOutlines)
    pageLayout        TwoPageRight
    openToPage        1
    bookmarkZoom      FitPage     (Fit)

Configuration files are JSON, or YAML when the file ends in .yaml/.yml.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from pdfnorm.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

FILE_NAME_TOKEN = "{file_name}"

# Accepted spellings for each field, matched case-insensitively.
_KEY_ALIASES = {
    "title": "title",
    "author": "author",
    "displaydoctitle": "display_doc_title",
    "display_doc_title": "display_doc_title",
    "pagemode": "page_mode",
    "page_mode": "page_mode",
    "pagelayout": "page_layout",
    "page_layout": "page_layout",
    "opentopage": "open_to_page",
    "open_to_page": "open_to_page",
    "bookmarkzoom": "bookmark_zoom",
    "bookmark_zoom": "bookmark_zoom",
}


@dataclass(frozen=True)
class NormalizationConfig:
    """
    Overrides for the canonical normalization profile.

    Immutable once loaded; one instance is shared read-only by all
    norms and all documents of a run.

    Example:
        >>> config = NormalizationConfig(
        ...     title="Report - {file_name}",
        ...     page_layout="OneColumn",
        ... )
        >>> config.title_for("q3")
        'Report - q3'
    """

    # Metadata
    title: str | None = None  # May contain the {file_name} token
    author: str | None = None

    # Initial view
    display_doc_title: bool | None = None
    page_mode: str | None = None  # PageOnly, Bookmarks, Pages, Attachments, Layers
    page_layout: str | None = None  # SinglePage, OneColumn, TwoColumnLeft, ...
    open_to_page: int | None = None  # 1-based

    # Bookmarks
    bookmark_zoom: str | None = None  # FitPage, FitWidth, FitVisible, ActualSize, InheritZoom

    def title_for(self, file_name: str) -> str | None:
        """Expand the title template for one document, or None without a template."""
        if not self.title:
            return None
        return self.title.replace(FILE_NAME_TOKEN, file_name)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> NormalizationConfig:
        """Build a config from a parsed JSON/YAML mapping.

        Keys are matched case-insensitively; unknown keys are ignored.

        Raises:
            ConfigurationError: If a known key carries a value of the wrong type.
        """
        values: dict[str, Any] = {}
        for raw_key, value in data.items():
            name = _KEY_ALIASES.get(str(raw_key).lower())
            if name is None:
                logger.debug("Ignoring unknown config key %r", raw_key)
                continue
            if value is None:
                continue
            values[name] = value

        for f in fields(cls):
            if f.name not in values:
                continue
            value = values[f.name]
            if f.name == "display_doc_title":
                if not isinstance(value, bool):
                    raise ConfigurationError(f"displayDocTitle must be a boolean, got {value!r}")
            elif f.name == "open_to_page":
                # bool is an int subclass; reject it explicitly
                if isinstance(value, bool) or not isinstance(value, int):
                    raise ConfigurationError(f"openToPage must be an integer, got {value!r}")
            elif not isinstance(value, str):
                raise ConfigurationError(f"{f.name} must be a string, got {value!r}")

        return cls(**values)


def load_config(path: str | Path | None, *, strict: bool = False) -> NormalizationConfig | None:
    """
    Load a configuration file.

    Args:
        path: JSON or YAML file. None or a missing file means "no configuration".
        strict: Raise ConfigurationError instead of falling back to defaults
                when the file exists but cannot be used.

    Returns:
        The loaded config, or None when every default applies.
    """
    if path is None or str(path) == "":
        return None

    path = Path(path)
    if not path.is_file():
        logger.debug("Config file %s not found, using defaults", path)
        return None

    try:
        text = path.read_text(encoding="utf-8")
        if path.suffix.lower() in (".yaml", ".yml"):
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)

        if data is None:
            return None
        if not isinstance(data, dict):
            raise ConfigurationError(f"Top level of {path} must be a mapping")

        return NormalizationConfig.from_dict(data)

    except (OSError, UnicodeDecodeError, ValueError, yaml.YAMLError, ConfigurationError) as e:
        if strict:
            if isinstance(e, ConfigurationError):
                raise
            raise ConfigurationError(f"Failed to load config {path}: {e}") from e
        logger.warning("Ignoring unusable config %s: %s", path, e)
        return None
