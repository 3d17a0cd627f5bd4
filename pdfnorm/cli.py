"""
Command line interface.

Usage:
    pdfnorm report.pdf scans/ --config pdfnorm.json
    pdfnorm scans/ --dry-run
"""

from __future__ import annotations

import argparse
import logging
import sys

from pdfnorm import __version__
from pdfnorm.config import load_config
from pdfnorm.exceptions import ConfigurationError
from pdfnorm.normalize import normalize
from pdfnorm.reporting import ConsoleProgressReporter


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pdfnorm",
        description="Normalize PDF metadata, initial view and bookmarks.",
    )
    parser.add_argument(
        "paths",
        nargs="*",
        help="PDF files or directories. Directories contribute their top-level PDFs.",
    )
    parser.add_argument(
        "--config",
        "-c",
        help="Path to a JSON (or YAML) configuration file",
    )
    parser.add_argument(
        "--dry-run",
        "-n",
        action="store_true",
        help="Preview changes without modifying files",
    )
    parser.add_argument(
        "--strict-config",
        action="store_true",
        help="Fail when the configuration file can't be used instead of using defaults",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config, strict=args.strict_config)
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    results = normalize(
        args.paths,
        config=config,
        dry_run=args.dry_run,
        reporter=ConsoleProgressReporter(),
    )

    failed = [r for r in results if r.error is not None]
    fixed = [r for r in results if r.modified]
    fix_count = sum(len(r.fix_records) for r in results)
    mode = " (dry run)" if args.dry_run else ""
    print(
        f"Processed {len(results)} documents{mode}: "
        f"{len(fixed)} fixed, {fix_count} fixes applied, {len(failed)} failed"
    )
    for result in failed:
        print(f"  failed: {result.path}: {result.error}", file=sys.stderr)

    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
