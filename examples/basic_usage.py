#!/usr/bin/env python3
"""
Basic pdfnorm Usage Example

This example demonstrates the core workflow:
1. Normalize PDFs with the built-in profile
2. Override the profile with a configuration
3. Preview changes with a dry run
4. Drive a single document directly
"""

from pathlib import Path

from pdfnorm import (
    CollectingProgressReporter,
    DocumentProcessor,
    IssueReporter,
    NormalizationConfig,
    default_norms,
    load_config,
    normalize,
)


def main():
    # ─────────────────────────────────────────────────────────────────────────
    # 1. Default Profile
    # ─────────────────────────────────────────────────────────────────────────

    # Files and directories (top-level PDFs only), fixed in place
    results = normalize(["path/to/report.pdf", "path/to/scans/"])

    for result in results:
        if result.error is not None:
            print(f"{result.path.name}: FAILED ({result.error})")
        else:
            print(f"{result.path.name}: {len(result.fix_records)} fixes")

    # ─────────────────────────────────────────────────────────────────────────
    # 2. Custom Configuration
    # ─────────────────────────────────────────────────────────────────────────

    config = NormalizationConfig(
        title="Annual Report - {file_name}",  # {file_name} = file stem
        author="A. Smith",  # Replaces every existing author
        page_layout="OneColumn",
        open_to_page=2,  # Falls back to page 1 if out of range
        bookmark_zoom="FitWidth",
    )
    normalize(["path/to/report.pdf"], config=config)

    # Or from a JSON/YAML file; None means "use the defaults"
    config = load_config("pdfnorm.yaml")

    # ─────────────────────────────────────────────────────────────────────────
    # 3. Dry Run
    # ─────────────────────────────────────────────────────────────────────────

    # Same messages as a live run, no file is touched
    reporter = CollectingProgressReporter()
    normalize(["path/to/scans/"], config=config, dry_run=True, reporter=reporter)

    for issue in reporter.issues:
        print(f"{issue.document}: {issue.message}")


def single_document_example():
    """Run the norms over one document and write the result elsewhere."""
    reporter = CollectingProgressReporter()
    processor = DocumentProcessor(default_norms(IssueReporter(reporter)))
    processor.set_config(NormalizationConfig(page_mode="Bookmarks"))

    source = Path("path/to/report.pdf")
    records = processor.process(source, Path("output/report.pdf"), source.stem, dry_run=False)

    # output/report.pdf is only written when something was fixed
    print(f"{len(records)} fixes")
    for message in reporter.fixes:
        print(f"  -> {message}")


if __name__ == "__main__":
    # Note: These examples use placeholder paths.
    # Replace with actual PDF paths to run.
    print("pdfnorm Usage Examples")
    print("=" * 50)
    print("\nSee the code for detailed examples of:")
    print("  - Default normalization")
    print("  - Custom configuration")
    print("  - Dry runs")
    print("  - Single-document processing")
