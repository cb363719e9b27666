#!/usr/bin/env python3
"""
PDF Sectioner CLI

Command-line interface for structure-aware PDF splitting.

Usage:
    pdf-sectioner info <pdf_path> [--json]
    pdf-sectioner analyze <pdf_path> [--json]
    pdf-sectioner split <pdf_path> [--strategy <s>] [--max-pages <n>] [--output-dir <dir>]

Exit codes:
    0  success
    1  generic failure, or a split that produced files with errors
    2  file not found
    3  invalid PDF
    4  split failure (no files produced, bad options, output directory)
"""

import argparse
import json
import sys
from pathlib import Path

from pdf_sectioner.errors import (
    ConfigurationError,
    DocumentNotFoundError,
    InvalidDocumentError,
    OutputDirectoryError,
    SplitError,
)
from pdf_sectioner.logging_config import setup_logging
from pdf_sectioner.models import DEFAULT_OUTPUT_DIR, VALID_STRATEGIES

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_NOT_FOUND = 2
EXIT_INVALID_PDF = 3
EXIT_SPLIT_FAILED = 4

# Lists longer than this are truncated in human-readable output
MAX_LISTED_BOOKMARKS = 20
MAX_LISTED_ENTRIES = 15
TRUNCATED_LISTING = 10


def exit_code_for(error: Exception) -> int:
    """Map an exception to the CLI exit code."""
    if isinstance(error, DocumentNotFoundError):
        return EXIT_NOT_FOUND
    if isinstance(error, InvalidDocumentError):
        return EXIT_INVALID_PDF
    if isinstance(error, (ConfigurationError, OutputDirectoryError, SplitError)):
        return EXIT_SPLIT_FAILED
    return EXIT_FAILURE


def _print_json(data):
    print(json.dumps(data, indent=2, default=str))


def _fail(error: Exception) -> int:
    print(f"Error: {error}", file=sys.stderr)
    return exit_code_for(error)


def cmd_info(args):
    """Show PDF metadata and basic information."""
    from pdf_sectioner.segmentation import format_file_size, get_document_info

    try:
        info = get_document_info(args.pdf)
    except Exception as e:
        return _fail(e)

    if args.json:
        _print_json(info)
        return EXIT_SUCCESS

    print(f"{'=' * 70}")
    print(f"PDF INFORMATION: {Path(info['file']).name}")
    print(f"{'=' * 70}")
    print(f"File: {info['file']}")
    print(f"Pages: {info['pages']}")
    print(f"Title: {info['title']}")
    print(f"Author: {info['author']}")
    print(f"Creator: {info['creator']}")
    print(f"Producer: {info['producer']}")
    print(f"Created: {info['creation_date']}")
    print(f"Modified: {info['modification_date']}")
    print(f"PDF version: {info['pdf_version']}")
    print(f"File size: {format_file_size(info['file_size'])}")
    print(f"Has bookmarks: {'Yes' if info['has_bookmarks'] else 'No'}")

    return EXIT_SUCCESS


def cmd_analyze(args):
    """Analyze PDF structure and recommend a splitting strategy."""
    from pdf_sectioner.segmentation import analyze_document

    try:
        analysis = analyze_document(args.pdf)
    except Exception as e:
        return _fail(e)

    if args.json:
        _print_json(analysis.to_dict())
        return EXIT_SUCCESS

    metadata = analysis.metadata
    print(f"{'=' * 70}")
    print(f"ANALYZING: {Path(args.pdf).name}")
    print(f"{'=' * 70}")
    print(f"Total pages: {metadata.pages}")
    print(f"Title: {metadata.title}")
    print(f"Author: {metadata.author}")
    print(f"PDF version: {metadata.pdf_version}")

    if analysis.has_bookmarks:
        bookmarks = analysis.bookmarks
        print(f"\nBookmark Structure: {len(bookmarks)} top-level bookmarks")
        if len(bookmarks) > MAX_LISTED_BOOKMARKS:
            print(f"  (showing first {TRUNCATED_LISTING}, use --json for the complete list)")
            bookmarks = bookmarks[:TRUNCATED_LISTING]
        for bookmark in bookmarks:
            print(bookmark.display_text(indent=1))

    if analysis.has_toc:
        entries = analysis.toc_entries
        print(f"\nTable of Contents: {len(entries)} entries")
        if len(entries) > MAX_LISTED_ENTRIES:
            print(f"  (showing first {TRUNCATED_LISTING}, use --json for the complete list)")
            entries = entries[:TRUNCATED_LISTING]
        for entry in entries:
            print(entry.display_text(indent=entry.level))

    headers = analysis.headers
    if headers:
        print(f"\nContent Patterns: {len(headers)} headers")
        if len(headers) > MAX_LISTED_ENTRIES:
            print(f"  (showing first {TRUNCATED_LISTING}, use --json for the complete list)")
            headers = headers[:TRUNCATED_LISTING]
        for header in headers:
            print(header.display_text(indent=header.level))

    recommendation = analysis.recommendation
    print(f"\n{'=' * 70}")
    print("RECOMMENDATION")
    print(f"{'=' * 70}")
    print(f"Primary strategy: {recommendation.primary_strategy}")
    print(f"Confidence: {round(recommendation.confidence * 100)}%")
    print(f"Reasoning: {recommendation.reasoning}")
    if recommendation.fallback_strategies:
        print(f"Fallback strategies: {', '.join(recommendation.fallback_strategies)}")

    return EXIT_SUCCESS


def cmd_split(args):
    """Split a PDF into section files."""
    from pdf_sectioner.config_factory import create_progress_printer, create_split_options
    from pdf_sectioner.segmentation import split_document

    try:
        options = create_split_options(
            strategy=args.strategy,
            max_pages=args.max_pages,
            max_tokens=args.max_tokens,
            output_dir=args.output_dir,
            # Progress lines would corrupt JSON output
            progress_callback=None if args.json else create_progress_printer(),
        )
        result = split_document(args.pdf, options)
    except Exception as e:
        return _fail(e)

    if args.json:
        _print_json(result.to_dict())
    else:
        _print_split_result(result, options.output_dir, verbose=args.verbose)

    if result.success:
        return EXIT_SUCCESS
    if result.partial_success:
        return EXIT_FAILURE
    return EXIT_SPLIT_FAILED


def _print_split_result(result, output_dir, verbose=False):
    print(f"\n{'=' * 70}")
    print("SPLIT RESULT")
    print(f"{'=' * 70}")
    print(f"Source: {result.source_file}")
    print(f"Strategy: {result.strategy_used}")
    print(f"Total pages: {result.total_pages}")
    print(f"Output directory: {output_dir}")

    if result.output_files:
        print(f"\nCreated {result.split_count} files:")
        total_size = 0
        for index, file_info in enumerate(result.output_files, start=1):
            total_size += file_info.file_size or 0
            print(
                f"  {index:3d}. {Path(file_info.filename).name} "
                f"(pages {file_info.page_range}, {file_info.pages} pages)"
            )
            if verbose and file_info.section_title:
                print(f"       Title: {file_info.section_title}")
        print(f"Total size: {total_size / (1024 * 1024):.2f} MB")

    if result.errors:
        print(f"\nErrors ({len(result.errors)}):")
        for error in result.errors:
            print(f"  - {error}")

    print(f"\n{result.summary()}")


def _add_common_options(parser):
    """Add options shared by every command."""
    parser.add_argument("pdf", help="Path to PDF file")
    parser.add_argument("--json", action="store_true", help="Output in JSON format")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable INFO level logging (default: WARNING)"
    )


def build_parser():
    parser = argparse.ArgumentParser(
        prog="pdf-sectioner",
        description="PDF Sectioner - structure-aware PDF analysis and splitting",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Show metadata:
    pdf-sectioner info document.pdf
    pdf-sectioner info document.pdf --json

  Analyze structure:
    pdf-sectioner analyze document.pdf

  Split (strategy picked automatically):
    pdf-sectioner split document.pdf --output-dir ./splits
    pdf-sectioner split document.pdf --strategy toc --max-pages 40
    pdf-sectioner split document.pdf --strategy pages --max-tokens 12000
""",
    )

    from . import __version__

    parser.add_argument(
        "-V", "--version", action="version", version=f"pdf-sectioner {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # info command
    p_info = subparsers.add_parser("info", help="Display PDF metadata and basic information")
    _add_common_options(p_info)
    p_info.set_defaults(func=cmd_info)

    # analyze command
    p_analyze = subparsers.add_parser("analyze", help="Analyze PDF structure")
    _add_common_options(p_analyze)
    p_analyze.set_defaults(func=cmd_analyze)

    # split command
    p_split = subparsers.add_parser("split", help="Split PDF into section files")
    _add_common_options(p_split)
    p_split.add_argument(
        "-s",
        "--strategy",
        choices=list(VALID_STRATEGIES),
        default="auto",
        help="Splitting strategy (default: auto)",
    )
    p_split.add_argument("--max-pages", type=int, default=None, help="Maximum pages per split")
    p_split.add_argument(
        "--max-tokens", type=int, default=None, help="Maximum tokens per split (estimated)"
    )
    p_split.add_argument(
        "-o",
        "--output-dir",
        default=DEFAULT_OUTPUT_DIR,
        help=f"Output directory for split files (default: {DEFAULT_OUTPUT_DIR})",
    )
    p_split.set_defaults(func=cmd_split)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return EXIT_FAILURE

    # Configure logging based on verbosity
    setup_logging(verbose=args.verbose)

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
