"""
Segmentation Module

Ties the pieces together:
1. Run the bookmark, TOC and content analyzers over a document
2. Recommend a strategy and freeze the analysis
3. Build the splitter for the requested strategy and run it
4. Check the resulting partition for overlapping page ranges
"""

import logging
import re
from pathlib import Path
from typing import Any

from pdf_sectioner.analyzers import (
    BookmarkAnalyzer,
    ContentAnalyzer,
    StrategyRecommender,
    TocAnalyzer,
)
from pdf_sectioner.document import DocumentSource, open_document
from pdf_sectioner.errors import ConfigurationError, SectionerError, SplitError
from pdf_sectioner.models import DocumentAnalysis, SplitOptions, SplitResult
from pdf_sectioner.splitters import (
    BookmarkSplitter,
    PageSplitter,
    SmartSplitter,
    TocSplitter,
)
from pdf_sectioner.splitters.base import BaseSplitter
from pdf_sectioner.validation import find_overlaps, result_ranges

logger = logging.getLogger(__name__)

SPLITTERS: dict[str, type[BaseSplitter]] = {
    "auto": SmartSplitter,
    "bookmarks": BookmarkSplitter,
    "toc": TocSplitter,
    "pages": PageSplitter,
}

PDF_DATE_PATTERN = re.compile(r"^D:(\d{4})(\d{2})(\d{2})")

FILE_SIZE_UNITS = ("B", "KB", "MB", "GB")


def analyze_document_structure(source: DocumentSource) -> DocumentAnalysis:
    """
    Run every analyzer over a document and attach a recommendation.

    The returned analysis is frozen.
    """
    analysis = DocumentAnalysis(source.metadata())

    bookmarks = BookmarkAnalyzer(source).analyze()
    toc_entries = TocAnalyzer(source).analyze()
    content_patterns = ContentAnalyzer(source).analyze()
    logger.info(
        f"Analysis of {source.file_path.name}: {len(bookmarks)} bookmarks, "
        f"{len(toc_entries)} TOC entries, {len(content_patterns)} content patterns"
    )

    for bookmark in bookmarks:
        analysis.add_bookmark(bookmark)
    for entry in toc_entries:
        analysis.add_toc_entry(entry)
    for pattern in content_patterns:
        analysis.add_content_pattern(pattern)

    analysis.set_recommendation(StrategyRecommender(analysis).analyze())
    return analysis


def create_splitter(
    source: DocumentSource, analysis: DocumentAnalysis, options: SplitOptions
) -> BaseSplitter:
    splitter_class = SPLITTERS.get(options.strategy)
    if splitter_class is None:
        raise ConfigurationError(
            f"Unsupported strategy: {options.strategy}. "
            f"Valid options: {', '.join(SPLITTERS)}"
        )
    return splitter_class(source, analysis, options)


def split_document(pdf_path: str | Path, options: SplitOptions | None = None) -> SplitResult:
    """
    Analyze a PDF and split it with the requested strategy.

    Args:
        pdf_path: Path to PDF file
        options: Split options (default: auto strategy into ./splits)

    Returns:
        SplitResult: Finalized result with one entry per written file

    Raises:
        DocumentNotFoundError: If the file does not exist
        InvalidDocumentError: If the file is not a readable PDF
        ConfigurationError: If the strategy is unknown
        OutputDirectoryError: If the output directory cannot be created
        SplitError: If the splitter fails unexpectedly
    """
    options = options or SplitOptions()
    source = open_document(pdf_path)
    analysis = analyze_document_structure(source)

    splitter = create_splitter(source, analysis, options)
    logger.info(f"Splitting {source.file_path.name} with {splitter.strategy_name} strategy")
    try:
        result = splitter.split()
    except SectionerError:
        raise
    except Exception as e:
        raise SplitError(f"Unable to split PDF: {e}") from e

    overlaps = find_overlaps(result_ranges(result))
    for first, second in overlaps:
        logger.warning(
            f"Overlapping page ranges in output: {first[0]}-{first[1]} and {second[0]}-{second[1]}"
        )

    return result


def analyze_document(pdf_path: str | Path) -> DocumentAnalysis:
    """Open a PDF and run the full structure analysis."""
    return analyze_document_structure(open_document(pdf_path))


def get_document_info(pdf_path: str | Path) -> dict[str, Any]:
    """Basic metadata of a PDF, with PDF dates rendered as YYYY-MM-DD."""
    source = open_document(pdf_path)
    metadata = source.metadata()

    outline = source.outline_root()
    has_bookmarks = outline is not None and outline.first_child is not None

    return {
        "file": str(pdf_path),
        "pages": metadata.pages,
        "title": metadata.title,
        "author": metadata.author,
        "creator": metadata.creator,
        "producer": metadata.producer,
        "creation_date": format_date(metadata.creation_date),
        "modification_date": format_date(metadata.modification_date),
        "pdf_version": metadata.pdf_version,
        "file_size": metadata.file_size,
        "has_bookmarks": has_bookmarks,
    }


def format_date(value: str | None) -> str:
    if not value:
        return "Unknown"
    match = PDF_DATE_PATTERN.match(value)
    if match:
        return f"{match.group(1)}-{match.group(2)}-{match.group(3)}"
    return value


def format_file_size(size_bytes: int) -> str:
    size = float(size_bytes)
    unit_index = 0
    while size >= 1024 and unit_index < len(FILE_SIZE_UNITS) - 1:
        size /= 1024
        unit_index += 1
    return f"{round(size, 2)} {FILE_SIZE_UNITS[unit_index]}"
