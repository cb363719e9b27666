"""
Bookmark Splitter

One output file per top-level bookmark. A section runs from its bookmark page
to the page before the next top-level bookmark, or to the last page.
"""

import logging

from pdf_sectioner.file_namer import FileNamer
from pdf_sectioner.models import Bookmark, DocumentAnalysis, SplitResult
from pdf_sectioner.splitters.base import BaseSplitter, calculate_coverage

logger = logging.getLogger(__name__)

BASE_CONFIDENCE = 0.7
COVERAGE_WEIGHT = 0.2
DENSITY_WEIGHT = 0.1


class BookmarkSplitter(BaseSplitter):
    strategy_name = "bookmarks"

    def split(self) -> SplitResult:
        result = self.create_result()

        if not self.can_handle():
            self.record_failure(result, "Document does not have reliable bookmark structure")
            return result.finalize()

        file_namer = self.create_file_namer()
        top_level = self.top_level_bookmarks()
        logger.debug(f"Found {len(top_level)} top-level bookmarks")

        self.report_progress("Starting bookmark-based splitting", 0, len(top_level))

        for index, bookmark in enumerate(top_level):
            try:
                self.split_section(bookmark, index, index + 1, file_namer, result)
            except Exception as e:
                self.record_failure(result, f"Failed to split section '{bookmark.title}': {e}")
                continue
            self.report_progress(f"Processed section: {bookmark.title}", index + 1, len(top_level))

        return self.finish(result, {"bookmarks_processed": len(top_level)})

    def top_level_bookmarks(self, analysis: DocumentAnalysis | None = None) -> list[Bookmark]:
        analysis = analysis or self.analysis
        return [b for b in analysis.bookmarks if b.level == 1]

    def can_handle(self, analysis: DocumentAnalysis | None = None) -> bool:
        return len(self.top_level_bookmarks(analysis)) >= 2

    def confidence_score(self, analysis: DocumentAnalysis | None = None) -> float:
        analysis = analysis or self.analysis
        if not self.can_handle(analysis):
            return 0.0

        bookmarks = self.top_level_bookmarks(analysis)
        coverage = calculate_coverage([b.page for b in bookmarks], analysis.total_pages or 1)
        density = min(len(bookmarks) / 10.0, 1.0)

        score = BASE_CONFIDENCE + coverage * COVERAGE_WEIGHT + density * DENSITY_WEIGHT
        return min(score, 1.0)

    def split_section(
        self,
        bookmark: Bookmark,
        position: int,
        section_number: int,
        file_namer: FileNamer,
        result: SplitResult,
    ) -> None:
        start_page = bookmark.page
        end_page = self.determine_end_page(position)

        if start_page > end_page:
            logger.debug(f"Skipping '{bookmark.title}': start {start_page} > end {end_page}")
            return

        filename = file_namer.chapter_name(section_number, bookmark.title)
        self.write_segment(result, start_page, end_page, filename, file_namer, bookmark.title)

    def determine_end_page(self, position: int) -> int:
        """Page before the next top-level bookmark, or the last page."""
        top_level = self.top_level_bookmarks()
        if position + 1 < len(top_level):
            return top_level[position + 1].page - 1
        return self.analysis.total_pages
