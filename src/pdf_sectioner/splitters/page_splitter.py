"""
Page Splitter

Fallback strategy: consecutive fixed-size page windows, the last window
truncated to the document length. Always applicable.
"""

import logging
import math

from pdf_sectioner.models import DocumentAnalysis, SplitResult
from pdf_sectioner.splitters.base import BaseSplitter

logger = logging.getLogger(__name__)

DEFAULT_PAGE_LIMIT = 50
# ~300 words per page at ~1.3 tokens per word
TOKENS_PER_PAGE = 400

STRUCTURED_CONFIDENCE = 0.3
UNSTRUCTURED_CONFIDENCE = 0.4


class PageSplitter(BaseSplitter):
    strategy_name = "pages"

    def split(self) -> SplitResult:
        result = self.create_result()

        max_pages = self.determine_max_pages()
        file_namer = self.create_file_namer()
        page_ranges = calculate_page_ranges(result.total_pages, max_pages)
        logger.debug(f"Page splitting: {len(page_ranges)} ranges of up to {max_pages} pages")

        self.report_progress("Starting page-based splitting", 0, len(page_ranges))

        for index, (start_page, end_page) in enumerate(page_ranges):
            filename = file_namer.page_range_name(start_page, end_page)
            try:
                self.write_segment(
                    result, start_page, end_page, filename, file_namer, f"Pages {start_page}-{end_page}"
                )
            except Exception as e:
                self.record_failure(result, f"Failed to split pages {start_page}-{end_page}: {e}")
                continue
            self.report_progress(
                f"Processed pages {start_page}-{end_page}", index + 1, len(page_ranges)
            )

        return self.finish(
            result, {"max_pages_per_split": max_pages, "total_splits": len(page_ranges)}
        )

    def can_handle(self, analysis: DocumentAnalysis | None = None) -> bool:
        return True

    def confidence_score(self, analysis: DocumentAnalysis | None = None) -> float:
        analysis = analysis or self.analysis
        if analysis.has_bookmarks or analysis.has_toc or analysis.has_content_patterns:
            return STRUCTURED_CONFIDENCE
        return UNSTRUCTURED_CONFIDENCE

    def determine_max_pages(self) -> int:
        """Explicit max_pages, else a limit derived from max_tokens, else the default."""
        if self.options.has_page_limit:
            return self.options.max_pages  # type: ignore[return-value]
        if self.options.has_token_limit:
            return max(math.ceil(self.options.max_tokens / TOKENS_PER_PAGE), 1)  # type: ignore[operator]
        return DEFAULT_PAGE_LIMIT


def calculate_page_ranges(total_pages: int, max_pages: int) -> list[tuple[int, int]]:
    """
    Partition pages 1..total_pages into windows of max_pages.

    Returns:
        List of (start_page, end_page) tuples, 1-based and inclusive.
    """
    if max_pages < 1:
        raise ValueError(f"max_pages must be >= 1, got {max_pages}")

    ranges = []
    current = 1
    while current <= total_pages:
        end = min(current + max_pages - 1, total_pages)
        ranges.append((current, end))
        current = end + 1
    return ranges
