"""
Strategy Recommender

Ranks the splitting strategies for an analyzed document. The confidence is a
fixed value per strategy class, not a measure of how good the structure is.
"""

import logging

from pdf_sectioner.models import DocumentAnalysis, Recommendation

logger = logging.getLogger(__name__)

STRATEGIES = ("bookmarks", "toc", "headers", "pages")

BOOKMARKS_CONFIDENCE = 0.95
TOC_CONFIDENCE = 0.80
HEADERS_CONFIDENCE = 0.65
PAGES_CONFIDENCE = 0.40

MIN_BOOKMARK_COVERAGE = 0.3


class StrategyRecommender:
    def __init__(self, analysis: DocumentAnalysis):
        self.analysis = analysis

    def analyze(self) -> Recommendation:
        primary = self.determine_primary_strategy()
        recommendation = Recommendation(
            primary_strategy=primary,
            fallback_strategies=tuple(self.determine_fallback_strategies(primary)),
            confidence=self.calculate_confidence(primary),
            reasoning=self.generate_reasoning(primary),
        )
        logger.info(
            f"Recommended strategy: {primary} (confidence {recommendation.confidence:.2f})"
        )
        return recommendation

    def determine_primary_strategy(self) -> str:
        if self.reliable_bookmarks():
            return "bookmarks"
        if self.reliable_toc():
            return "toc"
        if self.reliable_headers():
            return "headers"
        return "pages"

    def determine_fallback_strategies(self, primary: str) -> list[str]:
        analysis = self.analysis
        usable = {
            "bookmarks": analysis.has_bookmarks,
            "toc": analysis.has_toc,
            "headers": bool(analysis.headers),
        }
        fallbacks = [name for name, available in usable.items() if available and name != primary]
        fallbacks.append("pages")
        return fallbacks

    @staticmethod
    def calculate_confidence(primary: str) -> float:
        return {
            "bookmarks": BOOKMARKS_CONFIDENCE,
            "toc": TOC_CONFIDENCE,
            "headers": HEADERS_CONFIDENCE,
        }.get(primary, PAGES_CONFIDENCE)

    def generate_reasoning(self, primary: str) -> str:
        analysis = self.analysis
        if primary == "bookmarks":
            reason = "Document has comprehensive bookmark structure"
            if analysis.bookmarks:
                reason += f" with {len(analysis.bookmarks)} bookmarks"
            return reason
        if primary == "toc":
            return (
                f"Document has detectable table of contents with "
                f"{len(analysis.toc_entries)} entries"
            )
        if primary == "headers":
            return f"Document has structured headers with {len(analysis.headers)} detected patterns"
        return "No reliable structure detected, falling back to page-based splitting"

    def _total_pages(self) -> int:
        return self.analysis.total_pages or 1

    def reliable_bookmarks(self) -> bool:
        bookmarks = self.analysis.bookmarks
        if len(bookmarks) < 2:
            return False

        pages = sorted(b.page for b in bookmarks)
        coverage = (pages[-1] - pages[0]) / self._total_pages()
        return coverage > MIN_BOOKMARK_COVERAGE and len(set(pages)) > 1

    def reliable_toc(self) -> bool:
        entries = self.analysis.toc_entries
        if len(entries) < 3:
            return False

        total_pages = self._total_pages()
        pages = [e.page for e in entries]
        return all(0 < p <= total_pages for p in pages) and len(set(pages)) >= 3

    def reliable_headers(self) -> bool:
        headers = self.analysis.headers
        if len(headers) < 3:
            return False
        return any(h.level == 1 for h in headers)
