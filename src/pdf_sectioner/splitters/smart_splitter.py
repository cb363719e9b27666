"""
Smart Splitter

Asks the bookmark, TOC and page splitters (in that priority order) whether
they can handle the document and delegates to the most confident one. Ties
go to the earlier splitter.
"""

import logging

from pdf_sectioner.models import DocumentAnalysis, SplitResult
from pdf_sectioner.splitters.base import BaseSplitter
from pdf_sectioner.splitters.bookmark_splitter import BookmarkSplitter
from pdf_sectioner.splitters.page_splitter import PageSplitter
from pdf_sectioner.splitters.toc_splitter import TocSplitter

logger = logging.getLogger(__name__)

CANDIDATE_SPLITTERS: tuple[type[BaseSplitter], ...] = (BookmarkSplitter, TocSplitter, PageSplitter)


class SmartSplitter(BaseSplitter):
    strategy_name = "smart"

    def split(self) -> SplitResult:
        strategy = self.select_best_strategy()
        logger.info(
            f"Selected strategy: {strategy.strategy_name} "
            f"(confidence: {strategy.confidence_score():.2f})"
        )
        return strategy.split()

    def can_handle(self, analysis: DocumentAnalysis | None = None) -> bool:
        return True

    def confidence_score(self, analysis: DocumentAnalysis | None = None) -> float:
        return self.select_best_strategy(analysis).confidence_score(analysis)

    def available_strategies(self, analysis: DocumentAnalysis | None = None) -> list[BaseSplitter]:
        analysis = analysis or self.analysis
        return [cls(self.document, analysis, self.options) for cls in CANDIDATE_SPLITTERS]

    def select_best_strategy(self, analysis: DocumentAnalysis | None = None) -> BaseSplitter:
        strategies = self.available_strategies(analysis)
        capable = [s for s in strategies if s.can_handle()]

        for strategy in strategies:
            logger.debug(
                f"Candidate {strategy.strategy_name}: can_handle={strategy.can_handle()}, "
                f"confidence={strategy.confidence_score():.2f}"
            )

        if not capable:
            return strategies[-1]

        # max() keeps the first of equal scores, preserving priority order
        return max(capable, key=lambda s: s.confidence_score())
