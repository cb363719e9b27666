"""Structure analyzers: bookmarks, table of contents, content headers, recommendations."""

from pdf_sectioner.analyzers.bookmark_analyzer import BookmarkAnalyzer
from pdf_sectioner.analyzers.content_analyzer import ContentAnalyzer
from pdf_sectioner.analyzers.strategy_recommender import StrategyRecommender
from pdf_sectioner.analyzers.toc_analyzer import TocAnalyzer

__all__ = ["BookmarkAnalyzer", "ContentAnalyzer", "StrategyRecommender", "TocAnalyzer"]
