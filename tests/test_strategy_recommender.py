"""
Tests for StrategyRecommender.
"""

from conftest import bookmarks_at, headers_at, make_analysis, toc_at


class TestPrimaryStrategy:
    """Tests for the strategy ranking."""

    def test_wide_bookmarks_win(self):
        from pdf_sectioner.analyzers import StrategyRecommender

        analysis = make_analysis(100, bookmarks=bookmarks_at(1, 30, 60, 90))
        recommendation = StrategyRecommender(analysis).analyze()

        assert recommendation.primary_strategy == "bookmarks"
        assert recommendation.confidence == 0.95
        assert recommendation.fallback_strategies == ("pages",)
        assert "4 bookmarks" in recommendation.reasoning

    def test_narrow_bookmarks_fall_through(self):
        from pdf_sectioner.analyzers import StrategyRecommender

        analysis = make_analysis(100, bookmarks=bookmarks_at(1, 20))
        recommendation = StrategyRecommender(analysis).analyze()

        assert recommendation.primary_strategy == "pages"
        assert recommendation.fallback_strategies == ("bookmarks", "pages")

    def test_toc(self):
        from pdf_sectioner.analyzers import StrategyRecommender

        analysis = make_analysis(50, toc_entries=toc_at(3, 10, 25))
        recommendation = StrategyRecommender(analysis).analyze()

        assert recommendation.primary_strategy == "toc"
        assert recommendation.confidence == 0.80

    def test_toc_pointing_past_the_end_is_unreliable(self):
        from pdf_sectioner.analyzers import StrategyRecommender

        analysis = make_analysis(20, toc_entries=toc_at(3, 10, 25))
        assert StrategyRecommender(analysis).determine_primary_strategy() == "pages"

    def test_headers(self):
        from pdf_sectioner.analyzers import StrategyRecommender

        analysis = make_analysis(40, content_patterns=headers_at(1, 10, 20))
        recommendation = StrategyRecommender(analysis).analyze()

        assert recommendation.primary_strategy == "headers"
        assert recommendation.confidence == 0.65
        assert recommendation.fallback_strategies == ("pages",)

    def test_headers_need_a_top_level_one(self):
        from pdf_sectioner.analyzers import StrategyRecommender
        from pdf_sectioner.models import ContentPattern

        patterns = [ContentPattern(f"1.{i} Part", i, font_size=16, level=2) for i in range(1, 5)]
        analysis = make_analysis(40, content_patterns=patterns)

        assert StrategyRecommender(analysis).determine_primary_strategy() == "pages"

    def test_empty_document(self):
        from pdf_sectioner.analyzers import StrategyRecommender
        from pdf_sectioner.models import DocumentAnalysis, DocumentMetadata

        recommendation = StrategyRecommender(DocumentAnalysis(DocumentMetadata(pages=0))).analyze()

        assert recommendation.primary_strategy == "pages"
        assert recommendation.confidence == 0.40
        assert recommendation.fallback_strategies == ("pages",)
        assert "No reliable structure" in recommendation.reasoning

    def test_fallbacks_list_other_usable_sources(self):
        from pdf_sectioner.analyzers import StrategyRecommender

        analysis = make_analysis(
            100,
            bookmarks=bookmarks_at(1, 50),
            toc_entries=toc_at(1, 50, 80),
            content_patterns=headers_at(1, 2, 3),
        )
        recommendation = StrategyRecommender(analysis).analyze()

        assert recommendation.primary_strategy == "bookmarks"
        assert recommendation.fallback_strategies == ("toc", "headers", "pages")
