"""
Tests for page range validation helpers.
"""

import pytest


class TestParsePageRange:
    """Tests for parse_page_range."""

    def test_valid(self):
        from pdf_sectioner.validation import parse_page_range

        assert parse_page_range("1-50") == (1, 50)
        assert parse_page_range(" 7 - 7 ") == (7, 7)

    @pytest.mark.parametrize("value", ["", "5", "0-3", "9-2", "a-b", "1-2-3"])
    def test_invalid(self, value):
        from pdf_sectioner.validation import parse_page_range

        with pytest.raises(ValueError):
            parse_page_range(value)


class TestCoverage:
    """Tests for get_page_coverage and find_overlaps."""

    def test_full_coverage(self):
        from pdf_sectioner.validation import get_page_coverage

        assert get_page_coverage([(1, 10), (11, 20), (21, 25)], 25)
        assert get_page_coverage([], 0)

    def test_gaps_and_overlaps_fail_coverage(self):
        from pdf_sectioner.validation import get_page_coverage

        assert not get_page_coverage([(1, 10), (12, 20)], 20)
        assert not get_page_coverage([(1, 10), (10, 20)], 20)
        assert not get_page_coverage([(1, 10)], 20)

    def test_find_overlaps(self):
        from pdf_sectioner.validation import find_overlaps

        assert find_overlaps([(1, 10), (11, 20)]) == []
        assert find_overlaps([(11, 20), (1, 11)]) == [((1, 11), (11, 20))]

    def test_result_ranges(self):
        from pdf_sectioner.models import SplitFileInfo, SplitResult
        from pdf_sectioner.validation import result_ranges

        result = SplitResult("doc.pdf", "pages", 20)
        result.add_split_file(SplitFileInfo("a.pdf", 10, "1-10", file_size=1))
        result.add_split_file(SplitFileInfo("b.pdf", 10, "11-20", file_size=1))

        assert result_ranges(result) == [(1, 10), (11, 20)]
