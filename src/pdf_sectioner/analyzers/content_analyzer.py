"""
Content Analyzer

Scans the first pages for text spans that look like headers, using numbering
patterns ("Chapter 3", "2.1 Overview"), title-like capitalization and the
approximate font size reported by the document source.
"""

import logging
import re

from pdf_sectioner.analyzers.base import BaseAnalyzer
from pdf_sectioner.document import TextSpan
from pdf_sectioner.models import ContentPattern

logger = logging.getLogger(__name__)

CONTENT_SCAN_PAGES = 20
MIN_HEADER_SIZE = 14
MAX_HEADER_SIZE = 48
MIN_HEADER_LENGTH = 3
MAX_HEADER_LENGTH = 100

HEADER_PATTERNS = (
    re.compile(r"^chapter\s+\d+", re.IGNORECASE),
    re.compile(r"^section\s+\d+", re.IGNORECASE),
    re.compile(r"^\d+\.\s+"),  # 1. Title
    re.compile(r"^\d+\.\d+\s+"),  # 1.1 Title
    re.compile(r"^\d+\.\d+\.\d+\s+"),  # 1.1.1 Title
)

LEVEL_3_NUMBERING = re.compile(r"^\d+\.\d+\.\d+")
LEVEL_2_NUMBERING = re.compile(r"^\d+\.\d+")
LEVEL_1_NUMBERING = re.compile(r"^\d+\.")
CHAPTER_NUMBERING = re.compile(r"^chapter\s+\d+", re.IGNORECASE)


class ContentAnalyzer(BaseAnalyzer):
    def analyze(self) -> list[ContentPattern]:
        try:
            sample_pages = min(self.document.page_count(), CONTENT_SCAN_PAGES)
        except Exception as e:
            logger.warning(f"Could not count pages: {e}")
            return []

        patterns: list[ContentPattern] = []
        for page_number in range(1, sample_pages + 1):
            patterns.extend(self.analyze_page(page_number))

        logger.debug(f"Found {len(patterns)} header candidates in {sample_pages} pages")
        return sorted(patterns, key=lambda p: p.page)

    def analyze_page(self, page_number: int) -> list[ContentPattern]:
        try:
            spans = self.document.page_spans(page_number)
        except Exception as e:
            logger.warning(f"Could not analyze page {page_number}: {e}")
            return []

        patterns = []
        for span in spans:
            pattern = self.analyze_span(span, page_number)
            if pattern is not None:
                patterns.append(pattern)
        return patterns

    @staticmethod
    def analyze_span(span: TextSpan, page_number: int) -> ContentPattern | None:
        text = span.text.strip()
        if not is_potential_header(text, span.font_size):
            return None

        return ContentPattern(
            text=text,
            page=page_number,
            font_size=span.font_size,
            level=determine_header_level(text, span.font_size),
            position=span.position,
        )


def is_potential_header(text: str, font_size: float | None) -> bool:
    if not MIN_HEADER_LENGTH <= len(text) <= MAX_HEADER_LENGTH:
        return False
    if font_size is not None and not MIN_HEADER_SIZE <= font_size <= MAX_HEADER_SIZE:
        return False

    return (
        any(pattern.search(text) for pattern in HEADER_PATTERNS)
        or looks_like_title(text)
        or (font_size is not None and font_size >= MIN_HEADER_SIZE)
    )


def looks_like_title(text: str) -> bool:
    """Two to ten words, each capitalized or all caps, or the whole line in caps."""
    words = text.split()
    if not 2 <= len(words) <= 10:
        return False

    title_case = all(word == word.capitalize() or word == word.upper() for word in words)
    all_caps = text == text.upper() and re.search(r"[A-Z]", text) is not None
    return title_case or all_caps


def determine_header_level(text: str, font_size: float | None) -> int:
    """Numbering depth first, then font size buckets."""
    if LEVEL_3_NUMBERING.search(text):
        return 3
    if LEVEL_2_NUMBERING.search(text):
        return 2
    if LEVEL_1_NUMBERING.search(text) or CHAPTER_NUMBERING.search(text):
        return 1

    if font_size is None:
        return 2
    if 18 <= font_size <= MAX_HEADER_SIZE:
        return 1
    if 16 <= font_size <= 17:
        return 2
    if 14 <= font_size <= 15:
        return 3
    return 2
