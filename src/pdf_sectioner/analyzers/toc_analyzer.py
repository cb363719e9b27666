"""
Table of Contents Analyzer

Finds table-of-contents pages among the first pages of a document and parses
their lines into TocEntry values ("Chapter 1: Introduction ..... 5").
"""

import logging
import re

from pdf_sectioner.analyzers.base import BaseAnalyzer
from pdf_sectioner.models import TocEntry

logger = logging.getLogger(__name__)

TOC_SCAN_PAGES = 10
TOC_LINE_RATIO = 0.3
MIN_TOC_LINES = 3
MIN_TITLE_LENGTH = 3

TOC_KEYWORDS = (
    "table of contents",
    "contents",
    "index",
    "table des matières",
    "inhalt",
    "indice",
)

# Tried in order; the first usable match wins
PAGE_NUMBER_PATTERNS = (
    re.compile(r"(\d+)$"),  # bare number at end
    re.compile(r"\.{2,}\s*(\d+)$"),  # dot leader
    re.compile(r"\s+(\d+)$"),  # whitespace
    re.compile(r"-+\s*(\d+)$"),  # dash leader
)

LEADING_WHITESPACE = re.compile(r"^(\s*)")


class TocAnalyzer(BaseAnalyzer):
    def analyze(self) -> list[TocEntry]:
        entries: list[TocEntry] = []
        toc_pages = self.detect_toc_pages()
        if toc_pages:
            logger.debug(f"Table of contents detected on pages {toc_pages}")

        for page_number in toc_pages:
            entries.extend(self.extract_toc_entries(page_number))

        return entries

    def detect_toc_pages(self) -> list[int]:
        try:
            page_count = self.document.page_count()
        except Exception as e:
            logger.warning(f"Could not count pages: {e}")
            return []

        toc_pages: list[int] = []
        for page_number in range(1, min(TOC_SCAN_PAGES, page_count) + 1):
            text = self._page_text(page_number)
            if not text:
                continue

            normalized = text.lower().strip()
            if any(keyword in normalized for keyword in TOC_KEYWORDS):
                toc_pages.append(page_number)
                # A TOC may continue onto the next page
                next_page = page_number + 1
                if next_page <= page_count:
                    next_text = self._page_text(next_page)
                    if next_text and looks_like_toc_content(next_text):
                        toc_pages.append(next_page)
            elif looks_like_toc_content(text):
                toc_pages.append(page_number)

        return sorted(set(toc_pages))

    def extract_toc_entries(self, page_number: int) -> list[TocEntry]:
        text = self._page_text(page_number)
        if not text:
            return []

        entries = []
        for raw_line in text.split("\n"):
            if not raw_line.strip():
                continue
            entry = parse_toc_line(raw_line)
            if entry is not None:
                entries.append(entry)
        return entries

    def _page_text(self, page_number: int) -> str | None:
        try:
            return self.document.page_text(page_number)
        except Exception as e:
            logger.warning(f"Could not extract text from page {page_number}: {e}")
            return None


def looks_like_toc_content(text: str) -> bool:
    """True if enough non-empty lines end in a page number."""
    lines = [line.strip() for line in text.split("\n") if line.strip()]
    if len(lines) < MIN_TOC_LINES:
        return False

    with_numbers = sum(
        1 for line in lines if any(pattern.search(line) for pattern in PAGE_NUMBER_PATTERNS)
    )
    return with_numbers / len(lines) >= TOC_LINE_RATIO


def parse_toc_line(raw_line: str) -> TocEntry | None:
    """Parse one TOC line into an entry, or None if it has no usable page number."""
    line = raw_line.strip()
    level = estimate_level(raw_line)

    for pattern in PAGE_NUMBER_PATTERNS:
        match = pattern.search(line)
        if not match:
            continue

        page_number = int(match.group(1))
        if page_number == 0:
            continue

        title = clean_title(pattern.sub("", line, count=1).strip())
        if len(title) < MIN_TITLE_LENGTH:
            continue

        return TocEntry(title=title, page=page_number, level=level)

    return None


def clean_title(title: str) -> str:
    """Remove dot and dash leaders around a TOC title."""
    previous = None
    while title != previous:
        previous = title
        title = re.sub(r"\.{2,}$", "", title)
        title = re.sub(r"^\.+", "", title)
        title = re.sub(r"-{2,}$", "", title)
        title = re.sub(r"^-+", "", title)
        title = title.strip()
    return title


def estimate_level(line: str) -> int:
    """Map leading whitespace to a TOC level (1-4)."""
    leading = len(LEADING_WHITESPACE.match(line).group(1))
    if leading <= 2:
        return 1
    if leading <= 6:
        return 2
    if leading <= 10:
        return 3
    return 4
