"""Splitting strategies."""

from pdf_sectioner.splitters.bookmark_splitter import BookmarkSplitter
from pdf_sectioner.splitters.page_splitter import PageSplitter
from pdf_sectioner.splitters.smart_splitter import SmartSplitter
from pdf_sectioner.splitters.toc_splitter import TocSplitter

__all__ = ["BookmarkSplitter", "PageSplitter", "SmartSplitter", "TocSplitter"]
