"""
Bookmark Analyzer

Turns the document outline (/First, /Next chains) into a Bookmark forest.
Traversal is iterative and tracks visited nodes, so cyclic or very deep
outlines from damaged files terminate.
"""

import logging
from collections.abc import Sequence
from typing import Any

from pdf_sectioner.analyzers.base import BaseAnalyzer
from pdf_sectioner.models import Bookmark

logger = logging.getLogger(__name__)

UNTITLED = "Untitled"


class BookmarkAnalyzer(BaseAnalyzer):
    def analyze(self) -> list[Bookmark]:
        try:
            root = self.document.outline_root()
            first = root.first_child if root is not None else None
        except Exception as e:
            logger.warning(f"Could not read outline root: {e}")
            return []

        if first is None:
            logger.debug("Document has no outline")
            return []

        bookmarks = self._traverse(first)
        logger.debug(f"Extracted {len(bookmarks)} top-level bookmarks")
        return bookmarks

    def _traverse(self, first: Any) -> list[Bookmark]:
        roots: list[Bookmark] = []
        visited: set[int] = set()
        pages = self._page_objects()
        # (first node of a sibling chain, list receiving its bookmarks, level)
        stack: list[tuple[Any, list[Bookmark], int]] = [(first, roots, 1)]

        while stack:
            node, target, level = stack.pop()
            while node is not None and id(node) not in visited:
                visited.add(id(node))

                title = self.extract_title(node)
                page = self.extract_page_number(node, pages)

                if title is not None and page is not None:
                    bookmark = Bookmark(title=title, page=page, level=level)
                    target.append(bookmark)
                    child = self._safe_link(node, "first_child")
                    if child is not None:
                        stack.append((child, bookmark.children, level + 1))

                node = self._safe_link(node, "next_sibling")

            if node is not None:
                logger.warning("Outline contains a cycle; stopped revisiting nodes")

        return roots

    def _page_objects(self) -> Sequence[Any]:
        try:
            return self.document.page_objects()
        except Exception as e:
            logger.warning(f"Could not enumerate pages: {e}")
            return []

    @staticmethod
    def _safe_link(node: Any, attribute: str) -> Any:
        try:
            return getattr(node, attribute)
        except Exception as e:
            logger.debug(f"Could not follow outline link {attribute}: {e}")
            return None

    @staticmethod
    def extract_title(node: Any) -> str | None:
        """Return the node title, None when missing, "Untitled" when undecodable."""
        try:
            title = node.title
            if title is None:
                return None
            if isinstance(title, bytes):
                return title.decode("utf-8", errors="replace")
            return str(title)
        except Exception:
            return UNTITLED

    def extract_page_number(self, node: Any, pages: Sequence[Any] | None = None) -> int | None:
        """Resolve a node's destination to a 1-based page number."""
        if pages is None:
            pages = self._page_objects()
        try:
            dest = node.destination
            if dest is None:
                return None

            if isinstance(dest, dict):
                # Action dictionary: only GoTo actions point into this document
                if dest.get("/S") != "/GoTo" or not dest.get("/D"):
                    return None
                dest = dest["/D"]
                if hasattr(dest, "get_object"):
                    dest = dest.get_object()

            if isinstance(dest, (list, tuple)) and dest:
                return self.resolve_page_reference(dest[0], pages)
            return None
        except Exception as e:
            logger.debug(f"Could not resolve bookmark destination: {e}")
            return None

    @staticmethod
    def resolve_page_reference(page_ref: Any, pages: Sequence[Any]) -> int | None:
        if page_ref is None:
            return None
        try:
            for index, page in enumerate(pages):
                if _same_page(page, page_ref):
                    return index + 1

            # Indirect reference that did not match directly: resolve and retry
            if hasattr(page_ref, "get_object"):
                resolved = page_ref.get_object()
                if resolved is not page_ref:
                    for index, page in enumerate(pages):
                        if page is resolved or page == resolved:
                            return index + 1
        except Exception as e:
            logger.debug(f"Could not resolve page reference {page_ref!r}: {e}")
        return None


def _same_page(page: Any, page_ref: Any) -> bool:
    if page is page_ref:
        return True
    reference = getattr(page, "indirect_reference", None)
    if reference is not None and reference == page_ref:
        return True
    return page == page_ref
