"""
Structure Models

Value types shared by the analyzers, the recommender and the splitters:
- Bookmark / TocEntry / ContentPattern: candidate structure
- DocumentAnalysis: aggregate of one analysis run
- SplitOptions / SplitResult / SplitFileInfo: splitting inputs and outputs
"""

import math
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

DEFAULT_OUTPUT_DIR = "./splits"
DEFAULT_PAGE_LIMIT = 50
# SplitOptions estimates ~300 tokens per page; PageSplitter uses its own ratio
TOKENS_PER_PAGE = 300

VALID_STRATEGIES = ("auto", "bookmarks", "toc", "pages")

ProgressCallback = Callable[[dict[str, Any]], None]


@dataclass
class Bookmark:
    """A node of the document outline."""

    title: str
    page: int
    level: int = 1
    children: list["Bookmark"] = field(default_factory=list)

    def __post_init__(self):
        if self.page < 1:
            raise ValueError(f"Bookmark page must be >= 1, got {self.page}")
        if self.level < 1:
            raise ValueError(f"Bookmark level must be >= 1, got {self.level}")

    def add_child(self, bookmark: "Bookmark") -> None:
        self.children.append(bookmark)

    @property
    def has_children(self) -> bool:
        return bool(self.children)

    def walk(self) -> Iterator["Bookmark"]:
        """Yield this bookmark and all descendants in pre-order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def depth(self) -> int:
        """Number of levels in this subtree (1 for a leaf)."""
        return max(b.level for b in self.walk()) - self.level + 1

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "page": self.page,
            "level": self.level,
            "children": [child.to_dict() for child in self.children],
        }

    def display_text(self, indent: int = 0) -> str:
        prefix = "  " * indent
        text = f"{prefix}{self.title} (Page {self.page})"
        if not self.has_children:
            return text
        child_texts = [child.display_text(indent + 1) for child in self.children]
        return "\n".join([text, *child_texts])


@dataclass
class TocEntry:
    """A line parsed from a table of contents page."""

    title: str
    page: int
    level: int = 1

    def __post_init__(self):
        self.title = self.title.strip()
        if len(self.title) < 3:
            raise ValueError(f"TOC title must have at least 3 characters, got {self.title!r}")
        if self.page <= 0:
            raise ValueError(f"TOC page must be > 0, got {self.page}")
        if not 1 <= self.level <= 4:
            raise ValueError(f"TOC level must be within 1..4, got {self.level}")

    def to_dict(self) -> dict[str, Any]:
        return {"title": self.title, "page": self.page, "level": self.level}

    def display_text(self, indent: int = 0) -> str:
        return f"{'  ' * indent}{self.title} ... {self.page}"


@dataclass(frozen=True)
class Position:
    x: float
    y: float

    def to_dict(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y}


@dataclass
class ContentPattern:
    """A text span that looks like a header."""

    text: str
    page: int
    font_size: float | None = None
    level: int = 1
    position: Position | None = None

    def __post_init__(self):
        self.text = self.text.strip()

    @property
    def is_header(self) -> bool:
        return self.level <= 3 and self.font_size is not None and self.font_size > 12

    def to_dict(self) -> dict[str, Any]:
        data = {
            "text": self.text,
            "page": self.page,
            "font_size": self.font_size,
            "level": self.level,
            "position": self.position.to_dict() if self.position else None,
        }
        return {key: value for key, value in data.items() if value is not None}

    def display_text(self, indent: int = 0) -> str:
        size_info = f" ({self.font_size}pt)" if self.font_size else ""
        return f"{'  ' * indent}{self.text}{size_info} [Page {self.page}]"


@dataclass
class DocumentMetadata:
    pages: int
    title: str = "Unknown"
    author: str = "Unknown"
    creator: str = "Unknown"
    producer: str = "Unknown"
    pdf_version: str | None = None
    file_size: int = 0
    creation_date: str | None = None
    modification_date: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "pages": self.pages,
            "title": self.title,
            "author": self.author,
            "creator": self.creator,
            "producer": self.producer,
            "pdf_version": self.pdf_version,
            "file_size": self.file_size,
        }


@dataclass(frozen=True)
class Recommendation:
    primary_strategy: str
    fallback_strategies: tuple[str, ...]
    confidence: float
    reasoning: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "primary_strategy": self.primary_strategy,
            "fallback_strategies": list(self.fallback_strategies),
            "confidence": self.confidence,
            "reasoning": self.reasoning,
        }


class DocumentAnalysis:
    """
    Aggregate of one analysis run.

    Analyzers append their findings in turn. Setting the recommendation
    freezes the aggregate: later mutation raises RuntimeError.
    """

    def __init__(self, metadata: DocumentMetadata):
        self.metadata = metadata
        self._bookmarks: list[Bookmark] = []
        self._toc_entries: list[TocEntry] = []
        self._content_patterns: list[ContentPattern] = []
        self._recommendation: Recommendation | None = None

    @property
    def bookmarks(self) -> tuple[Bookmark, ...]:
        return tuple(self._bookmarks)

    @property
    def toc_entries(self) -> tuple[TocEntry, ...]:
        return tuple(self._toc_entries)

    @property
    def content_patterns(self) -> tuple[ContentPattern, ...]:
        return tuple(self._content_patterns)

    @property
    def recommendation(self) -> Recommendation | None:
        return self._recommendation

    @property
    def is_frozen(self) -> bool:
        return self._recommendation is not None

    def _check_mutable(self) -> None:
        if self.is_frozen:
            raise RuntimeError("DocumentAnalysis is read-only once a recommendation is set")

    def add_bookmark(self, bookmark: Bookmark) -> None:
        self._check_mutable()
        self._bookmarks.append(bookmark)

    def add_toc_entry(self, entry: TocEntry) -> None:
        self._check_mutable()
        self._toc_entries.append(entry)

    def add_content_pattern(self, pattern: ContentPattern) -> None:
        self._check_mutable()
        self._content_patterns.append(pattern)

    def set_recommendation(self, recommendation: Recommendation) -> None:
        self._check_mutable()
        self._recommendation = recommendation

    @property
    def total_pages(self) -> int:
        return self.metadata.pages

    @property
    def has_bookmarks(self) -> bool:
        return bool(self._bookmarks)

    @property
    def has_toc(self) -> bool:
        return bool(self._toc_entries)

    @property
    def has_content_patterns(self) -> bool:
        return bool(self._content_patterns)

    @property
    def headers(self) -> list[ContentPattern]:
        return [p for p in self._content_patterns if p.is_header]

    def summary(self) -> dict[str, Any]:
        rec = self._recommendation
        return {
            "total_pages": self.total_pages,
            "has_bookmarks": self.has_bookmarks,
            "bookmark_count": len(self._bookmarks),
            "has_toc": self.has_toc,
            "toc_entries": len(self._toc_entries),
            "content_patterns": len(self._content_patterns),
            "recommended_strategy": rec.primary_strategy if rec else None,
            "confidence": rec.confidence if rec else None,
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "metadata": self.metadata.to_dict(),
            "bookmarks": [b.to_dict() for b in self._bookmarks],
            "toc": {
                "detected": self.has_toc,
                "entries": [e.to_dict() for e in self._toc_entries],
            },
            "content_patterns": {
                "headers": [p.to_dict() for p in self.headers],
                "sections": self.derive_sections(),
            },
            "recommendations": self._recommendation.to_dict() if self._recommendation else {},
        }

    def derive_sections(self) -> list[dict[str, Any]]:
        """Section spans from level-1 bookmarks, else from level-1 headers."""
        if self.has_bookmarks:
            return self._bookmark_sections()
        if self.has_content_patterns:
            return self._header_sections()
        return []

    def _bookmark_sections(self) -> list[dict[str, Any]]:
        sections = []
        for index, bookmark in enumerate(self._bookmarks):
            if bookmark.level != 1:
                continue
            next_major = next(
                (b for b in self._bookmarks[index + 1 :] if b.level <= bookmark.level), None
            )
            sections.append(
                {
                    "title": bookmark.title,
                    "start_page": bookmark.page,
                    "end_page": next_major.page - 1 if next_major else self.total_pages,
                }
            )
        return sections

    def _header_sections(self) -> list[dict[str, Any]]:
        headers = [p for p in self.headers if p.level == 1]
        sections = []
        for index, header in enumerate(headers):
            next_header = headers[index + 1] if index + 1 < len(headers) else None
            sections.append(
                {
                    "title": header.text,
                    "start_page": header.page,
                    "end_page": next_header.page - 1 if next_header else self.total_pages,
                }
            )
        return sections


@dataclass
class SplitOptions:
    """Options controlling a split run."""

    strategy: str = "auto"
    max_pages: int | None = None
    max_tokens: int | None = None
    output_dir: str = DEFAULT_OUTPUT_DIR
    preserve_metadata: bool = True
    progress_callback: ProgressCallback | None = None

    @property
    def is_auto_strategy(self) -> bool:
        return self.strategy == "auto"

    @property
    def is_forced_strategy(self) -> bool:
        return not self.is_auto_strategy

    @property
    def has_page_limit(self) -> bool:
        return self.max_pages is not None and self.max_pages > 0

    @property
    def has_token_limit(self) -> bool:
        return self.max_tokens is not None and self.max_tokens > 0

    @property
    def effective_page_limit(self) -> int:
        if self.has_page_limit:
            return self.max_pages  # type: ignore[return-value]
        if self.has_token_limit:
            return max(math.ceil(self.max_tokens / TOKENS_PER_PAGE), 1)  # type: ignore[operator]
        return DEFAULT_PAGE_LIMIT

    def to_dict(self) -> dict[str, Any]:
        return {
            "strategy": self.strategy,
            "max_pages": self.max_pages,
            "max_tokens": self.max_tokens,
            "output_dir": self.output_dir,
            "preserve_metadata": self.preserve_metadata,
        }


@dataclass
class SplitFileInfo:
    """One output file of a split."""

    filename: str
    pages: int
    page_range: str
    section_title: str | None = None
    file_size: int | None = None

    def __post_init__(self):
        if self.file_size is None:
            path = Path(self.filename)
            self.file_size = path.stat().st_size if path.exists() else 0

    @property
    def start_page(self) -> int:
        return int(self.page_range.split("-")[0])

    @property
    def end_page(self) -> int:
        return int(self.page_range.split("-")[1])

    def to_dict(self) -> dict[str, Any]:
        return {
            "filename": self.filename,
            "pages": self.pages,
            "page_range": self.page_range,
            "section_title": self.section_title,
            "file_size": self.file_size,
        }


class SplitResult:
    """
    Outcome of a split run.

    Built by a splitter as segments complete, then finalized before it is
    returned; a finalized result rejects further changes.
    """

    def __init__(self, source_file: str, strategy_used: str, total_pages: int = 0):
        self.source_file = source_file
        self.strategy_used = strategy_used
        self.total_pages = total_pages
        self._output_files: list[SplitFileInfo] = []
        self._errors: list[str] = []
        self._metadata: dict[str, Any] = {}
        self._finalized = False

    @property
    def output_files(self) -> tuple[SplitFileInfo, ...]:
        return tuple(self._output_files)

    @property
    def errors(self) -> tuple[str, ...]:
        return tuple(self._errors)

    @property
    def metadata(self) -> dict[str, Any]:
        return dict(self._metadata)

    @property
    def split_count(self) -> int:
        return len(self._output_files)

    @property
    def is_finalized(self) -> bool:
        return self._finalized

    def _check_mutable(self) -> None:
        if self._finalized:
            raise RuntimeError("SplitResult is finalized")

    def add_split_file(self, file_info: SplitFileInfo) -> None:
        self._check_mutable()
        self._output_files.append(file_info)

    def add_error(self, error: str) -> None:
        self._check_mutable()
        self._errors.append(error)

    def set_metadata(self, metadata: dict[str, Any]) -> None:
        self._check_mutable()
        self._metadata = dict(metadata)

    def finalize(self) -> "SplitResult":
        self._finalized = True
        return self

    @property
    def success(self) -> bool:
        return not self._errors and self.split_count > 0

    @property
    def partial_success(self) -> bool:
        return self.split_count > 0 and bool(self._errors)

    @property
    def failure(self) -> bool:
        return self.split_count == 0

    def summary(self) -> str:
        """Return a human-readable summary."""
        if self.success:
            return (
                f"Successfully split {self.source_file} into {self.split_count} files "
                f"using {self.strategy_used} strategy"
            )
        if self.partial_success:
            return (
                f"Partially split {self.source_file} into {self.split_count} files "
                f"with {len(self._errors)} errors"
            )
        return f"Failed to split {self.source_file}: {', '.join(self._errors)}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "source_file": self.source_file,
            "strategy_used": self.strategy_used,
            "total_pages": self.total_pages,
            "split_count": self.split_count,
            "output_files": [f.to_dict() for f in self._output_files],
            "metadata": self.metadata,
            "errors": list(self._errors),
            "success": self.success,
        }
