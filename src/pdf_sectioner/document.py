"""
Document Source

The analyzers and splitters only talk to a DocumentSource: page count,
metadata, the raw outline tree, best-effort page text and styled text spans,
and page export into a new PDF. PdfDocument implements it on top of pypdf.
"""

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

from pypdf import PdfReader, PdfWriter

from pdf_sectioner.errors import DocumentNotFoundError, InvalidDocumentError, SectionExportError
from pdf_sectioner.models import DocumentMetadata, Position

logger = logging.getLogger(__name__)

# Fragments whose baseline moves more than this start a new line
LINE_TOLERANCE = 1.0

METADATA_KEYS = ("/Title", "/Author", "/Creator", "/Producer")


@dataclass(frozen=True)
class TextSpan:
    """One line of text with its approximate font size and position."""

    text: str
    font_size: float | None = None
    position: Position | None = None


class OutlineNode(Protocol):
    title: Any
    destination: Any
    first_child: "OutlineNode | None"
    next_sibling: "OutlineNode | None"


class DocumentSource(Protocol):
    file_path: Path

    def page_count(self) -> int: ...

    def metadata(self) -> DocumentMetadata: ...

    def outline_root(self) -> OutlineNode | None: ...

    def page_objects(self) -> Sequence[Any]: ...

    def page_text(self, page_number: int) -> str | None: ...

    def page_spans(self, page_number: int) -> list[TextSpan]: ...

    def export_pages(
        self, page_numbers: Sequence[int], output_path: str | Path, preserve_metadata: bool = True
    ) -> None: ...


def _resolve(value: Any) -> Any:
    if value is not None and hasattr(value, "get_object"):
        return value.get_object()
    return value


class PdfOutlineNode:
    """Wraps one raw /Outlines dictionary entry."""

    def __init__(self, document: "PdfDocument", obj: Any):
        self._document = document
        self._obj = obj

    @property
    def title(self) -> Any:
        return _resolve(self._obj.get("/Title"))

    @property
    def destination(self) -> Any:
        dest = _resolve(self._obj.get("/Dest"))
        if dest is None:
            return _resolve(self._obj.get("/A"))
        if isinstance(dest, (str, bytes)):
            return self._document.named_destination(dest)
        return dest

    @property
    def first_child(self) -> "PdfOutlineNode | None":
        return self._document.outline_node(_resolve(self._obj.get("/First")))

    @property
    def next_sibling(self) -> "PdfOutlineNode | None":
        return self._document.outline_node(_resolve(self._obj.get("/Next")))


class PdfDocument:
    """DocumentSource backed by pypdf."""

    def __init__(self, file_path: str | Path, reader: PdfReader | None = None):
        self.file_path = Path(file_path)
        self._reader = reader if reader is not None else PdfReader(str(self.file_path))
        self._pages: list[Any] | None = None
        # One wrapper per raw outline object so traversal can track identity
        self._outline_nodes: dict[int, PdfOutlineNode] = {}

    @property
    def reader(self) -> PdfReader:
        return self._reader

    def page_count(self) -> int:
        return len(self._reader.pages)

    def page_objects(self) -> Sequence[Any]:
        if self._pages is None:
            self._pages = list(self._reader.pages)
        return self._pages

    def metadata(self) -> DocumentMetadata:
        info = self._info()
        return DocumentMetadata(
            pages=self.page_count(),
            title=info.get("/Title") or "Unknown",
            author=info.get("/Author") or "Unknown",
            creator=info.get("/Creator") or "Unknown",
            producer=info.get("/Producer") or "Unknown",
            pdf_version=self._pdf_version(),
            file_size=self.file_path.stat().st_size if self.file_path.exists() else 0,
            creation_date=info.get("/CreationDate"),
            modification_date=info.get("/ModDate"),
        )

    def _info(self) -> dict[str, str]:
        try:
            info = self._reader.metadata
        except Exception as e:
            logger.warning(f"Could not read document information: {e}")
            return {}
        if not info:
            return {}
        values = {}
        for key in (*METADATA_KEYS, "/CreationDate", "/ModDate"):
            if key in info and info[key] is not None:
                values[key] = str(info[key])
        return values

    def _pdf_version(self) -> str | None:
        header = getattr(self._reader, "pdf_header", None)
        if not header:
            return None
        return str(header).replace("%PDF-", "").strip()

    def outline_root(self) -> PdfOutlineNode | None:
        try:
            catalog = self._reader.trailer["/Root"]
            if "/Outlines" not in catalog:
                return None
            return self.outline_node(catalog["/Outlines"])
        except Exception as e:
            logger.warning(f"Could not read outline: {e}")
            return None

    def outline_node(self, obj: Any) -> PdfOutlineNode | None:
        if obj is None or not hasattr(obj, "get"):
            return None
        node = self._outline_nodes.get(id(obj))
        if node is None:
            node = self._outline_nodes[id(obj)] = PdfOutlineNode(self, obj)
        return node

    def named_destination(self, name: Any) -> list[Any] | None:
        """Look up a named destination and return it as a destination array."""
        if isinstance(name, bytes):
            name = name.decode("latin-1")
        try:
            dest = self._reader.named_destinations.get(str(name))
        except Exception as e:
            logger.debug(f"Named destination lookup failed for {name!r}: {e}")
            return None
        if dest is None:
            return None
        return [dest.page]

    def page_text(self, page_number: int) -> str | None:
        try:
            return self._reader.pages[page_number - 1].extract_text()
        except Exception as e:
            logger.warning(f"Could not extract text from page {page_number}: {e}")
            return None

    def page_spans(self, page_number: int) -> list[TextSpan]:
        page = self._reader.pages[page_number - 1]
        collector = _LineCollector()
        page.extract_text(visitor_text=collector.visit)
        return collector.spans()

    def export_pages(
        self, page_numbers: Sequence[int], output_path: str | Path, preserve_metadata: bool = True
    ) -> None:
        total = self.page_count()
        try:
            writer = PdfWriter()
            for page_number in page_numbers:
                if not 1 <= page_number <= total:
                    raise ValueError(f"page {page_number} is outside 1-{total}")
                writer.add_page(self._reader.pages[page_number - 1])

            if preserve_metadata:
                info = {k: v for k, v in self._info().items() if k in METADATA_KEYS}
                if info:
                    writer.add_metadata(info)

            with open(output_path, "wb") as f:
                writer.write(f)
        except Exception as e:
            raise SectionExportError(
                f"Failed to create PDF from pages {_describe_pages(page_numbers)}: {e}"
            ) from e

        logger.debug(f"Wrote {output_path} ({len(page_numbers)} pages)")


def _describe_pages(page_numbers: Sequence[int]) -> str:
    if not page_numbers:
        return "[]"
    return f"{page_numbers[0]}-{page_numbers[-1]}"


def _effective_font_size(font_size: float, cm: Sequence[float], tm: Sequence[float]) -> float | None:
    """Scale the nominal font size by the vertical scale of the text and CTM matrices."""
    scale = math.hypot(tm[2], tm[3]) * math.hypot(cm[2], cm[3])
    size = float(font_size) * (scale or 1.0)
    return round(size, 1) if size > 0 else None


class _LineCollector:
    """Groups pypdf text fragments into lines."""

    def __init__(self):
        self._spans: list[TextSpan] = []
        self._parts: list[str] = []
        self._font_size: float | None = None
        self._position: Position | None = None

    def visit(self, text, cm, tm, font_dict, font_size) -> None:
        if not text:
            return
        size = _effective_font_size(font_size, cm, tm)
        x, y = float(tm[4]), float(tm[5])

        if self._position is not None and abs(y - self._position.y) > LINE_TOLERANCE:
            self._flush()

        for index, piece in enumerate(text.split("\n")):
            if index > 0:
                self._flush()
            if not piece.strip():
                continue
            if self._position is None:
                self._position = Position(x, y)
            self._parts.append(piece)
            if size is not None:
                self._font_size = max(self._font_size or 0.0, size)

    def _flush(self) -> None:
        text = "".join(self._parts).strip()
        if text:
            self._spans.append(TextSpan(text, self._font_size, self._position))
        self._parts = []
        self._font_size = None
        self._position = None

    def spans(self) -> list[TextSpan]:
        self._flush()
        return self._spans


def open_document(pdf_path: str | Path) -> PdfDocument:
    """
    Open a PDF as a DocumentSource.

    Raises:
        DocumentNotFoundError: If the file does not exist
        InvalidDocumentError: If pypdf cannot read it
    """
    pdf_path = Path(pdf_path)
    if not pdf_path.exists():
        raise DocumentNotFoundError(f"File not found: {pdf_path}")

    try:
        reader = PdfReader(str(pdf_path))
        total_pages = len(reader.pages)
    except Exception as e:
        raise InvalidDocumentError(f"Invalid PDF file: {e}") from e

    logger.debug(f"Opened {pdf_path.name}: {total_pages} pages")
    return PdfDocument(pdf_path, reader)
