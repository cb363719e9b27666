"""
Shared fixtures: an in-memory DocumentSource and small real PDFs built with pypdf.
"""

import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest

from pdf_sectioner.document import TextSpan
from pdf_sectioner.errors import SectionExportError
from pdf_sectioner.models import (
    Bookmark,
    ContentPattern,
    DocumentAnalysis,
    DocumentMetadata,
    TocEntry,
)


@dataclass(eq=False)
class FakeOutlineNode:
    title: Any
    destination: Any = None
    first_child: "FakeOutlineNode | None" = None
    next_sibling: "FakeOutlineNode | None" = None


@dataclass
class FakeSource:
    """DocumentSource backed by plain Python values."""

    total_pages: int
    file_path: Path = Path("report.pdf")
    texts: dict[int, str] = field(default_factory=dict)
    spans: dict[int, list[TextSpan]] = field(default_factory=dict)
    outline: FakeOutlineNode | None = None
    fail_pages: set[int] = field(default_factory=set)
    exported: list[tuple[list[int], Path]] = field(default_factory=list)

    def __post_init__(self):
        self.pages = [object() for _ in range(self.total_pages)]

    def page_count(self):
        return self.total_pages

    def metadata(self):
        return DocumentMetadata(pages=self.total_pages, title="Report")

    def outline_root(self):
        return self.outline

    def page_objects(self):
        return self.pages

    def page_text(self, page_number):
        return self.texts.get(page_number)

    def page_spans(self, page_number):
        return self.spans.get(page_number, [])

    def export_pages(self, page_numbers, output_path, preserve_metadata=True):
        if self.fail_pages.intersection(page_numbers):
            raise SectionExportError(
                f"Failed to create PDF from pages {page_numbers[0]}-{page_numbers[-1]}: boom"
            )
        Path(output_path).write_bytes(b"%PDF-1.4 fake")
        self.exported.append((list(page_numbers), Path(output_path)))


def outline_chain(*nodes):
    """Link nodes as siblings under a root node and return the root."""
    for current, following in zip(nodes, nodes[1:]):
        current.next_sibling = following
    return FakeOutlineNode(title=None, first_child=nodes[0] if nodes else None)


def make_analysis(total_pages, bookmarks=(), toc_entries=(), content_patterns=()):
    analysis = DocumentAnalysis(DocumentMetadata(pages=total_pages))
    for bookmark in bookmarks:
        analysis.add_bookmark(bookmark)
    for entry in toc_entries:
        analysis.add_toc_entry(entry)
    for pattern in content_patterns:
        analysis.add_content_pattern(pattern)
    return analysis


def bookmarks_at(*pages):
    return [Bookmark(title=f"Chapter {i + 1}", page=page) for i, page in enumerate(pages)]


def toc_at(*pages):
    return [TocEntry(title=f"Chapter {i + 1}", page=page) for i, page in enumerate(pages)]


def headers_at(*pages):
    return [
        ContentPattern(text=f"Chapter {i + 1}", page=page, font_size=20, level=1)
        for i, page in enumerate(pages)
    ]


def write_pdf(path, pages, outline=(), metadata=None):
    """
    Write a blank-page PDF.

    outline: (title, zero-based page index) pairs added as top-level bookmarks.
    """
    from pypdf import PdfWriter

    writer = PdfWriter()
    for _ in range(pages):
        writer.add_blank_page(width=612, height=792)
    for title, page_index in outline:
        writer.add_outline_item(title, page_index)
    if metadata:
        writer.add_metadata(metadata)
    with open(path, "wb") as f:
        writer.write(f)
    return Path(path)


def _escape(text):
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def write_text_pdf(path, pages):
    """
    Write a PDF whose pages carry real text.

    pages: one list per page of (text, font_size) lines, drawn top to bottom
    in Helvetica. Use an empty list for a blank page.
    """
    from pypdf import PdfWriter
    from pypdf.generic import DecodedStreamObject, DictionaryObject, NameObject

    writer = PdfWriter()
    for lines in pages:
        page = writer.add_blank_page(width=612, height=792)
        font = DictionaryObject(
            {
                NameObject("/Type"): NameObject("/Font"),
                NameObject("/Subtype"): NameObject("/Type1"),
                NameObject("/BaseFont"): NameObject("/Helvetica"),
                NameObject("/Encoding"): NameObject("/WinAnsiEncoding"),
            }
        )
        page[NameObject("/Resources")] = DictionaryObject(
            {NameObject("/Font"): DictionaryObject({NameObject("/F1"): font})}
        )

        operations = []
        y = 720
        for text, font_size in lines:
            operations.append(f"BT /F1 {font_size} Tf 72 {y} Td ({_escape(text)}) Tj ET")
            y -= font_size + 12
        stream = DecodedStreamObject()
        stream.set_data("\n".join(operations).encode("latin-1"))
        page[NameObject("/Contents")] = writer._add_object(stream)

    with open(path, "wb") as f:
        writer.write(f)
    return Path(path)


@pytest.fixture
def output_dir():
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "splits"


@pytest.fixture
def blank_pdf():
    """A 25-page PDF without structure."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield write_pdf(Path(tmpdir) / "blank.pdf", 25)


@pytest.fixture
def bookmarked_pdf():
    """A 30-page PDF with three top-level bookmarks at pages 1, 11 and 21."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield write_pdf(
            Path(tmpdir) / "manual.pdf",
            30,
            outline=[("Introduction", 0), ("Installation", 10), ("Reference", 20)],
            metadata={"/Title": "Manual", "/Author": "Docs Team", "/CreationDate": "D:20240131120000"},
        )
