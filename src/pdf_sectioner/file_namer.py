"""
File naming for split output.

    report_ch01_introduction.pdf      chapter-style sections
    report_ch02_setup_part_1.pdf      one part of an oversized chapter
    report_pages_001-050.pdf          page-range sections
"""

import logging
import re
from pathlib import Path

from pdf_sectioner.errors import OutputDirectoryError

logger = logging.getLogger(__name__)

MAX_TITLE_LENGTH = 50


class FileNamer:
    def __init__(self, source_file: str | Path, output_dir: str | Path = "./splits"):
        self.source_file = Path(source_file)
        self.output_dir = Path(output_dir)
        self.base_name = self.source_file.stem
        self._ensure_output_directory()

    def _ensure_output_directory(self) -> None:
        if self.output_dir.is_dir():
            return
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise OutputDirectoryError(
                f"Failed to create output directory {self.output_dir}: {e}"
            ) from e
        logger.debug(f"Created output directory: {self.output_dir}")

    def chapter_name(
        self, chapter_number: int, chapter_title: str | None = None, part: int | None = None
    ) -> str:
        # Part suffix goes after truncation so parts of one chapter never collide
        safe_title = sanitize_filename(chapter_title) if chapter_title else ""
        suffix = f"_part_{part}" if part is not None else ""
        if safe_title:
            return f"{self.base_name}_ch{chapter_number:02d}_{safe_title}{suffix}.pdf"
        return f"{self.base_name}_chapter_{chapter_number:02d}{suffix}.pdf"

    def section_name(self, index: int, section_title: str | None = None) -> str:
        safe_title = sanitize_filename(section_title) if section_title else ""
        if safe_title:
            return f"{self.base_name}_{index:03d}_{safe_title}.pdf"
        return f"{self.base_name}_section_{index:03d}.pdf"

    def page_range_name(self, start_page: int, end_page: int) -> str:
        return f"{self.base_name}_pages_{start_page:03d}-{end_page:03d}.pdf"

    def full_path(self, filename: str) -> Path:
        return self.output_dir / filename


def sanitize_filename(text: str) -> str:
    """Lowercase, underscore-separated, at most 50 characters."""
    text = re.sub(r"[^\w\s-]", "", text)
    text = re.sub(r"\s+", "_", text)
    text = re.sub(r"_+", "_", text)
    text = text.strip("_")
    return text[:MAX_TITLE_LENGTH].lower()
