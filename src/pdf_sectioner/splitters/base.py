"""
Base class for splitting strategies.

Every splitter exposes split(), can_handle(), confidence_score() and
strategy_name. split() attempts each section independently: a failing
section is logged and recorded in SplitResult.errors, and the remaining
sections still run. Only setup failures (output directory) propagate.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any

from pdf_sectioner.document import DocumentSource
from pdf_sectioner.file_namer import FileNamer
from pdf_sectioner.models import DocumentAnalysis, SplitFileInfo, SplitOptions, SplitResult

logger = logging.getLogger(__name__)


class BaseSplitter(ABC):
    strategy_name = "base"

    def __init__(
        self,
        document: DocumentSource,
        analysis: DocumentAnalysis,
        options: SplitOptions | None = None,
    ):
        self.document = document
        self.analysis = analysis
        self.options = options or SplitOptions()

    @abstractmethod
    def split(self) -> SplitResult:
        raise NotImplementedError

    @abstractmethod
    def can_handle(self, analysis: DocumentAnalysis | None = None) -> bool:
        raise NotImplementedError

    @abstractmethod
    def confidence_score(self, analysis: DocumentAnalysis | None = None) -> float:
        raise NotImplementedError

    def create_result(self) -> SplitResult:
        return SplitResult(
            source_file=str(self.document.file_path),
            strategy_used=self.strategy_name,
            total_pages=self.document.page_count(),
        )

    def create_file_namer(self) -> FileNamer:
        return FileNamer(self.document.file_path, self.options.output_dir)

    def report_progress(
        self, message: str, current: int | None = None, total: int | None = None
    ) -> None:
        callback = self.options.progress_callback
        if callback is None:
            return

        callback(
            {
                "message": message,
                "current": current,
                "total": total,
                "percentage": calculate_percentage(current, total),
            }
        )

    def write_segment(
        self,
        result: SplitResult,
        start_page: int,
        end_page: int,
        filename: str,
        file_namer: FileNamer,
        section_title: str | None = None,
    ) -> SplitFileInfo:
        """Export pages start_page..end_page (inclusive) and record the file."""
        page_numbers = list(range(start_page, end_page + 1))
        output_path = file_namer.full_path(filename)

        logger.debug(
            f"[BEGIN] Writing {filename}: pages {start_page}-{end_page} ({len(page_numbers)} pages)"
        )
        self.document.export_pages(
            page_numbers, output_path, preserve_metadata=self.options.preserve_metadata
        )

        file_info = SplitFileInfo(
            filename=str(output_path),
            pages=len(page_numbers),
            page_range=f"{start_page}-{end_page}",
            section_title=section_title,
        )
        result.add_split_file(file_info)
        logger.debug(f"[COMPLETE] {filename}")
        return file_info

    def record_failure(self, result: SplitResult, message: str) -> None:
        logger.error(message)
        result.add_error(message)

    def finish(self, result: SplitResult, metadata: dict[str, Any]) -> SplitResult:
        result.set_metadata({**metadata, "strategy_confidence": self.confidence_score()})
        logger.info(
            f"{self.strategy_name} split complete: {result.split_count} files, "
            f"{len(result.errors)} errors"
        )
        return result.finalize()


def calculate_percentage(current: int | None, total: int | None) -> float | None:
    if current is None or not total or total <= 0:
        return None
    return round(current / total * 100, 1)


def calculate_coverage(pages: list[int], total_pages: int) -> float:
    """Fraction of the document spanned from the first to the last section start."""
    if not pages or total_pages <= 0:
        return 0.0
    return (pages[-1] - pages[0] + 1) / total_pages
