"""
TOC Splitter

One output file per chapter-level (level 1) table of contents entry, with a
"Front Matter" section for the pages before the first chapter. Sections
longer than max_pages are cut into consecutive parts of max_pages pages,
titled "<title> (Part N)".
"""

import logging
import math
from typing import NamedTuple

from pdf_sectioner.file_namer import FileNamer
from pdf_sectioner.models import DocumentAnalysis, SplitResult, TocEntry
from pdf_sectioner.splitters.base import BaseSplitter, calculate_coverage

logger = logging.getLogger(__name__)

DEFAULT_MAX_PAGES = 100
FRONT_MATTER_TITLE = "Front Matter"

BASE_CONFIDENCE = 0.8
COVERAGE_WEIGHT = 0.15
DENSITY_WEIGHT = 0.05


class Section(NamedTuple):
    title: str
    start_page: int
    end_page: int
    part: int | None = None

    @property
    def page_count(self) -> int:
        return self.end_page - self.start_page + 1


class TocSplitter(BaseSplitter):
    strategy_name = "toc"

    @property
    def max_pages(self) -> int:
        return self.options.max_pages or DEFAULT_MAX_PAGES

    def split(self) -> SplitResult:
        result = self.create_result()

        if not self.can_handle():
            self.record_failure(result, "Document does not have detectable table of contents")
            return result.finalize()

        file_namer = self.create_file_namer()
        chapters = self.chapters()
        sections = self.plan_sections()
        has_front_matter = chapters[0].page > 1
        logger.debug(f"Found {len(chapters)} chapter-level TOC entries, {len(sections)} sections")

        self.report_progress("Starting TOC-based splitting", 0, len(sections))

        for index, section in enumerate(sections):
            self.split_section(section, index + 1, file_namer, result)
            if index == 0 and has_front_matter:
                message = f"Processed front matter (pages 1-{section.end_page})"
            else:
                message = f"Processed section: {section.title}"
            self.report_progress(message, index + 1, len(sections))

        return self.finish(result, {"toc_entries_processed": len(chapters)})

    def chapters(self, analysis: DocumentAnalysis | None = None) -> list[TocEntry]:
        analysis = analysis or self.analysis
        return [entry for entry in analysis.toc_entries if entry.level == 1]

    def can_handle(self, analysis: DocumentAnalysis | None = None) -> bool:
        return len(self.chapters(analysis)) >= 2

    def confidence_score(self, analysis: DocumentAnalysis | None = None) -> float:
        analysis = analysis or self.analysis
        if not self.can_handle(analysis):
            return 0.0

        chapters = self.chapters(analysis)
        coverage = calculate_coverage([c.page for c in chapters], analysis.total_pages or 1)
        density = min(len(chapters) / 10.0, 1.0)

        score = BASE_CONFIDENCE + coverage * COVERAGE_WEIGHT + density * DENSITY_WEIGHT
        return min(score, 1.0)

    def plan_sections(self) -> list[Section]:
        """Front matter (if any) followed by one section per chapter."""
        chapters = self.chapters()
        if not chapters:
            return []

        total_pages = self.analysis.total_pages
        sections = []
        if chapters[0].page > 1:
            sections.append(Section(FRONT_MATTER_TITLE, 1, chapters[0].page - 1))

        for index, entry in enumerate(chapters):
            if index + 1 < len(chapters):
                end_page = chapters[index + 1].page - 1
            else:
                end_page = total_pages
            sections.append(Section(entry.title, entry.page, end_page))

        return sections

    def segment_exceeds_max_pages(self, start_page: int, end_page: int) -> bool:
        return end_page - start_page + 1 > self.max_pages

    def plan_segments(self, title: str, start_page: int, end_page: int) -> list[Section]:
        """Cut a section into parts of at most max_pages pages."""
        if not self.segment_exceeds_max_pages(start_page, end_page):
            return [Section(title, start_page, end_page)]

        part_count = math.ceil((end_page - start_page + 1) / self.max_pages)
        segments = []
        for part in range(part_count):
            segment_start = start_page + part * self.max_pages
            segment_end = min(segment_start + self.max_pages - 1, end_page)
            segments.append(
                Section(f"{title} (Part {part + 1})", segment_start, segment_end, part + 1)
            )
        return segments

    def split_section(
        self, section: Section, section_number: int, file_namer: FileNamer, result: SplitResult
    ) -> None:
        if section.start_page > section.end_page:
            logger.debug(
                f"Skipping '{section.title}': start {section.start_page} > end {section.end_page}"
            )
            return

        if self.segment_exceeds_max_pages(section.start_page, section.end_page):
            logger.info(
                f"Section '{section.title}' has {section.page_count} pages, "
                f"splitting into parts of {self.max_pages}"
            )
        self.split_large_section(
            section.title, section.start_page, section.end_page, section_number, file_namer, result
        )

    def split_large_section(
        self,
        title: str,
        start_page: int,
        end_page: int,
        section_number: int,
        file_namer: FileNamer,
        result: SplitResult,
    ) -> None:
        for segment in self.plan_segments(title, start_page, end_page):
            filename = file_namer.chapter_name(section_number, title, part=segment.part)
            try:
                self.write_segment(
                    result,
                    segment.start_page,
                    segment.end_page,
                    filename,
                    file_namer,
                    segment.title,
                )
            except Exception as e:
                self.record_failure(result, f"Failed to split section '{segment.title}': {e}")
