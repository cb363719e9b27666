"""
Validation utilities for split partitions.

Page ranges are 1-based and inclusive ("start-end"). Within one split the
ranges must not overlap.
"""

import re

from pdf_sectioner.models import SplitResult

PAGE_RANGE_PATTERN = re.compile(r"^\s*(\d+)\s*-\s*(\d+)\s*$")


def parse_page_range(page_range: str) -> tuple[int, int]:
    """Parse "start-end" into a tuple of ints."""
    match = PAGE_RANGE_PATTERN.match(page_range)
    if not match:
        raise ValueError(f"Invalid page range: {page_range!r}")
    start, end = int(match.group(1)), int(match.group(2))
    if start < 1 or end < start:
        raise ValueError(f"Invalid page range: {page_range!r}")
    return start, end


def result_ranges(result: SplitResult) -> list[tuple[int, int]]:
    return [parse_page_range(info.page_range) for info in result.output_files]


def find_overlaps(ranges: list[tuple[int, int]]) -> list[tuple[tuple[int, int], tuple[int, int]]]:
    """Return pairs of ranges sharing at least one page."""
    overlaps = []
    ordered = sorted(ranges)
    for i, first in enumerate(ordered):
        for second in ordered[i + 1 :]:
            if second[0] > first[1]:
                break
            overlaps.append((first, second))
    return overlaps


def get_page_coverage(ranges: list[tuple[int, int]], total_pages: int) -> bool:
    """
    Verify that ranges cover every page exactly once.

    Args:
        ranges: List of (start, end) tuples, 1-based inclusive
        total_pages: Expected total pages

    Returns:
        True if pages 1..total_pages are each covered by exactly one range
    """
    if not ranges:
        return total_pages == 0

    covered: list[int] = []
    for start, end in ranges:
        covered.extend(range(start, end + 1))

    return sorted(covered) == list(range(1, total_pages + 1))
