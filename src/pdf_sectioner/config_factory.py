"""
Configuration Factory Module

Builds validated SplitOptions from raw command-line values and creates the
console progress callback used by the CLI.
"""

from typing import Any

from pdf_sectioner.errors import ConfigurationError
from pdf_sectioner.models import (
    DEFAULT_OUTPUT_DIR,
    VALID_STRATEGIES,
    ProgressCallback,
    SplitOptions,
)


def create_split_options(
    strategy: str | None = None,
    max_pages: Any = None,
    max_tokens: Any = None,
    output_dir: str | None = None,
    preserve_metadata: bool = True,
    progress_callback: ProgressCallback | None = None,
) -> SplitOptions:
    """
    Create SplitOptions from raw values.

    Args:
        strategy: One of auto, bookmarks, toc, pages (case-insensitive, default auto)
        max_pages: Maximum pages per output file (int or numeric string)
        max_tokens: Token budget per output file, converted to a page limit
        output_dir: Output directory (default ./splits)
        preserve_metadata: Copy title/author/creator/producer into outputs
        progress_callback: Called with a progress dict after each section

    Returns:
        SplitOptions: The validated options

    Raises:
        ConfigurationError: If the strategy is unknown or a limit is not positive
    """
    strategy = (strategy or "auto").strip().lower()
    if strategy not in VALID_STRATEGIES:
        raise ConfigurationError(
            f"Invalid strategy: {strategy}. Valid options: {', '.join(VALID_STRATEGIES)}"
        )

    return SplitOptions(
        strategy=strategy,
        max_pages=_positive_int("max_pages", max_pages),
        max_tokens=_positive_int("max_tokens", max_tokens),
        output_dir=output_dir or DEFAULT_OUTPUT_DIR,
        preserve_metadata=preserve_metadata,
        progress_callback=progress_callback,
    )


def _positive_int(name: str, value: Any) -> int | None:
    if value is None:
        return None
    try:
        number = int(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}") from e
    if number < 1:
        raise ConfigurationError(f"{name} must be >= 1, got {number}")
    return number


def create_progress_printer(stream=None) -> ProgressCallback:
    """Progress callback printing "message (current/total)" lines."""

    def _print_progress(progress: dict[str, Any]) -> None:
        message = progress["message"]
        if progress.get("current") is not None and progress.get("total") is not None:
            message = f"{message} ({progress['current']}/{progress['total']})"
        print(message, file=stream, flush=True)

    return _print_progress
