"""
Logging setup for PDF Sectioner.

The CLI calls setup_logging() once; modules log through
logging.getLogger(__name__) under the pdf_sectioner namespace. Records go to
stderr so JSON written to stdout stays parseable.
"""

import logging
import sys

# Package-level logger name
PACKAGE_NAME = "pdf_sectioner"

# Default format strings
DEFAULT_FORMAT = "[%(levelname)s] %(message)s"
VERBOSE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
VERBOSE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers kept at the same level as the package
THIRD_PARTY_LOGGERS = ["pypdf"]


def setup_logging(verbose: bool = False, level: int | None = None, stream=None) -> None:
    """
    Configure logging for the PDF Sectioner application.

    Should be called once at application startup (e.g., in CLI main()).

    Args:
        verbose: If True, use INFO level with detailed format.
                 If False, use WARNING level with concise format.
        level: Override the logging level (e.g., logging.DEBUG).
               If None, determined by verbose flag.
        stream: Output stream (defaults to sys.stderr).
    """
    if level is None:
        level = logging.INFO if verbose else logging.WARNING

    if stream is None:
        stream = sys.stderr

    if verbose:
        fmt = VERBOSE_FORMAT
        datefmt = VERBOSE_DATE_FORMAT
    else:
        fmt = DEFAULT_FORMAT
        datefmt = None

    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    handler.setLevel(level)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    pkg_logger = logging.getLogger(PACKAGE_NAME)
    pkg_logger.setLevel(level)

    # pypdf is chatty about malformed objects; follow the package level
    for logger_name in THIRD_PARTY_LOGGERS:
        logging.getLogger(logger_name).setLevel(level)

    if verbose:
        pkg_logger.debug("Verbose logging enabled")
