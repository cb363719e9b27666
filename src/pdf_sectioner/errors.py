"""
Exception types raised by PDF Sectioner.

Setup failures (missing file, unreadable PDF, bad options, output directory)
propagate to the caller. Per-section export failures are recorded in the
SplitResult and never abort a split.
"""


class SectionerError(Exception):
    """Base class for all PDF Sectioner errors."""


class DocumentNotFoundError(SectionerError):
    """The source PDF does not exist."""


class InvalidDocumentError(SectionerError):
    """The source PDF could not be opened or parsed."""


class ConfigurationError(SectionerError):
    """Invalid split options (unknown strategy, non-positive limits)."""


class OutputDirectoryError(SectionerError):
    """The output directory could not be created."""


class SectionExportError(SectionerError):
    """Writing one output segment failed."""


class SplitError(SectionerError):
    """Splitting failed as a whole."""
