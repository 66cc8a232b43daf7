"""Load-time error types for the GTFS static loader."""

from __future__ import annotations


class LoadError(Exception):
    """Raised when the schedule store cannot be built.

    Always fatal: a store is never published after a LoadError.
    """


class SourceUnreadableError(LoadError):
    """Raised when a GTFS source file is missing or cannot be decoded."""


class HeaderMismatchError(LoadError):
    """Raised when a source header does not start with the expected columns."""


class ParseError(Exception):
    """Raised for a single malformed data row.

    Carries the source name and the 1-based line number so the row can be
    found in the original file.
    """

    def __init__(self, source: str, line_number: int, message: str) -> None:
        self.source = source
        self.line_number = line_number
        super().__init__(f"{source} line {line_number}: {message}")
