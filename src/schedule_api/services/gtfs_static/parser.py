"""GTFS table parser with strict header validation.

Rows are split on bare commas: quoted fields and embedded commas are not
supported. Lines containing a double quote are counted and reported so a
feed that relies on quoting is noticed at startup instead of being served
with shifted columns.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Generic, TypeVar

from schedule_api.logging import get_logger
from schedule_api.services.gtfs_static.errors import HeaderMismatchError, LoadError, ParseError
from schedule_api.services.gtfs_static.normalizer import (
    STOP_TIMES_COLUMNS,
    TRIPS_COLUMNS,
    GtfsNormalizer,
)
from schedule_api.services.gtfs_static.reader import read_source

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from schedule_api.services.gtfs_static.records import StopTime, Trip

logger = get_logger(__name__)

DELIMITER = ","

R = TypeVar("R")


@dataclass
class TableLoadResult(Generic[R]):
    """Records parsed from one source plus the rows that failed."""

    source: str
    records: list[R] = field(default_factory=list)
    errors: list[ParseError] = field(default_factory=list)
    read: int = 0
    blank: int = 0
    quoted: int = 0
    duration_ms: int = 0

    @property
    def skipped(self) -> int:
        return len(self.errors)


def split_rows(text: str) -> list[str]:
    """Split file text into lines, accepting both LF and CRLF endings."""
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def check_header(source: str, header_line: str, columns: Sequence[str]) -> None:
    """Ensure the header starts with ``columns`` in order.

    Raises:
        HeaderMismatchError: If any leading cell differs or is missing.
    """
    leading = header_line.split(DELIMITER)[: len(columns)]
    if leading != list(columns):
        msg = (
            f"Unexpected header in {source}: expected leading columns "
            f"{list(columns)}, got {leading}"
        )
        raise HeaderMismatchError(msg)


class GtfsParser:
    """Parses GTFS text tables into records.

    In strict mode the first malformed row aborts the load with a
    LoadError. Otherwise malformed rows are skipped and collected on the
    result.
    """

    def __init__(self, strict: bool = True) -> None:
        self.strict = strict

    def parse_file(
        self,
        path: str | Path,
        columns: Sequence[str],
        to_record: Callable[[Sequence[str]], R],
    ) -> TableLoadResult[R]:
        """Parse one source into records in file order.

        Raises:
            SourceUnreadableError: If the file cannot be read.
            HeaderMismatchError: If the header shape is wrong.
            LoadError: On a malformed row in strict mode.
        """
        source = str(path)
        started = time.perf_counter()
        lines = split_rows(read_source(path))
        if not lines:
            msg = f"Empty GTFS source, no header row: {source}"
            raise HeaderMismatchError(msg)

        check_header(source, lines[0], columns)

        width = len(columns)
        result: TableLoadResult[R] = TableLoadResult(source=source)

        for line_number, line in enumerate(lines[1:], start=2):
            if not line.strip():
                result.blank += 1
                continue
            result.read += 1
            if '"' in line:
                result.quoted += 1

            cells = line.split(DELIMITER)
            if len(cells) < width:
                error = ParseError(
                    source,
                    line_number,
                    f"expected at least {width} columns, got {len(cells)}",
                )
                if self.strict:
                    raise LoadError(f"Malformed row aborted load: {error}") from error
                logger.warning("Skipping malformed GTFS row", source=source, line=line_number)
                result.errors.append(error)
                continue

            result.records.append(to_record(cells))

        result.duration_ms = int((time.perf_counter() - started) * 1000)

        if result.quoted:
            logger.warning(
                "Quote characters found; fields are split on bare commas",
                source=source,
                quoted_lines=result.quoted,
            )
        logger.info(
            "Parsed GTFS file",
            source=source,
            rows=len(result.records),
            skipped=result.skipped,
            blank=result.blank,
            duration_ms=result.duration_ms,
        )
        return result

    def parse_trips(self, path: str | Path) -> TableLoadResult[Trip]:
        """Parse trips.txt."""
        return self.parse_file(path, TRIPS_COLUMNS, GtfsNormalizer.normalize_trip)

    def parse_stop_times(self, path: str | Path) -> TableLoadResult[StopTime]:
        """Parse stop_times.txt."""
        return self.parse_file(path, STOP_TIMES_COLUMNS, GtfsNormalizer.normalize_stop_time)
