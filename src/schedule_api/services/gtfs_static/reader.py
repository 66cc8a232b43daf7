"""GTFS source reader - loads a whole feed file as text."""

from __future__ import annotations

from pathlib import Path

from schedule_api.logging import get_logger
from schedule_api.services.gtfs_static.errors import SourceUnreadableError

logger = get_logger(__name__)


def read_source(path: str | Path) -> str:
    """Read an entire GTFS text file.

    The file is decoded as UTF-8; a leading byte-order mark is dropped so it
    never leaks into the first header cell.

    Raises:
        SourceUnreadableError: If the file is missing, unreadable or not UTF-8.
    """
    source_path = Path(path)
    try:
        text = source_path.read_text(encoding="utf-8-sig")
    except FileNotFoundError as exc:
        msg = f"GTFS source not found: {source_path}"
        raise SourceUnreadableError(msg) from exc
    except (OSError, UnicodeDecodeError) as exc:
        msg = f"GTFS source unreadable: {source_path} ({exc})"
        raise SourceUnreadableError(msg) from exc

    logger.debug("Read GTFS source", path=str(source_path), size_chars=len(text))
    return text
