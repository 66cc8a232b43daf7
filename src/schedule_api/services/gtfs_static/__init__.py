"""Static GTFS loading and the in-memory schedule store."""

from schedule_api.services.gtfs_static.errors import (
    HeaderMismatchError,
    LoadError,
    ParseError,
    SourceUnreadableError,
)
from schedule_api.services.gtfs_static.parser import GtfsParser
from schedule_api.services.gtfs_static.records import StopTime, Trip
from schedule_api.services.gtfs_static.store import LoadReport, ScheduleStore

__all__ = [
    "GtfsParser",
    "HeaderMismatchError",
    "LoadError",
    "LoadReport",
    "ParseError",
    "ScheduleStore",
    "SourceUnreadableError",
    "StopTime",
    "Trip",
]
