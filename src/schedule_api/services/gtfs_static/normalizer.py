"""GTFS row normalizer - maps split CSV cells onto record types."""

from __future__ import annotations

from typing import TYPE_CHECKING

from schedule_api.services.gtfs_static.records import StopTime, Trip

if TYPE_CHECKING:
    from collections.abc import Sequence

# Leading header cells each source must start with, in order.
# Cell positions below are fixed by these tuples.
TRIPS_COLUMNS: tuple[str, ...] = ("route_id", "service_id", "trip_id")
STOP_TIMES_COLUMNS: tuple[str, ...] = ("trip_id", "arrival_time", "departure_time", "stop_id")


class GtfsNormalizer:
    """Builds records from positional cells.

    Callers guarantee ``cells`` holds at least as many entries as the
    matching ``*_COLUMNS`` tuple; values are taken verbatim.
    """

    @staticmethod
    def normalize_trip(cells: Sequence[str]) -> Trip:
        """Map a trips.txt row: route_id, service_id, trip_id."""
        return Trip(trip_id=cells[2], route_id=cells[0], service_id=cells[1])

    @staticmethod
    def normalize_stop_time(cells: Sequence[str]) -> StopTime:
        """Map a stop_times.txt row: trip_id, arrival_time, departure_time, stop_id."""
        return StopTime(
            trip_id=cells[0],
            stop_id=cells[3],
            arrival=cells[1],
            departure=cells[2],
        )
