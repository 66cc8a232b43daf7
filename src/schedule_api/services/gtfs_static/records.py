"""GTFS static record types held by the in-memory store."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Trip:
    """A scheduled vehicle run (one trips.txt row)."""

    trip_id: str
    route_id: str
    service_id: str


@dataclass(frozen=True, slots=True)
class StopTime:
    """One stop visited by a trip (one stop_times.txt row).

    ``arrival`` and ``departure`` are kept exactly as written in the feed
    and may exceed 24:00:00 for trips running past midnight.
    """

    trip_id: str
    stop_id: str
    arrival: str
    departure: str
