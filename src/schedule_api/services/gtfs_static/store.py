"""In-memory GTFS schedule store.

Trips and stop-times live in two owning sequences in file order. Two
secondary indices map a route_id to positions in the trip sequence and a
trip_id to positions in the stop-time sequence, so lookups cost the size
of the answer rather than the size of the feed.

The store is built once by ``ScheduleStore.load`` and is read-only from
then on: sequences and position lists are tuples and the indices are
exposed through ``MappingProxyType``. Concurrent readers need no locks.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from schedule_api.logging import get_logger
from schedule_api.services.gtfs_static.parser import GtfsParser

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

    from schedule_api.services.gtfs_static.parser import TableLoadResult
    from schedule_api.services.gtfs_static.records import StopTime, Trip

logger = get_logger(__name__)


class LoadReport:
    """Collects load metrics and row-level warnings."""

    def __init__(self, load_id: str | None = None) -> None:
        self.load_id = load_id or str(uuid.uuid4())
        self.started_at = datetime.now(timezone.utc)
        self.ended_at: datetime | None = None
        self.duration_ms: int | None = None
        self.counts: dict[str, dict[str, int]] = {}
        self.warnings: list[str] = []

    def record_table(self, table: str, result: TableLoadResult[Any]) -> None:
        self.counts[table] = {
            "read": result.read,
            "loaded": len(result.records),
            "skipped": result.skipped,
            "blank": result.blank,
            "quoted": result.quoted,
        }
        self.warnings.extend(str(err) for err in result.errors)

    @property
    def skipped(self) -> int:
        return sum(table["skipped"] for table in self.counts.values())

    def finish(self) -> None:
        self.ended_at = datetime.now(timezone.utc)
        self.duration_ms = int((self.ended_at - self.started_at).total_seconds() * 1000)


class ScheduleStoreBuilder:
    """Append-only builder; the only writer a store ever has."""

    def __init__(self) -> None:
        self._trips: list[Trip] = []
        self._trips_ix_by_route: dict[str, list[int]] = {}
        self._stop_times: list[StopTime] = []
        self._stop_times_ix_by_trip: dict[str, list[int]] = {}
        self._frozen = False

    def _check_open(self) -> None:
        if self._frozen:
            raise RuntimeError("ScheduleStoreBuilder already frozen")

    def add_trip(self, trip: Trip) -> None:
        self._check_open()
        self._trips_ix_by_route.setdefault(trip.route_id, []).append(len(self._trips))
        self._trips.append(trip)

    def add_stop_time(self, stop_time: StopTime) -> None:
        self._check_open()
        self._stop_times_ix_by_trip.setdefault(stop_time.trip_id, []).append(
            len(self._stop_times)
        )
        self._stop_times.append(stop_time)

    def freeze(self, report: LoadReport | None = None) -> ScheduleStore:
        """Produce the immutable store. Can be called once."""
        self._check_open()
        self._frozen = True
        store = ScheduleStore(
            all_trips=tuple(self._trips),
            trips_ix_by_route={k: tuple(v) for k, v in self._trips_ix_by_route.items()},
            all_stop_times=tuple(self._stop_times),
            stop_times_ix_by_trip={k: tuple(v) for k, v in self._stop_times_ix_by_trip.items()},
            report=report,
        )
        # Drop the growable copies so nothing can reach them later
        self._trips = []
        self._trips_ix_by_route = {}
        self._stop_times = []
        self._stop_times_ix_by_trip = {}
        return store


class ScheduleStore:
    """Frozen trips/stop-times arena with route and trip indices."""

    __slots__ = (
        "_all_stop_times",
        "_all_trips",
        "_report",
        "_stop_times_ix_by_trip",
        "_trips_ix_by_route",
    )

    def __init__(
        self,
        all_trips: tuple[Trip, ...],
        trips_ix_by_route: dict[str, tuple[int, ...]],
        all_stop_times: tuple[StopTime, ...],
        stop_times_ix_by_trip: dict[str, tuple[int, ...]],
        report: LoadReport | None = None,
    ) -> None:
        self._all_trips = all_trips
        self._trips_ix_by_route: Mapping[str, tuple[int, ...]] = MappingProxyType(
            trips_ix_by_route
        )
        self._all_stop_times = all_stop_times
        self._stop_times_ix_by_trip: Mapping[str, tuple[int, ...]] = MappingProxyType(
            stop_times_ix_by_trip
        )
        self._report = report

    @classmethod
    def load(
        cls,
        trips_path: str | Path,
        stop_times_path: str | Path,
        strict: bool = True,
    ) -> ScheduleStore:
        """Load both GTFS sources and build the frozen store.

        Raises:
            LoadError: If either source is unreadable, has a bad header, or
                (strict mode) contains a malformed row.
        """
        report = LoadReport()
        logger.info(
            "Loading GTFS schedule store",
            load_id=report.load_id,
            trips_path=str(trips_path),
            stop_times_path=str(stop_times_path),
            strict=strict,
        )
        parser = GtfsParser(strict=strict)
        builder = ScheduleStoreBuilder()

        trips = parser.parse_trips(trips_path)
        report.record_table("trips", trips)
        for trip in trips.records:
            builder.add_trip(trip)

        stop_times = parser.parse_stop_times(stop_times_path)
        report.record_table("stop_times", stop_times)
        for stop_time in stop_times.records:
            builder.add_stop_time(stop_time)

        report.finish()
        store = builder.freeze(report)
        logger.info(
            "GTFS schedule store ready",
            load_id=report.load_id,
            duration_ms=report.duration_ms,
            counts=report.counts,
            skipped=report.skipped,
        )
        return store

    @property
    def all_trips(self) -> tuple[Trip, ...]:
        return self._all_trips

    @property
    def trips_ix_by_route(self) -> Mapping[str, tuple[int, ...]]:
        return self._trips_ix_by_route

    @property
    def all_stop_times(self) -> tuple[StopTime, ...]:
        return self._all_stop_times

    @property
    def stop_times_ix_by_trip(self) -> Mapping[str, tuple[int, ...]]:
        return self._stop_times_ix_by_trip

    @property
    def report(self) -> LoadReport | None:
        return self._report

    def trips_for_route(self, route_id: str) -> tuple[Trip, ...]:
        """Trips of ``route_id`` in file order; empty for an unknown route."""
        positions = self._trips_ix_by_route.get(route_id, ())
        return tuple(self._all_trips[ix] for ix in positions)

    def stop_times_for_trip(self, trip_id: str) -> tuple[StopTime, ...]:
        """Stop-times of ``trip_id`` in file order; empty for an unknown trip."""
        positions = self._stop_times_ix_by_trip.get(trip_id, ())
        return tuple(self._all_stop_times[ix] for ix in positions)

    def route_ids(self) -> tuple[str, ...]:
        """Known route ids in the order first seen in trips.txt."""
        return tuple(self._trips_ix_by_route)

    def stats(self) -> dict[str, int]:
        return {
            "trips": len(self._all_trips),
            "routes": len(self._trips_ix_by_route),
            "stop_times": len(self._all_stop_times),
            "trips_with_stop_times": len(self._stop_times_ix_by_trip),
        }
