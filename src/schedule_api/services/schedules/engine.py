"""Schedule engine: joins a route's trips with their stop-times."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from schedule_api.services.gtfs_static.records import StopTime, Trip
    from schedule_api.services.gtfs_static.store import ScheduleStore


@dataclass(frozen=True, slots=True)
class ScheduledStop:
    """One stop of a trip schedule."""

    stop_id: str
    arrival: str
    departure: str


@dataclass(frozen=True, slots=True)
class TripSchedule:
    """A trip with its stop-times, in feed order."""

    trip_id: str
    route_id: str
    service_id: str
    schedules: list[ScheduledStop] = field(default_factory=list)


class ScheduleEngine:
    """Read-only queries over a frozen ScheduleStore.

    Every method is a pure function of the store and accepts any string;
    unknown ids produce empty results.
    """

    def __init__(self, store: ScheduleStore) -> None:
        self._store = store

    @property
    def store(self) -> ScheduleStore:
        return self._store

    def trips_for_route(self, route_id: str) -> tuple[Trip, ...]:
        return self._store.trips_for_route(route_id)

    def stop_times_for_trip(self, trip_id: str) -> tuple[StopTime, ...]:
        return self._store.stop_times_for_trip(trip_id)

    def schedule_for_route(self, route_id: str) -> list[TripSchedule]:
        """Nest each trip's stop-times under the trips of ``route_id``.

        Trips keep trips.txt order and stop-times keep stop_times.txt order;
        nothing is sorted by time of day. A trip without stop-times is kept
        with an empty ``schedules`` list.
        """
        return [
            TripSchedule(
                trip_id=trip.trip_id,
                route_id=trip.route_id,
                service_id=trip.service_id,
                schedules=[
                    ScheduledStop(
                        stop_id=stop_time.stop_id,
                        arrival=stop_time.arrival,
                        departure=stop_time.departure,
                    )
                    for stop_time in self._store.stop_times_for_trip(trip.trip_id)
                ],
            )
            for trip in self._store.trips_for_route(route_id)
        ]
