"""Tests for ScheduleEngine - the route schedule join."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from schedule_api.services.gtfs_static.store import ScheduleStore
from schedule_api.services.schedules.engine import ScheduledStop, ScheduleEngine, TripSchedule

from .fixtures.gtfs_fixture import MINIMAL_STOP_TIMES_TXT, MINIMAL_TRIPS_TXT, write_gtfs_dir

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def engine(store: ScheduleStore) -> ScheduleEngine:
    return ScheduleEngine(store)


class TestScheduleForRoute:
    """Tests for schedule_for_route."""

    def test_unknown_route_is_empty(self, engine: ScheduleEngine) -> None:
        assert engine.schedule_for_route("NOPE") == []

    def test_trips_in_file_order(self, engine: ScheduleEngine) -> None:
        schedule = engine.schedule_for_route("R1")
        assert [trip.trip_id for trip in schedule] == ["T1", "T2"]

    def test_stop_times_in_file_order(self, engine: ScheduleEngine) -> None:
        t1 = engine.schedule_for_route("R1")[0]
        assert t1.schedules == [
            ScheduledStop(stop_id="STOP_A", arrival="09:10:00", departure="09:11:00"),
            ScheduledStop(stop_id="STOP_B", arrival="08:05:00", departure="08:06:00"),
        ]

    def test_trip_without_stop_times_kept(self, engine: ScheduleEngine) -> None:
        schedule = engine.schedule_for_route("R3")
        assert schedule == [TripSchedule(trip_id="T4", route_id="R3", service_id="WD", schedules=[])]

    def test_join_matches_component_queries(self, engine: ScheduleEngine) -> None:
        for route_id in engine.store.route_ids():
            schedule = engine.schedule_for_route(route_id)
            trips = engine.trips_for_route(route_id)

            assert [s.trip_id for s in schedule] == [t.trip_id for t in trips]
            for entry, trip in zip(schedule, trips):
                assert (entry.route_id, entry.service_id) == (trip.route_id, trip.service_id)
                expected = [
                    (st.stop_id, st.arrival, st.departure)
                    for st in engine.stop_times_for_trip(trip.trip_id)
                ]
                assert [(s.stop_id, s.arrival, s.departure) for s in entry.schedules] == expected

    def test_idempotent(self, engine: ScheduleEngine) -> None:
        assert engine.schedule_for_route("R1") == engine.schedule_for_route("R1")

    def test_two_trip_scenario(self, tmp_path: Path) -> None:
        trips_path, stop_times_path = write_gtfs_dir(
            tmp_path, trips=MINIMAL_TRIPS_TXT, stop_times=MINIMAL_STOP_TIMES_TXT
        )
        engine = ScheduleEngine(ScheduleStore.load(trips_path, stop_times_path))

        assert engine.schedule_for_route("R1") == [
            TripSchedule(
                trip_id="T1",
                route_id="R1",
                service_id="S1",
                schedules=[ScheduledStop(stop_id="STOP_A", arrival="08:00:00", departure="08:01:00")],
            ),
            TripSchedule(
                trip_id="T2",
                route_id="R1",
                service_id="S1",
                schedules=[ScheduledStop(stop_id="STOP_B", arrival="09:00:00", departure="09:01:00")],
            ),
        ]


class TestComponentQueries:
    def test_trips_for_route_delegates(self, engine: ScheduleEngine, store: ScheduleStore) -> None:
        assert engine.trips_for_route("R2") == store.trips_for_route("R2")

    def test_stop_times_for_unknown_trip(self, engine: ScheduleEngine) -> None:
        assert engine.stop_times_for_trip("missing") == ()


class TestScheduleResultTypes:
    def test_scheduled_stop_is_frozen(self) -> None:
        stop = ScheduledStop(stop_id="A", arrival="08:00:00", departure="08:01:00")
        with pytest.raises(AttributeError):
            stop.stop_id = "B"  # type: ignore[misc]

    def test_result_types_use_slots(self, engine: ScheduleEngine) -> None:
        schedule = engine.schedule_for_route("R1")
        assert not hasattr(schedule[0], "__dict__")
        assert not hasattr(schedule[0].schedules[0], "__dict__")
