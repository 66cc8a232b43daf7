"""Tests for GtfsNormalizer column mapping."""

from __future__ import annotations

import dataclasses

import pytest

from schedule_api.services.gtfs_static.normalizer import (
    STOP_TIMES_COLUMNS,
    TRIPS_COLUMNS,
    GtfsNormalizer,
)
from schedule_api.services.gtfs_static.records import StopTime, Trip


class TestNormalizeTrip:
    def test_positional_mapping(self) -> None:
        trip = GtfsNormalizer.normalize_trip(["R1", "S1", "T1"])
        assert trip == Trip(trip_id="T1", route_id="R1", service_id="S1")

    def test_extra_cells_ignored(self) -> None:
        trip = GtfsNormalizer.normalize_trip(["R1", "S1", "T1", "Headsign", "0"])
        assert trip.trip_id == "T1"

    def test_columns_constant(self) -> None:
        assert TRIPS_COLUMNS == ("route_id", "service_id", "trip_id")


class TestNormalizeStopTime:
    def test_positional_mapping(self) -> None:
        stop_time = GtfsNormalizer.normalize_stop_time(["T1", "08:00:00", "08:01:00", "STOP_A"])
        assert stop_time == StopTime(
            trip_id="T1", stop_id="STOP_A", arrival="08:00:00", departure="08:01:00"
        )

    def test_columns_constant(self) -> None:
        assert STOP_TIMES_COLUMNS == ("trip_id", "arrival_time", "departure_time", "stop_id")


class TestRecordsImmutable:
    def test_trip_is_frozen(self) -> None:
        trip = Trip(trip_id="T1", route_id="R1", service_id="S1")
        with pytest.raises(dataclasses.FrozenInstanceError):
            trip.route_id = "R2"  # type: ignore[misc]

    def test_stop_time_is_frozen(self) -> None:
        stop_time = StopTime(trip_id="T1", stop_id="A", arrival="08:00:00", departure="08:00:00")
        with pytest.raises(dataclasses.FrozenInstanceError):
            stop_time.arrival = "09:00:00"  # type: ignore[misc]
