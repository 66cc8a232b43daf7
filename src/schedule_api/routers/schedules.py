"""Public schedule endpoints.

Endpoints
---------
GET /schedules/{route_id}          – trips of a route with nested stop-times
GET /routes/{route_id}/trips       – trips of a route
GET /trips/{trip_id}/stop-times    – stop-times of a trip

Unknown ids are not errors: each endpoint answers 200 with an empty list.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel

from schedule_api.logging import get_logger
from schedule_api.services.schedules.engine import ScheduleEngine

logger = get_logger(__name__)

router = APIRouter(tags=["schedules"])


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class StopTimeResponse(BaseModel):
    stop_id: str
    arrival_time: str
    departure_time: str


class TripResponse(BaseModel):
    trip_id: str
    route_id: str
    service_id: str
    schedules: list[StopTimeResponse]


class TripInfo(BaseModel):
    trip_id: str
    route_id: str
    service_id: str


class TripStopTime(BaseModel):
    trip_id: str
    stop_id: str
    arrival_time: str
    departure_time: str


# ---------------------------------------------------------------------------
# Dependencies
# ---------------------------------------------------------------------------


def get_engine(request: Request) -> ScheduleEngine:
    """Return the engine attached to the app at startup."""
    engine: ScheduleEngine | None = getattr(request.app.state, "engine", None)
    if engine is None:
        raise HTTPException(status_code=503, detail="Schedule store is not loaded")
    return engine


EngineDep = Annotated[ScheduleEngine, Depends(get_engine)]


# ---------------------------------------------------------------------------
# GET /schedules/{route_id}
# ---------------------------------------------------------------------------


@router.get(
    "/schedules/{route_id}",
    response_model=list[TripResponse],
    summary="Schedule of a route",
    description=(
        "Return every trip of the route in trips.txt order, each with its "
        "stop-times in stop_times.txt order (not sorted by time of day)."
    ),
)
async def get_route_schedule(route_id: str, engine: EngineDep) -> list[TripResponse]:
    schedule = engine.schedule_for_route(route_id)
    logger.debug("Route schedule served", route_id=route_id, trips=len(schedule))
    return [
        TripResponse(
            trip_id=trip.trip_id,
            route_id=trip.route_id,
            service_id=trip.service_id,
            schedules=[
                StopTimeResponse(
                    stop_id=stop.stop_id,
                    arrival_time=stop.arrival,
                    departure_time=stop.departure,
                )
                for stop in trip.schedules
            ],
        )
        for trip in schedule
    ]


# ---------------------------------------------------------------------------
# GET /routes/{route_id}/trips
# ---------------------------------------------------------------------------


@router.get(
    "/routes/{route_id}/trips",
    response_model=list[TripInfo],
    summary="Trips of a route",
)
async def get_route_trips(route_id: str, engine: EngineDep) -> list[TripInfo]:
    return [
        TripInfo(trip_id=trip.trip_id, route_id=trip.route_id, service_id=trip.service_id)
        for trip in engine.trips_for_route(route_id)
    ]


# ---------------------------------------------------------------------------
# GET /trips/{trip_id}/stop-times
# ---------------------------------------------------------------------------


@router.get(
    "/trips/{trip_id}/stop-times",
    response_model=list[TripStopTime],
    summary="Stop-times of a trip",
)
async def get_trip_stop_times(trip_id: str, engine: EngineDep) -> list[TripStopTime]:
    return [
        TripStopTime(
            trip_id=stop_time.trip_id,
            stop_id=stop_time.stop_id,
            arrival_time=stop_time.arrival,
            departure_time=stop_time.departure,
        )
        for stop_time in engine.stop_times_for_trip(trip_id)
    ]
