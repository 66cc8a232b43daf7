"""Schedule queries over the frozen GTFS store."""

from schedule_api.services.schedules.engine import ScheduledStop, ScheduleEngine, TripSchedule

__all__ = ["ScheduleEngine", "ScheduledStop", "TripSchedule"]
