"""Route Schedule API - in-memory GTFS trip and stop-time lookups."""
