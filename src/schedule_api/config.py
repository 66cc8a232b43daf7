"""Application configuration via environment variables."""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

TRIPS_FILE = "trips.txt"
STOP_TIMES_FILE = "stop_times.txt"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Application
    app_name: str = "Route Schedule API"
    app_version: str = "0.1.0"
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    api_host: str = "0.0.0.0"
    api_port: int = Field(default=4000, ge=1, le=65535)

    # Static GTFS sources
    gtfs_dir: str = Field(
        default="../MBTA_GTFS",
        validation_alias=AliasChoices("GTFS_DIR", "GTFS_DATA_DIR"),
    )
    gtfs_trips_path: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("TRIPS_PATH", "GTFS_TRIPS_PATH"),
    )
    gtfs_stop_times_path: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("STOP_TIMES_PATH", "GTFS_STOP_TIMES_PATH"),
    )
    # Abort startup on the first malformed row instead of skipping it
    gtfs_load_strict: bool = Field(
        default=True,
        validation_alias=AliasChoices("GTFS_LOAD_STRICT"),
    )

    @property
    def trips_path(self) -> Path:
        """Resolved trips.txt location."""
        if self.gtfs_trips_path:
            return Path(self.gtfs_trips_path)
        return Path(self.gtfs_dir) / TRIPS_FILE

    @property
    def stop_times_path(self) -> Path:
        """Resolved stop_times.txt location."""
        if self.gtfs_stop_times_path:
            return Path(self.gtfs_stop_times_path)
        return Path(self.gtfs_dir) / STOP_TIMES_FILE


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
