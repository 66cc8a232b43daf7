"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator, Iterator
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

from schedule_api.config import get_settings
from schedule_api.main import create_app
from schedule_api.services.gtfs_static.store import ScheduleStore

from .fixtures.gtfs_fixture import write_gtfs_dir


@pytest.fixture(autouse=True)
def _fresh_settings() -> Iterator[None]:
    """Drop cached settings so env overrides in one test don't leak."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def gtfs_files(tmp_path: Path) -> tuple[Path, Path]:
    """Default feed written to a temp directory."""
    return write_gtfs_dir(tmp_path / "gtfs")


@pytest.fixture
def store(gtfs_files: tuple[Path, Path]) -> ScheduleStore:
    """Store loaded from the default feed."""
    trips_path, stop_times_path = gtfs_files
    return ScheduleStore.load(trips_path, stop_times_path)


@pytest.fixture
async def client(store: ScheduleStore) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client against an app with a preloaded store."""
    transport = ASGITransport(app=create_app(store=store))
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def client_no_store() -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client against an app whose store was never loaded."""
    transport = ASGITransport(app=create_app())
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
