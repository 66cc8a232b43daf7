"""Run the schedule API under uvicorn."""

from __future__ import annotations

import uvicorn

from schedule_api.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "schedule_api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=False,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
