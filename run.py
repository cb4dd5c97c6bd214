"""Entry point for the Campus Admin API.

This script serves the FastAPI application with Uvicorn.  It is
intended to be executed from the project root, for example in Docker,
where you only specify a single Python file to run.

Configuration (data backend, latency scale, record API credentials …)
is read from environment variables; see ``campus_admin_api/app/core/config.py``
for the supported variables.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from campus_admin_api.app.core.config import settings
from campus_admin_api.app.main import app


async def run_api() -> None:
    """Start the API using Uvicorn.

    Host and port are read from the settings (`API_HOST` and
    `API_PORT`). Defaults are `0.0.0.0` and `8000`.
    """
    config = Config(
        app=app,
        host=settings.api_host,
        port=settings.api_port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


def main() -> None:
    try:
        asyncio.run(run_api())
    except (KeyboardInterrupt, SystemExit):
        logging.getLogger(__name__).info("Campus Admin API stopped")


if __name__ == "__main__":
    main()
