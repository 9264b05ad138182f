"""Entry point for the Vidly API server.

Starts the FastAPI application under Uvicorn.  Host and port are read
from the ``HOST`` and ``PORT`` environment variables (defaults
``0.0.0.0`` and ``8000``); the rest of the configuration comes from
``vidly_api.app.core.config``.

Usage:
    python run.py
"""
import asyncio
import logging
import os

from uvicorn import Config, Server

from vidly_api.app.core.config import settings
from vidly_api.app.main import app


async def run_api() -> None:
    """Serve the API until the process is stopped."""
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    config = Config(app=app, host=host, port=port, reload=False, log_level=settings.log_level.lower())
    server = Server(config)
    logging.getLogger(__name__).info("Starting %s on %s:%s", settings.project_name, host, port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(run_api())
    except (KeyboardInterrupt, SystemExit):
        pass
