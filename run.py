"""Entry point for running the Contact Management API.

Starts the FastAPI application with uvicorn.  Host and port are read
from the ``API_HOST`` and ``API_PORT`` environment variables (defaults
``0.0.0.0`` and ``8000``); all other configuration is read by
``contact_api.app.core.config``.

Usage:
    python run.py
"""
import asyncio
import logging
import os

from uvicorn import Config, Server

from contact_api.app.main import app


async def run_api() -> None:
    """Serve the API until interrupted."""
    host = os.getenv("API_HOST", "0.0.0.0")
    port = int(os.getenv("API_PORT", "8000"))
    config = Config(app=app, host=host, port=port, reload=False, log_level="info")
    server = Server(config)
    logging.getLogger(__name__).info("Starting API on %s:%s", host, port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(run_api())
    except (KeyboardInterrupt, SystemExit):
        pass
