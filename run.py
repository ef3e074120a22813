"""Entry point for the Negócio Admin API.

Serves the FastAPI application with Uvicorn.  Host and port come from
the ``HOST`` and ``PORT`` environment variables (defaults ``0.0.0.0``
and ``8000``); see ``negocio_admin_api/app/core/config.py`` for the
other supported variables.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from negocio_admin_api.app.core.config import settings
from negocio_admin_api.app.main import app


async def run_api() -> None:
    """Start the API server using Uvicorn."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


def main() -> None:
    try:
        asyncio.run(run_api())
    except KeyboardInterrupt:
        logging.getLogger(__name__).info("Shutting down")


if __name__ == "__main__":
    main()
