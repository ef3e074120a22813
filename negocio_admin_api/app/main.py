"""
Main entrypoint for the Negócio Admin API.

This module assembles the FastAPI application: it sets up logging,
creates the in-memory storage (seeded with the sample catalog unless
disabled), registers the error handlers and mounts the API router
under ``settings.api_prefix``.  The module-level ``app`` makes it
possible to serve the API directly::

    uvicorn negocio_admin_api.app.main:app --reload
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from fastapi import FastAPI

from .api.router import router as api_router
from .core.config import Settings, settings as default_settings
from .core.errors import register_exception_handlers
from .core.logging_config import setup_logging
from .core.storage import init_storage

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    now: Optional[Callable[[], datetime]] = None,
) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use; defaults to the environment-derived
        ``settings`` instance.
    now : Optional[Callable[[], datetime]]
        Clock used by the storage for timestamps and "today"/"this
        month" windows.  Defaults to local ``datetime.now``.

    Returns
    -------
    FastAPI
        A configured FastAPI instance whose storage lives on
        ``app.state.storage``.
    """
    settings = settings or default_settings
    setup_logging(settings.log_level, settings.log_file)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)
    app.state.settings = settings
    app.state.storage = init_storage(settings, now=now)

    register_exception_handlers(app)
    app.include_router(api_router, prefix=settings.api_prefix)

    @app.get("/health", tags=["health"])
    async def health() -> dict:
        return {"status": "ok"}

    logger.info("%s %s ready under %s", settings.project_name, settings.api_version, settings.api_prefix)
    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
