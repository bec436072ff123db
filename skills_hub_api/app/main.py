"""
Main entrypoint for the Skills Hub API.

This module assembles the FastAPI application, sets up logging,
creates the record store and includes versioned routers.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``::

    uvicorn skills_hub_api.app.main:app --reload

Each application owns exactly one ``RecordStore`` (on
``app.state.store``) for its whole lifetime.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from .api.v1.router import router as v1_router
from .core.config import Settings, settings as default_settings
from .core.logging_config import setup_logging
from .core.store import RecordStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    counts = app.state.store.counts()
    logger.info("%s started with %s users", app.title, counts["users"])
    yield
    logger.info("%s shutting down", app.title)


def create_app(settings: Optional[Settings] = None, store: Optional[RecordStore] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Settings to use instead of the ones read from the environment.
    store : Optional[RecordStore]
        Pre-populated store, e.g. one rebuilt with
        ``RecordStore.from_state``.  A fresh empty store is created
        when omitted.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings
    setup_logging(settings.log_level, settings.log_file)

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings
    if store is None:
        store = RecordStore(
            normalize_skills=settings.normalize_skills,
            max_skills=settings.max_skills_per_user,
        )
    app.state.store = store

    app.include_router(v1_router, prefix="/api/v1")

    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
