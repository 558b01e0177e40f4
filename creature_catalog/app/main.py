"""
Main entrypoint for the Creature Catalog API.

This module assembles the FastAPI application, sets up logging and
includes versioned routers.  The ``create_app`` function builds and
configures the app, which is then instantiated at module import time
as ``app``, e.g.::

    uvicorn creature_catalog.app.main:app --reload

Settings are read once here and passed to the services explicitly.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI

from .api.v1.router import router as v1_router
from .core.config import Settings, get_settings
from .core.db import init_db
from .core.logging_config import setup_logging
from .services.creature_repository import CreatureRepository
from .services.creature_service import CreatureService
from .services.seed_service import SeedService


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use.  Defaults to one read from the
        environment.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # Create the collection and its unique indexes if missing.
        init_db(settings.database_url)
        yield

    app = FastAPI(title=settings.project_name, version=settings.api_version, lifespan=lifespan)
    app.state.creature_service = CreatureService(
        CreatureRepository(settings.database_url),
        default_limit=settings.default_limit,
    )
    app.state.seed_service = SeedService(settings.seed_source_url, limit=settings.seed_limit)

    app.include_router(v1_router, prefix="/api/v1")

    return app


app = create_app()
