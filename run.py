"""Entry point for the Creature Catalog API.

Launches the FastAPI application under Uvicorn.  Host, port and the
rest of the configuration are read from environment variables (see
``creature_catalog.app.core.config``); place them in the process
environment or export them from a ``.env`` file before starting.

Usage:
    python run.py
"""
import asyncio

from uvicorn import Config, Server

from creature_catalog.app.core.config import get_settings
from creature_catalog.app.main import create_app


async def main() -> None:
    """Serve the API until interrupted."""
    settings = get_settings()
    config = Config(
        app=create_app(settings),
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
