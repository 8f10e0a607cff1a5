"""Entry point for the Swap Orders API.

Serves ``swap_api.app.main:app`` with Uvicorn.  The listener address is
taken from ``HOST``/``PORT`` and the database from ``MONGODB_URI``; see
``swap_api/app/core/config.py`` for the full list of settings.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from swap_api.app.core.config import settings
from swap_api.app.main import app


async def main() -> None:
    """Start the API server and serve until interrupted."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    logging.getLogger(__name__).info("App listening on port %s", settings.port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
