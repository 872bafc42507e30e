"""Entry point for the Suvidhaa API server.

Starts the FastAPI application with Uvicorn.  Host and port are read from
the ``HOST`` and ``PORT`` environment variables (defaults ``0.0.0.0`` and
``5000``).  Configuration such as ``MONGODB_URI`` and ``JWT_SECRET`` is
read from the environment as well; see ``suvidhaa_api/app/core/config.py``.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from suvidhaa_api.app.core.config import settings
from suvidhaa_api.app.main import app


async def main() -> None:
    """Serve the API until interrupted."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    logging.getLogger(__name__).info("Server is running on port %s", settings.port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
