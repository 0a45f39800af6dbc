"""Entry point for the ConnectApp API server.

Launches the FastAPI application with Uvicorn.  Host, port and the
database location are read from the environment (see
``connect_api.app.core.config``), for example::

    DATABASE_URL=/tmp/connect_app.sqlite PORT=8080 python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from connect_api.app.core.config import settings
from connect_api.app.main import app


async def main() -> None:
    """Serve the API until interrupted."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
        # keep the handlers installed by setup_logging
        log_config=None,
    )
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        logging.getLogger(__name__).info("Server stopped")
