"""Entry point for serving the Users API.

This script launches the FastAPI application under Uvicorn.  It is
intended to be executed from the project root::

    python run.py

Database and logging configuration is read from environment variables
(see ``users_api.app.core.config``).  The listening address comes from
``API_HOST`` and ``API_PORT``, defaulting to ``0.0.0.0`` and ``8080``.
"""
import asyncio
import logging
import os

from uvicorn import Config, Server

from users_api.app.core.config import settings
from users_api.app.main import app


async def serve() -> None:
    """Serve the API until interrupted."""
    host = os.getenv("API_HOST", "0.0.0.0")
    port = int(os.getenv("API_PORT", "8080"))
    config = Config(app=app, host=host, port=port, reload=False, log_level=settings.log_level.lower())
    server = Server(config)
    logging.getLogger(__name__).info("Serving %s on %s:%d", settings.project_name, host, port)
    await server.serve()


def main() -> None:
    try:
        asyncio.run(serve())
    except (KeyboardInterrupt, SystemExit):
        pass


if __name__ == "__main__":
    main()
