"""Entry point for the Memo API server.

Launches the FastAPI application with Uvicorn.  It is intended to be
executed from the project root, for example under Docker, where you
only specify a single Python file to run.

Configuration such as DATABASE_URL, SECRET_KEY and CORS_ORIGINS is
read from environment variables (see ``memo_api/app/core/config.py``).
Host and port come from ``API_HOST`` and ``API_PORT``; defaults are
``0.0.0.0`` and ``8000``.

Usage:
    python run.py
"""
import asyncio
import logging
import os

from uvicorn import Config, Server

from memo_api.app.core.config import settings
from memo_api.app.main import app


async def main() -> None:
    """Serve the API until interrupted."""
    host = os.getenv("API_HOST", "0.0.0.0")
    port = int(os.getenv("API_PORT", "8000"))
    config = Config(app=app, host=host, port=port, reload=False, log_level=settings.log_level.lower())
    server = Server(config)
    logging.getLogger(__name__).info("Serving %s on %s:%s", settings.project_name, host, port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
