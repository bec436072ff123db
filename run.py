"""Entry point for the Skills Hub API.

Serves the FastAPI application with Uvicorn.  Host, port and log
level come from the same environment variables as the application
settings (``HOST``, ``PORT``, ``LOG_LEVEL``).

Usage:
    python run.py
"""
import asyncio

from uvicorn import Config, Server

from skills_hub_api.app.core.config import settings
from skills_hub_api.app.main import app


async def main() -> None:
    config = Config(
        app=app,
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
