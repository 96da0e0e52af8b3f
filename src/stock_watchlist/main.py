"""Main module for the stock watchlist service."""
import logging
import subprocess
import sys
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import FastAPI

from stock_watchlist.container import Container
from stock_watchlist.routers import (alerts_router, health_router,
                                     watchlist_router)

logger = logging.getLogger(__name__)


def create_app(container: Container | None = None) -> FastAPI:
    """Build the FastAPI app around a container (a fresh one by default)."""
    container = container or Container()

    @asynccontextmanager
    async def lifespan(fastapi_app: FastAPI):
        """The database connects lazily on first use; close shared resources on shutdown."""
        yield
        try:
            await container.quote_provider().close()
        except Exception as exc:  # pylint: disable=broad-except
            logger.warning("Error closing quote provider: %s", exc)
        try:
            await container.database().dispose()
        except Exception as exc:  # pylint: disable=broad-except
            logger.warning("Error disposing database: %s", exc)

    fastapi_app = FastAPI(
        title="Stock Watchlist",
        description="Per-user stock watchlists and price alerts",
        version="0.1.0",
        lifespan=lifespan,
    )
    fastapi_app.state.container = container

    fastapi_app.include_router(health_router)
    fastapi_app.include_router(watchlist_router)
    fastapi_app.include_router(alerts_router)
    return fastapi_app


app = create_app()


def run():
    """Run the server (uvicorn). Use for `poetry run start`."""
    uvicorn.run("stock_watchlist.main:app", host="127.0.0.1", port=8001)


def run_dev():
    """Run the development server with Postgres running via Docker."""
    project_root = Path(__file__).resolve().parent.parent.parent
    try:
        subprocess.run(
            ["docker", "compose", "up", "-d", "postgres"],
            cwd=project_root,
            capture_output=True,
            text=True,
            check=True,
        )
    except subprocess.CalledProcessError as e:
        print("Failed to start Postgres:", e.stderr or e.stdout, file=sys.stderr)
        sys.exit(1)
    uvicorn.run("stock_watchlist.main:app", host="0.0.0.0", port=8000, reload=True)
