"""CLI entry points for the database schema: Alembic migrations and a create-all shortcut."""
import asyncio
import logging
import subprocess
import sys
from pathlib import Path

from stock_watchlist.config import Settings
from stock_watchlist.db.sessions import Database

logger = logging.getLogger(__name__)

# Project root: .../src/stock_watchlist/db/cli.py -> project root (holds alembic.ini)
_PROJECT_ROOT = Path(__file__).resolve().parents[3]


def _run_alembic(*args: str) -> None:
    """Run alembic from the project root."""
    subprocess.run(
        [sys.executable, "-m", "alembic", *args],
        cwd=_PROJECT_ROOT,
        check=True,
    )


def generate() -> None:
    """Run alembic revision --autogenerate. Pass -m "message" for the revision message."""
    _run_alembic("revision", "--autogenerate", *sys.argv[1:])


def migrate() -> None:
    """Run alembic upgrade head. Pass a revision as first arg to upgrade to that instead."""
    revision = sys.argv[1] if len(sys.argv) > 1 else "head"
    _run_alembic("upgrade", revision, *sys.argv[2:])


async def _init(database: Database) -> None:
    try:
        await database.init_db()
    finally:
        await database.dispose()


def init() -> None:
    """Create missing tables in DATABASE_URL without migration history (local/dev only).

    Use `poetry run migrate` for databases that must keep evolving.
    """
    logging.basicConfig(level=logging.INFO)
    database = Database.from_settings(Settings.from_env())
    try:
        asyncio.run(_init(database))
    except Exception as exc:  # pylint: disable=broad-except
        print("Failed to initialize database:", exc, file=sys.stderr)
        sys.exit(1)
    logger.info("Database tables created")
