"""Liveness and database connectivity checks."""
import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from stock_watchlist.deps import DatabaseDep

logger = logging.getLogger(__name__)
router = APIRouter(tags=["health"])


@router.get("/")
def health() -> dict[str, str]:
    """Return health check status."""
    return {"status": "ok"}


@router.get("/health/db")
async def health_db(database: DatabaseDep) -> JSONResponse:
    """Round-trip the database; 500 when it cannot be reached."""
    try:
        await database.ping()
    except Exception as exc:  # pylint: disable=broad-except
        logger.error("Database health check failed: %s", exc)
        return JSONResponse({"error": "Database connection failed"}, status_code=500)
    return JSONResponse({"message": "Database connected successfully"})
