"""API routers.

Includes routes for:
- / and /health/db - Liveness and database connectivity
- /watchlist - The caller's tickers with live prices; /watchlist/stream WebSocket quotes
- /alerts - The caller's price alerts
"""
from stock_watchlist.routers.alerts import router as alerts_router
from stock_watchlist.routers.health import router as health_router
from stock_watchlist.routers.watchlist import router as watchlist_router

__all__ = [
    "alerts_router",
    "health_router",
    "watchlist_router",
]
