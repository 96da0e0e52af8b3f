"""Database package: models and session management."""
from stock_watchlist.db.models import (Alert, AlertType, AuthSession, User,
                                       WatchlistItem, utcnow)
from stock_watchlist.db.sessions import Database

__all__ = [
    "Alert",
    "AlertType",
    "AuthSession",
    "Database",
    "User",
    "WatchlistItem",
    "utcnow",
]
