"""Persistence and mutation layer for watchlists and alerts."""
from stock_watchlist.stores.alerts import AlertStore
from stock_watchlist.stores.exceptions import (ErrorKind, InvalidInput,
                                               NotAuthenticated, NotFound,
                                               StorageUnavailable, StoreError)
from stock_watchlist.stores.results import OperationResult, http_status_for
from stock_watchlist.stores.watchlist import WatchlistStore

__all__ = [
    "AlertStore",
    "ErrorKind",
    "InvalidInput",
    "NotAuthenticated",
    "NotFound",
    "OperationResult",
    "StorageUnavailable",
    "StoreError",
    "WatchlistStore",
    "http_status_for",
]
