"""Pydantic schemas for API and runtime use.

Records (WatchlistEntry, AlertRecord) are the typed view of stored rows; the
*_from_row functions are the only place rows cross into them. Quotes and
display rows are runtime-only and never persisted.
"""
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import (BaseModel, ConfigDict, Field, StrictBool, StrictFloat,
                      StrictInt)
from pydantic.alias_generators import to_camel

from stock_watchlist.db.models import AlertType


class Source(str, Enum):
    """Quote source."""

    STOCK = "stock"


class MarketQuote(BaseModel):
    """Live quote from the quote provider."""

    source: Source
    symbol: str
    value: float
    volume: float | None = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    metadata: dict | None = None


class CamelModel(BaseModel):
    """Base model exposing camelCase JSON names (alertName, addedAt, ...)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class WatchlistEntry(CamelModel):
    """One ticker on a user's watchlist."""

    owner_id: str
    symbol: str
    company: str
    added_at: datetime


class AlertRecord(CamelModel):
    """Canonical alert fields returned to callers."""

    id: str
    symbol: str
    company: str
    alert_name: str
    alert_type: AlertType
    threshold: float


class AlertData(CamelModel):
    """Raw alert input as submitted by a client; validated by the alert store."""

    symbol: str | None = None
    company: str | None = None
    alert_name: str | None = None
    alert_type: str | None = None
    threshold: str | StrictFloat | StrictInt | StrictBool | None = None


class WatchlistAddRequest(BaseModel):
    """Body for adding a ticker to the watchlist."""

    symbol: str
    company: str = ""


class WatchlistRow(CamelModel):
    """Watchlist entry joined with its live price."""

    symbol: str
    company: str
    added_at: datetime
    price: float | None = None
    change_percent: float | None = None


class AlertRow(CamelModel):
    """Alert joined with the live price of its symbol."""

    id: str
    symbol: str
    company: str
    alert_name: str
    alert_type: AlertType
    threshold: float
    current_price: float | None = None
    change_percent: float | None = None


class RecordMappingError(ValueError):
    """A stored row is missing fields required by its record type."""


def _require(row: Any, *names: str) -> dict[str, Any]:
    values = {}
    missing = []
    for name in names:
        value = getattr(row, name, None)
        if value is None or (isinstance(value, str) and not value):
            missing.append(name)
        values[name] = value
    if missing:
        raise RecordMappingError(
            f"{type(row).__name__} row missing required fields: {', '.join(missing)}"
        )
    return values


def _aware(ts: datetime) -> datetime:
    """SQLite drops tzinfo; stored times are always UTC."""
    return ts if ts.tzinfo is not None else ts.replace(tzinfo=timezone.utc)


def entry_from_row(row: Any) -> WatchlistEntry:
    """Map a watchlist row to a WatchlistEntry. Raises RecordMappingError."""
    v = _require(row, "user_id", "symbol", "company", "added_at")
    return WatchlistEntry(
        owner_id=str(v["user_id"]),
        symbol=str(v["symbol"]),
        company=str(v["company"]),
        added_at=_aware(v["added_at"]),
    )


def alert_from_row(row: Any) -> AlertRecord:
    """Map an alert row (ORM object or RETURNING row) to an AlertRecord. Raises RecordMappingError."""
    v = _require(row, "id", "symbol", "company", "alert_name", "alert_type", "threshold")
    try:
        alert_type = AlertType(v["alert_type"])
    except ValueError as e:
        raise RecordMappingError(f"Unknown alert type {v['alert_type']!r}") from e
    return AlertRecord(
        id=str(v["id"]),
        symbol=str(v["symbol"]),
        company=str(v["company"]),
        alert_name=str(v["alert_name"]),
        alert_type=alert_type,
        threshold=float(v["threshold"]),
    )


__all__ = [
    "AlertData",
    "AlertRecord",
    "AlertRow",
    "AlertType",
    "MarketQuote",
    "RecordMappingError",
    "Source",
    "WatchlistAddRequest",
    "WatchlistEntry",
    "WatchlistRow",
    "alert_from_row",
    "entry_from_row",
]
