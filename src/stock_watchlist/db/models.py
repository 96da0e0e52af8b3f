"""Database models for the watchlist service.

Only user/application state is persisted. Quotes are fetched on demand from
the quote provider and never stored.
"""
from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import Column, DateTime, UniqueConstraint
from sqlmodel import Field, SQLModel


def utcnow() -> datetime:
    """Timezone-aware current UTC time."""
    return datetime.now(timezone.utc)


class AlertType(str, Enum):
    """Direction of a price alert."""

    ABOVE = "above"
    BELOW = "below"


class User(SQLModel, table=True):
    """User account owned by the session provider."""

    id: str = Field(primary_key=True)
    email: str = Field(unique=True, index=True)
    name: str = ""
    created_at: datetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime(timezone=True), nullable=False)
    )


class AuthSession(SQLModel, table=True):
    """Login session issued by the session provider; looked up by token."""

    __tablename__ = "auth_session"

    id: int | None = Field(default=None, primary_key=True)
    token: str = Field(unique=True, index=True)
    user_id: str = Field(foreign_key="user.id", index=True)
    expires_at: datetime = Field(sa_column=Column(DateTime(timezone=True), nullable=False))
    created_at: datetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime(timezone=True), nullable=False)
    )


class WatchlistItem(SQLModel, table=True):
    """A ticker the user follows. One row per (user_id, symbol)."""

    __tablename__ = "watchlist_item"
    __table_args__ = (UniqueConstraint("user_id", "symbol", name="uq_watchlist_user_symbol"),)

    id: int | None = Field(default=None, primary_key=True)
    user_id: str = Field(index=True)
    symbol: str  # AAPL, BRK.B
    company: str
    added_at: datetime = Field(sa_column=Column(DateTime(timezone=True), nullable=False))


class Alert(SQLModel, table=True):
    """Price alert for a user."""

    id: str = Field(primary_key=True)  # uuid4 hex
    user_id: str = Field(index=True)
    symbol: str
    company: str
    alert_name: str
    alert_type: str  # AlertType value
    threshold: float
    created_at: datetime = Field(sa_column=Column(DateTime(timezone=True), nullable=False))
