"""Protocols for service-layer stream sources."""
import asyncio
from collections.abc import AsyncIterator
from typing import Protocol

from stock_watchlist.schemas import MarketQuote


class QuoteStreamable(Protocol):
    """Protocol for objects that can stream MarketQuotes (e.g. a provider)."""

    def stream(
        self,
        symbols: list[str],
        *,
        stop_event: asyncio.Event,
    ) -> AsyncIterator[MarketQuote]:
        """Stream quotes for the given symbols until stop_event is set."""
        ...
