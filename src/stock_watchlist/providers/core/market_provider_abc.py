"""Abstract base class for quote providers."""
import asyncio
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator

from stock_watchlist.schemas import MarketQuote


class MarketProviderABC(ABC):
    """Base interface for live quote providers.

    The watchlist service only reads quotes: single lookups, batches for the
    presentation layer, and a polling stream for WebSocket clients.
    """

    @abstractmethod
    async def get_quote(self, symbol: str) -> MarketQuote:
        """Fetch the current quote for a symbol.

        Args:
            symbol: Stock ticker (e.g., "AAPL").

        Returns:
            A MarketQuote with the current price.
        """

    async def get_quotes(self, symbols: list[str]) -> dict[str, MarketQuote]:
        """Fetch quotes for several symbols concurrently.

        Symbols whose lookup fails are left out of the result.

        Returns:
            Mapping of symbol to quote.
        """
        results = await asyncio.gather(
            *[self.get_quote(s) for s in symbols],
            return_exceptions=True,
        )
        return {
            s: q for s, q in zip(symbols, results) if isinstance(q, MarketQuote)
        }

    @abstractmethod
    async def stream(
        self,
        symbols: list[str],
        *,
        stop_event: asyncio.Event,
    ) -> AsyncIterator[MarketQuote]:
        """Subscribe to price updates for the given symbols.

        Args:
            symbols: List of symbols to subscribe to.
            stop_event: Owned by the subscriber; the stream ends once it is set.

        Yields:
            MarketQuote objects with price updates.
        """
        # This yield is needed to make this an async generator in the ABC
        yield  # type: ignore[misc]

    async def close(self) -> None:
        """Clean up resources (connections, clients).

        Override in subclasses if cleanup is needed.
        """

    async def __aenter__(self) -> "MarketProviderABC":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        """Async context manager exit - calls close()."""
        await self.close()
