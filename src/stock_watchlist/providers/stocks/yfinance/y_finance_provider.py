"""Yahoo Finance quote provider for stocks."""
import asyncio
from collections.abc import AsyncIterator
from datetime import datetime, timezone

import yfinance as yf

from stock_watchlist.providers.core import (MarketProviderABC, round2,
                                            stream_by_polling)
from stock_watchlist.providers.stocks.yfinance.models import \
    YFinanceQuoteMetadata
from stock_watchlist.schemas import MarketQuote, Source
from stock_watchlist.stores.validation import normalize_symbol


class YFinanceProvider(MarketProviderABC):
    """Quote provider for stocks via Yahoo Finance.

    No API key required. yfinance is blocking, so lookups run in a worker
    thread; streaming is polling-based since there is no push feed.
    """

    def __init__(self, poll_interval: float = 15.0) -> None:
        """Initialize the YFinance provider.

        Args:
            poll_interval: Interval in seconds for polling-based streaming.
        """
        super().__init__()
        self._poll_interval = poll_interval

    def _extract_quote_fields(
        self, ticker: yf.Ticker, symbol: str
    ) -> tuple[float, float | None, float | None]:
        """Extract (price, volume, previous_close); raises if price unavailable."""
        info = getattr(ticker, "fast_info", None)
        if info and (price := info.get("lastPrice") or info.get("regularMarketPrice")):
            vol = info.get("lastVolume")
            prev = info.get("previousClose")
            return (
                float(price),
                float(vol) if vol is not None else None,
                float(prev) if prev is not None else None,
            )
        full = ticker.info
        price = full.get("currentPrice") or full.get("regularMarketPrice")
        if price is None:
            raise ValueError(f"Stock '{symbol}' not found or has no price data")
        vol = full.get("volume")
        prev = full.get("previousClose")
        return (
            float(price),
            float(vol) if vol is not None else None,
            float(prev) if prev is not None else None,
        )

    def _fetch_quote_sync(self, symbol: str) -> MarketQuote:
        """Fetch a single quote synchronously (run in thread)."""
        ticker = yf.Ticker(symbol)
        try:
            price, volume, prev_close = self._extract_quote_fields(ticker, symbol)
        except ValueError:
            raise
        except Exception as e:
            raise ValueError(f"Failed to fetch quote for '{symbol}': {e}") from e
        change = (price - prev_close) / prev_close * 100 if prev_close else None
        return MarketQuote(
            source=Source.STOCK,
            symbol=symbol,
            value=round2(price),
            volume=round2(volume),
            timestamp=datetime.now(timezone.utc),
            metadata=YFinanceQuoteMetadata(
                previous_close=round2(prev_close),
                change_percent=round2(change),
            ).model_dump(),
        )

    async def get_quote(self, symbol: str) -> MarketQuote:
        """Fetch the current quote for a stock symbol."""
        sym = normalize_symbol(symbol)
        if not sym:
            raise ValueError("Empty stock symbol")
        return await asyncio.to_thread(self._fetch_quote_sync, sym)

    async def stream(
        self,
        symbols: list[str],
        *,
        stop_event: asyncio.Event,
    ) -> AsyncIterator[MarketQuote]:
        """Stream price updates via polling.

        Args:
            symbols: List of stock tickers to stream (e.g., ["AAPL", "MSFT"]).
            stop_event: Per-subscriber; the polling loop exits once it is set.

        Yields:
            MarketQuote objects when a symbol's price changes.
        """
        normalized = [normalize_symbol(s) for s in symbols if normalize_symbol(s)]

        async for quote in stream_by_polling(
            normalized,
            self._poll_interval,
            self._fetch_stream_batch,
            stop_event=stop_event,
        ):
            yield quote

    async def _fetch_stream_batch(self, syms: list[str]) -> list[MarketQuote]:
        """Fetch quotes for the given symbols (used by stream)."""
        return list((await self.get_quotes(syms)).values())
