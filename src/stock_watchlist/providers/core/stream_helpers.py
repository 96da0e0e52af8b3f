"""Polling-based quote stream shared by providers without push feeds."""
import asyncio
from collections.abc import AsyncIterator, Awaitable, Callable

from stock_watchlist.schemas import MarketQuote


async def stream_by_polling(
    symbols: list[str],
    poll_interval_seconds: float,
    fetch_quotes: Callable[[list[str]], Awaitable[list[MarketQuote]]],
    *,
    stop_event: asyncio.Event,
    dedup_by_value: bool = True,
) -> AsyncIterator[MarketQuote]:
    """Poll fetch_quotes(symbols) until stop_event is set, yielding changed quotes.

    Each WebSocket client owns its stop_event, so one disconnect never ends
    another client's stream.

    Args:
        symbols: Symbols to poll. Nothing is yielded for an empty list.
        poll_interval_seconds: Seconds to sleep between poll rounds.
        fetch_quotes: Async callable(symbols) -> list[MarketQuote].
        stop_event: The loop exits once this is set.
        dedup_by_value: Skip a quote whose value has not moved since the last yield.
    """
    if not symbols:
        return
    last_values: dict[str, float] = {}
    while not stop_event.is_set():
        for quote in await fetch_quotes(symbols):
            if dedup_by_value and last_values.get(quote.symbol) == quote.value:
                continue
            last_values[quote.symbol] = quote.value
            yield quote
        if stop_event.is_set():
            break
        try:
            await asyncio.wait_for(stop_event.wait(), timeout=poll_interval_seconds)
        except asyncio.TimeoutError:
            pass
