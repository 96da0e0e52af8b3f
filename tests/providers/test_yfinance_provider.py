"""YFinanceProvider and the polling stream, with yfinance.Ticker stubbed out."""
import asyncio

import pytest

from stock_watchlist.providers.stocks.yfinance import y_finance_provider
from stock_watchlist.providers.stocks.yfinance.y_finance_provider import \
    YFinanceProvider
from stock_watchlist.schemas import Source
from tests.support.fakes import FakeQuoteProvider


class StubTicker:
    PRICES = {
        "AAPL": {"lastPrice": 189.456, "lastVolume": 1000, "previousClose": 180.0},
    }

    def __init__(self, symbol: str) -> None:
        self.fast_info = self.PRICES.get(symbol, {})
        self.info: dict = {}


@pytest.fixture(autouse=True)
def stub_ticker(monkeypatch):
    monkeypatch.setattr(y_finance_provider.yf, "Ticker", StubTicker)


async def test_get_quote_normalizes_and_rounds():
    provider = YFinanceProvider()

    quote = await provider.get_quote(" aapl ")

    assert quote.source is Source.STOCK
    assert quote.symbol == "AAPL"
    assert quote.value == 189.46
    assert quote.volume == 1000.0
    assert quote.metadata["previous_close"] == 180.0
    assert quote.metadata["change_percent"] == 5.25
    assert quote.metadata["provider"] == "yfinance"


async def test_unknown_symbol_raises_value_error():
    provider = YFinanceProvider()

    with pytest.raises(ValueError):
        await provider.get_quote("ZZZZ")
    with pytest.raises(ValueError):
        await provider.get_quote("  ")


async def test_get_quotes_skips_failures():
    provider = YFinanceProvider()

    quotes = await provider.get_quotes(["AAPL", "ZZZZ"])

    assert list(quotes) == ["AAPL"]


async def test_stream_stops_when_event_is_set():
    provider = FakeQuoteProvider({"AAPL": 1.0, "MSFT": 2.0})
    stop = asyncio.Event()
    received = []

    async for quote in provider.stream(["AAPL", "MSFT"], stop_event=stop):
        received.append(quote.symbol)
        if len(received) == 2:
            stop.set()

    assert received == ["AAPL", "MSFT"]


async def test_stream_dedups_unchanged_values():
    provider = FakeQuoteProvider({"AAPL": 1.0})
    stop = asyncio.Event()
    values = []

    async def bump_then_stop():
        await asyncio.sleep(0.01)
        provider.prices["AAPL"] = 2.0
        await asyncio.sleep(0.01)
        stop.set()

    task = asyncio.create_task(bump_then_stop())
    async for quote in provider.stream(["AAPL"], stop_event=stop):
        values.append(quote.value)
    await task

    assert values == [1.0, 2.0]


async def test_yfinance_stream_ends_without_waiting_out_the_poll_interval():
    provider = YFinanceProvider(poll_interval=60)
    stop = asyncio.Event()

    async def first_then_stop() -> list[str]:
        received = []
        async for quote in provider.stream([" aapl ", "", "ZZZZ"], stop_event=stop):
            received.append(quote.symbol)
            stop.set()
        return received

    assert await asyncio.wait_for(first_then_stop(), timeout=5) == ["AAPL"]


async def test_stream_with_no_symbols_yields_nothing():
    provider = FakeQuoteProvider({"AAPL": 1.0})

    received = [q async for q in provider.stream([], stop_event=asyncio.Event())]

    assert received == []
    assert provider.requested == []
