"""Core provider abstractions."""
from stock_watchlist.providers.core.market_provider_abc import MarketProviderABC
from stock_watchlist.providers.core.stream_helpers import stream_by_polling
from stock_watchlist.providers.core.utils import round2

__all__ = [
    "MarketProviderABC",
    "round2",
    "stream_by_polling",
]
