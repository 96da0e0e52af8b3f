"""Live quote providers used to decorate watchlist and alert views.

All providers implement MarketProviderABC and return MarketQuote objects.

Example:
    async with YFinanceProvider() as provider:
        quote = await provider.get_quote("AAPL")
        print(f"{quote.symbol}: ${quote.value}")
"""
from stock_watchlist.providers.core import MarketProviderABC
from stock_watchlist.providers.stocks import YFinanceProvider

__all__ = [
    "MarketProviderABC",
    "YFinanceProvider",
]
