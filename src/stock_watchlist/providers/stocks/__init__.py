"""Stock quote providers."""
from stock_watchlist.providers.stocks.yfinance import YFinanceProvider

__all__ = ["YFinanceProvider"]
