"""Yahoo Finance quote provider."""
from stock_watchlist.providers.stocks.yfinance.y_finance_provider import \
    YFinanceProvider

__all__ = ["YFinanceProvider"]
