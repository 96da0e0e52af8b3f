"""Models for the YFinance provider."""
from pydantic import BaseModel


class YFinanceQuoteMetadata(BaseModel):
    """Extra quote fields carried in MarketQuote.metadata."""

    previous_close: float | None = None
    change_percent: float | None = None
    provider: str = "yfinance"
