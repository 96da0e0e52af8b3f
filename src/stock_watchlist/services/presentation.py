"""Joins store records with live quotes into display-ready rows."""
import logging

from stock_watchlist.providers import MarketProviderABC
from stock_watchlist.schemas import (AlertRecord, AlertRow, MarketQuote,
                                     WatchlistEntry, WatchlistRow)

logger = logging.getLogger(__name__)


class PresentationAssembler:
    """Decorates watchlist entries and alerts with current prices and daily change.

    A symbol whose quote cannot be fetched is shown without a price; quote
    failures never hide stored records.
    """

    def __init__(self, quote_provider: MarketProviderABC) -> None:
        self._quotes = quote_provider

    async def _prices(self, symbols: list[str]) -> dict[str, MarketQuote]:
        unique = list(dict.fromkeys(symbols))
        if not unique:
            return {}
        try:
            quotes = await self._quotes.get_quotes(unique)
        except Exception as exc:  # pylint: disable=broad-except
            logger.warning("Quote lookup failed for %s: %s", ",".join(unique), exc)
            return {}
        missing = [s for s in unique if s not in quotes]
        if missing:
            logger.warning("No quote for %s", ",".join(missing))
        return quotes

    async def watchlist_rows(self, entries: list[WatchlistEntry]) -> list[WatchlistRow]:
        """Entries in their stored order, each with its current price and daily change (or None)."""
        quotes = await self._prices([e.symbol for e in entries])
        return [
            WatchlistRow(
                symbol=e.symbol,
                company=e.company,
                added_at=e.added_at,
                price=_price(quotes.get(e.symbol)),
                change_percent=_change_percent(quotes.get(e.symbol)),
            )
            for e in entries
        ]

    async def alert_rows(self, alerts: list[AlertRecord]) -> list[AlertRow]:
        """Alerts in their stored order, each with its symbol's current price and daily change."""
        quotes = await self._prices([a.symbol for a in alerts])
        return [
            AlertRow(
                **a.model_dump(),
                current_price=_price(quotes.get(a.symbol)),
                change_percent=_change_percent(quotes.get(a.symbol)),
            )
            for a in alerts
        ]


def _price(quote: MarketQuote | None) -> float | None:
    return quote.value if quote is not None else None


def _change_percent(quote: MarketQuote | None) -> float | None:
    """Percent move since the previous close, when the provider reports one."""
    if quote is None or not quote.metadata:
        return None
    change = quote.metadata.get("change_percent")
    return float(change) if change is not None else None
