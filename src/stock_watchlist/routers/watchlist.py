"""Watchlist routes: list with live prices, membership, add/remove, quote stream."""
import logging

from fastapi import APIRouter, Response, WebSocket

from stock_watchlist.deps import (CurrentUser, PresenterDep, QuoteProviderDep,
                                  WatchlistStoreDep, owner_id)
from stock_watchlist.schemas import WatchlistAddRequest, WatchlistRow
from stock_watchlist.services.utils import handle_websocket_stream
from stock_watchlist.stores import OperationResult, http_status_for
from stock_watchlist.stores.validation import normalize_symbol

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/watchlist", tags=["watchlist"])


@router.get("", response_model=list[WatchlistRow])
async def get_watchlist(
    user: CurrentUser, store: WatchlistStoreDep, presenter: PresenterDep
) -> list[WatchlistRow]:
    """Get the caller's watchlist, most recently added first, with current prices.

    Anonymous callers get an empty list.
    """
    entries = await store.list_for_owner(owner_id(user))
    return await presenter.watchlist_rows(entries)


@router.post(
    "", response_model=OperationResult, response_model_exclude_none=True, status_code=201
)
async def add_to_watchlist(
    body: WatchlistAddRequest,
    response: Response,
    user: CurrentUser,
    store: WatchlistStoreDep,
) -> OperationResult:
    """Add a ticker to the caller's watchlist. Adding an existing ticker is a no-op."""
    result = await store.add(owner_id(user), body.symbol, body.company)
    response.status_code = http_status_for(result, success_status=201)
    return result


@router.websocket("/stream")
async def stream_watchlist(
    websocket: WebSocket,
    user: CurrentUser,
    store: WatchlistStoreDep,
    quotes: QuoteProviderDep,
) -> None:
    """Stream price updates for every ticker on the caller's watchlist.

    Each message is a MarketQuote JSON. Closes with 4000 when the caller is
    anonymous or the watchlist is empty.
    """
    symbols = [e.symbol for e in await store.list_for_owner(owner_id(user))]
    await handle_websocket_stream(
        websocket, quotes, symbols, "Watchlist is empty or not signed in"
    )


@router.get("/{symbol}")
async def is_in_watchlist(
    symbol: str, user: CurrentUser, store: WatchlistStoreDep
) -> dict[str, str | bool]:
    """Check whether a ticker is on the caller's watchlist (false when anonymous)."""
    return {
        "symbol": normalize_symbol(symbol),
        "inWatchlist": await store.is_member(owner_id(user), symbol),
    }


@router.delete("/{symbol}", response_model=OperationResult, response_model_exclude_none=True)
async def remove_from_watchlist(
    symbol: str, response: Response, user: CurrentUser, store: WatchlistStoreDep
) -> OperationResult:
    """Remove a ticker from the caller's watchlist. Removing a missing ticker succeeds."""
    result = await store.remove(owner_id(user), symbol)
    response.status_code = http_status_for(result)
    return result
