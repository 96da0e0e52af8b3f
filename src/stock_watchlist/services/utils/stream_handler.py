"""WebSocket stream handling: push MarketQuotes from a quote source to a client."""
import asyncio
import logging

from fastapi import WebSocket, WebSocketDisconnect

from stock_watchlist.schemas import MarketQuote
from stock_watchlist.services.protocols import QuoteStreamable

logger = logging.getLogger(__name__)


async def handle_websocket_stream(
    websocket: WebSocket,
    stream_source: QuoteStreamable,
    symbol_list: list[str],
    empty_message: str,
) -> None:
    """Accept WebSocket, close with 4000 if there is nothing to stream, else stream quotes.

    Uses a per-connection stop_event so one client disconnect does not stop
    other clients sharing the same provider.
    """
    await websocket.accept()
    if not symbol_list:
        await websocket.close(code=4000, reason=empty_message)
        return
    stop_event = asyncio.Event()
    try:
        async for quote in stream_source.stream(symbol_list, stop_event=stop_event):
            if isinstance(quote, MarketQuote):
                await websocket.send_json(quote.model_dump(mode="json"))
    except WebSocketDisconnect:
        logger.debug("Stream client disconnected")
    except Exception as exc:  # pylint: disable=broad-except
        logger.exception("Stream error: %s", exc)
        try:
            await websocket.close(code=1011, reason="Stream error")
        except RuntimeError:
            logger.debug("WebSocket already closed")
    finally:
        stop_event.set()
