"""Service helpers."""
from stock_watchlist.services.utils.stream_handler import \
    handle_websocket_stream

__all__ = ["handle_websocket_stream"]
