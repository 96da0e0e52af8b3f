"""Service layer: presentation of store records with live quotes."""
from stock_watchlist.services.presentation import PresentationAssembler

__all__ = ["PresentationAssembler"]
