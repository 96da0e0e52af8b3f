"""Normalization and validation shared by the watchlist and alert stores."""
import math
from dataclasses import dataclass

from stock_watchlist.db.models import AlertType
from stock_watchlist.schemas import AlertData
from stock_watchlist.stores.exceptions import (InvalidInput,
                                               NotAuthenticated)

# Legacy UI values accepted on input; stored as the canonical AlertType.
_ALERT_TYPE_ALIASES = {
    "above": AlertType.ABOVE,
    "upper": AlertType.ABOVE,
    "below": AlertType.BELOW,
    "lower": AlertType.BELOW,
}

INVALID_ALERT_DATA = "Invalid alert data"


def normalize_symbol(symbol: str | None) -> str:
    """Trim and uppercase a ticker (" aapl " -> "AAPL")."""
    return (symbol or "").strip().upper()


def normalize_company(company: str | None, fallback: str) -> str:
    """Trim a company name; empty names fall back to the symbol."""
    return (company or "").strip() or fallback


def require_owner(owner_id: str | None) -> str:
    """Session gate: raise NotAuthenticated for an anonymous caller."""
    if not owner_id:
        raise NotAuthenticated()
    return owner_id


def parse_threshold(value: object) -> float | None:
    """Parse a threshold to a finite, non-negative float; None if it is not one."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or number < 0:
        return None
    return number


def parse_alert_type(value: str | None) -> AlertType | None:
    return _ALERT_TYPE_ALIASES.get((value or "").strip().lower())


@dataclass(frozen=True)
class AlertFields:
    """Validated, normalized alert fields ready to persist."""

    symbol: str
    company: str
    alert_name: str
    alert_type: AlertType
    threshold: float


def validate_alert(data: AlertData) -> AlertFields:
    """Validate and normalize raw alert input. Raises InvalidInput."""
    symbol = normalize_symbol(data.symbol)
    company = (data.company or "").strip()
    alert_name = (data.alert_name or "").strip()
    alert_type = parse_alert_type(data.alert_type)
    threshold = parse_threshold(data.threshold)
    if not symbol or not company or not alert_name or alert_type is None or threshold is None:
        raise InvalidInput(INVALID_ALERT_DATA)
    return AlertFields(
        symbol=symbol,
        company=company,
        alert_name=alert_name,
        alert_type=alert_type,
        threshold=threshold,
    )
