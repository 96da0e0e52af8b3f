"""Alert store: per-user price alerts.

All reads and writes are scoped to the owner; an alert id belonging to another
user behaves exactly like a missing one.
"""
import logging
import uuid
from collections.abc import Callable
from datetime import datetime

from sqlalchemy import delete, insert, select, update
from sqlmodel import col

from stock_watchlist.db import Alert, Database, utcnow
from stock_watchlist.schemas import (AlertData, AlertRecord,
                                     RecordMappingError, alert_from_row)
from stock_watchlist.stores.exceptions import InvalidInput, NotFound
from stock_watchlist.stores.results import (ErrorListener, OperationResult,
                                            StoreErrorMapper)
from stock_watchlist.stores.validation import require_owner, validate_alert

logger = logging.getLogger(__name__)

_RETURNING = (
    Alert.id,
    Alert.symbol,
    Alert.company,
    Alert.alert_name,
    Alert.alert_type,
    Alert.threshold,
)


def new_alert_id() -> str:
    return uuid.uuid4().hex


class AlertStore:
    """Create/update/delete/list alerts for the session user."""

    def __init__(
        self,
        database: Database,
        *,
        clock: Callable[[], datetime] = utcnow,
        id_factory: Callable[[], str] = new_alert_id,
        error_listener: ErrorListener | None = None,
    ) -> None:
        self._db = database
        self._clock = clock
        self._new_id = id_factory
        self._errors = StoreErrorMapper(error_listener)

    async def create(
        self, owner_id: str | None, data: AlertData
    ) -> OperationResult[AlertRecord]:
        """Validate and persist a new alert; returns its canonical fields."""
        try:
            owner = require_owner(owner_id)
            fields = validate_alert(data)
            values = {
                "id": self._new_id(),
                "user_id": owner,
                "symbol": fields.symbol,
                "company": fields.company,
                "alert_name": fields.alert_name,
                "alert_type": fields.alert_type.value,
                "threshold": fields.threshold,
                "created_at": self._clock(),
            }
            async with self._db.session() as session:
                await session.execute(insert(Alert).values(**values))
            return OperationResult.ok(alert_from_row(Alert(**values)))
        except Exception as e:  # pylint: disable=broad-except
            return self._errors.to_result("createAlert", e, "Failed to create alert")

    async def update(
        self, alert_id: str, owner_id: str | None, data: AlertData
    ) -> OperationResult[AlertRecord]:
        """Replace the alert's fields when (alert_id, owner) matches; NotFound otherwise."""
        try:
            owner = require_owner(owner_id)
            fields = validate_alert(data)
            if not alert_id:
                raise InvalidInput("Invalid alert data")
            stmt = (
                update(Alert)
                .where(col(Alert.id) == alert_id, col(Alert.user_id) == owner)
                .values(
                    symbol=fields.symbol,
                    company=fields.company,
                    alert_name=fields.alert_name,
                    alert_type=fields.alert_type.value,
                    threshold=fields.threshold,
                )
                .returning(*_RETURNING)
            )
            async with self._db.session() as session:
                row = (await session.execute(stmt)).first()
            if row is None:
                raise NotFound("Alert not found")
            return OperationResult.ok(alert_from_row(row))
        except Exception as e:  # pylint: disable=broad-except
            return self._errors.to_result("updateAlert", e, "Failed to update alert")

    async def delete(self, alert_id: str, owner_id: str | None) -> OperationResult:
        """Delete the owner's alert; deleting a missing alert still succeeds."""
        try:
            owner = require_owner(owner_id)
            if not alert_id:
                raise InvalidInput("Missing alert id")
            async with self._db.session() as session:
                await session.execute(
                    delete(Alert).where(
                        col(Alert.id) == alert_id, col(Alert.user_id) == owner
                    )
                )
            return OperationResult.ok()
        except Exception as e:  # pylint: disable=broad-except
            return self._errors.to_result("deleteAlert", e, "Failed to delete alert")

    async def list_for_owner(self, owner_id: str | None) -> list[AlertRecord]:
        """All alerts for the owner, newest first; [] on failure."""
        try:
            owner = require_owner(owner_id)
            async with self._db.session() as session:
                result = await session.execute(
                    select(Alert)
                    .where(col(Alert.user_id) == owner)
                    .order_by(col(Alert.created_at).desc())
                )
                rows = result.scalars().all()
        except Exception as e:  # pylint: disable=broad-except
            return self._errors.to_default("getAlertsForUser", e, [])
        alerts: list[AlertRecord] = []
        for row in rows:
            try:
                alerts.append(alert_from_row(row))
            except RecordMappingError as e:
                logger.warning("Skipping alert row %s: %s", row.id, e)
        return alerts
