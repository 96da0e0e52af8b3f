"""Watchlist store: per-user set of followed tickers.

Every public method issues a single statement and never raises; mutations
return an OperationResult, reads collapse any failure to an empty default.
"""
import logging
from collections.abc import Callable
from datetime import datetime

from sqlalchemy import delete, func, insert, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError
from sqlmodel import col

from stock_watchlist.db import Database, User, WatchlistItem, utcnow
from stock_watchlist.schemas import (RecordMappingError, WatchlistEntry,
                                     entry_from_row)
from stock_watchlist.stores.exceptions import InvalidInput
from stock_watchlist.stores.results import (ErrorListener, OperationResult,
                                            StoreErrorMapper)
from stock_watchlist.stores.validation import (normalize_company,
                                               normalize_symbol, require_owner)

logger = logging.getLogger(__name__)

_UPSERT_DIALECTS = {"postgresql": pg_insert, "sqlite": sqlite_insert}


class WatchlistStore:
    """Add/remove/check/list watchlist entries for the session user."""

    def __init__(
        self,
        database: Database,
        *,
        clock: Callable[[], datetime] = utcnow,
        error_listener: ErrorListener | None = None,
    ) -> None:
        """Initialize with the shared database.

        Args:
            database: Lazily-initialized shared Database.
            clock: Source of added_at timestamps.
            error_listener: Optional hook called on storage failures.
        """
        self._db = database
        self._clock = clock
        self._errors = StoreErrorMapper(error_listener)

    def _insert_if_absent(self, values: dict):
        upsert = _UPSERT_DIALECTS.get(self._db.dialect_name)
        if upsert is None:
            return insert(WatchlistItem).values(**values)
        return upsert(WatchlistItem).values(**values).on_conflict_do_nothing(
            index_elements=["user_id", "symbol"]
        )

    async def add(
        self, owner_id: str | None, symbol: str, company: str | None = None
    ) -> OperationResult:
        """Add symbol to the owner's watchlist; a duplicate add is a silent no-op."""
        try:
            owner = require_owner(owner_id)
            clean_symbol = normalize_symbol(symbol)
            if not clean_symbol:
                raise InvalidInput("Missing symbol")
            stmt = self._insert_if_absent(
                {
                    "user_id": owner,
                    "symbol": clean_symbol,
                    "company": normalize_company(company, clean_symbol),
                    "added_at": self._clock(),
                }
            )
            try:
                async with self._db.session() as session:
                    await session.execute(stmt)
            except IntegrityError:
                # Lost an insert race on a backend without ON CONFLICT; the row exists.
                logger.debug("Watchlist entry %s already present for %s", clean_symbol, owner)
            return OperationResult.ok()
        except Exception as e:  # pylint: disable=broad-except
            return self._errors.to_result("addToWatchlist", e, "Failed to add to watchlist")

    async def remove(self, owner_id: str | None, symbol: str) -> OperationResult:
        """Remove symbol from the owner's watchlist; removing a missing entry succeeds."""
        try:
            owner = require_owner(owner_id)
            clean_symbol = normalize_symbol(symbol)
            async with self._db.session() as session:
                await session.execute(
                    delete(WatchlistItem).where(
                        col(WatchlistItem.user_id) == owner,
                        col(WatchlistItem.symbol) == clean_symbol,
                    )
                )
            return OperationResult.ok()
        except Exception as e:  # pylint: disable=broad-except
            return self._errors.to_result(
                "removeFromWatchlist", e, "Failed to remove from watchlist"
            )

    async def is_member(self, owner_id: str | None, symbol: str) -> bool:
        """True if symbol is on the owner's watchlist; False on any failure."""
        try:
            owner = require_owner(owner_id)
            async with self._db.session() as session:
                result = await session.execute(
                    select(func.count())
                    .select_from(WatchlistItem)
                    .where(
                        col(WatchlistItem.user_id) == owner,
                        col(WatchlistItem.symbol) == normalize_symbol(symbol),
                    )
                )
                return result.scalar_one() > 0
        except Exception as e:  # pylint: disable=broad-except
            return self._errors.to_default("isInWatchlist", e, False)

    async def list_for_owner(self, owner_id: str | None) -> list[WatchlistEntry]:
        """All entries for the owner, most recently added first; [] on failure."""
        try:
            owner = require_owner(owner_id)
            async with self._db.session() as session:
                result = await session.execute(
                    select(WatchlistItem)
                    .where(col(WatchlistItem.user_id) == owner)
                    .order_by(col(WatchlistItem.added_at).desc())
                )
                rows = result.scalars().all()
        except Exception as e:  # pylint: disable=broad-except
            return self._errors.to_default("getWatchlistItemsForUser", e, [])
        entries: list[WatchlistEntry] = []
        for row in rows:
            try:
                entries.append(entry_from_row(row))
            except RecordMappingError as e:
                logger.warning("Skipping watchlist row %s: %s", row.id, e)
        return entries

    async def symbols_for_email(self, email: str) -> list[str]:
        """Symbols watched by the user with this email; [] if unknown or on failure.

        Not session gated: used by background jobs (e.g. daily digests) that
        only know the recipient's address.
        """
        if not email:
            return []
        try:
            async with self._db.session() as session:
                result = await session.execute(
                    select(WatchlistItem.symbol)
                    .join(User, col(User.id) == col(WatchlistItem.user_id))
                    .where(col(User.email) == email)
                    .order_by(col(WatchlistItem.added_at).desc())
                )
                return [str(s) for s in result.scalars().all()]
        except Exception as e:  # pylint: disable=broad-except
            return self._errors.to_default("getWatchlistSymbolsByEmail", e, [])
