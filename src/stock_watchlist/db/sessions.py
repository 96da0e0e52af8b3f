"""Database engine and session management.

A single Database object owns the async engine and its connection pool. The
engine is created lazily on first use, cached for the lifetime of the process
and shared by every store; concurrent first callers wait on one lock so only
one engine is ever built.
"""
import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (AsyncEngine, AsyncSession,
                                    async_sessionmaker, create_async_engine)
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from stock_watchlist.config import Settings
from stock_watchlist.db import models  # noqa: F401  # pylint: disable=unused-import

logger = logging.getLogger(__name__)


class Database:
    """Lazily-initialized async engine + session factory, safe for concurrent use."""

    def __init__(
        self,
        url: str,
        *,
        echo: bool = False,
        pool_size: int = 5,
        max_overflow: int = 10,
        create_tables: bool = False,
    ) -> None:
        """Configure the database without connecting.

        Args:
            url: SQLAlchemy async URL (e.g. postgresql+asyncpg://..., sqlite+aiosqlite://).
            echo: Log every SQL statement.
            pool_size: Base pool size (ignored for SQLite).
            max_overflow: Extra connections allowed over pool_size (ignored for SQLite).
            create_tables: Create missing tables during initialization.
        """
        self._url = url
        self._echo = echo
        self._pool_size = pool_size
        self._max_overflow = max_overflow
        self._create_tables = create_tables
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None
        self._init_lock = asyncio.Lock()

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        """Build a Database from application settings."""
        return cls(
            settings.database_url,
            echo=settings.sql_echo,
            pool_size=settings.pool_size,
            max_overflow=settings.max_overflow,
            create_tables=settings.create_tables,
        )

    @property
    def initialized(self) -> bool:
        """True once the engine has been created."""
        return self._engine is not None

    @property
    def dialect_name(self) -> str:
        """Backend name from the URL (e.g. "postgresql", "sqlite")."""
        return make_url(self._url).get_backend_name()

    def _engine_kwargs(self) -> dict[str, Any]:
        url = make_url(self._url)
        if url.get_backend_name() == "sqlite":
            kwargs: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
            if url.database in (None, "", ":memory:"):
                # One shared connection, otherwise every checkout sees an empty database.
                kwargs["poolclass"] = StaticPool
            return kwargs
        return {
            "pool_pre_ping": True,
            "pool_size": self._pool_size,
            "max_overflow": self._max_overflow,
        }

    async def engine(self) -> AsyncEngine:
        """Return the shared engine, creating it on first call."""
        if self._engine is not None:
            return self._engine
        async with self._init_lock:
            if self._engine is None:
                engine = create_async_engine(
                    self._url, echo=self._echo, **self._engine_kwargs()
                )
                if self._create_tables:
                    try:
                        async with engine.begin() as conn:
                            await conn.run_sync(SQLModel.metadata.create_all)
                    except Exception:
                        await engine.dispose()
                        raise
                self._session_factory = async_sessionmaker(
                    engine, class_=AsyncSession, expire_on_commit=False
                )
                self._engine = engine
                logger.info("Database engine initialized (%s)", self.dialect_name)
        return self._engine

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Yield a session; commits on success, rolls back and re-raises on error."""
        await self.engine()
        assert self._session_factory is not None
        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def init_db(self) -> None:
        """Create all tables. Safe to call repeatedly (existing tables are kept)."""
        engine = await self.engine()
        async with engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)

    async def ping(self) -> None:
        """Round-trip a trivial query. Raises if the database is unreachable."""
        engine = await self.engine()
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def dispose(self) -> None:
        """Close pooled connections. The next call re-initializes the engine."""
        async with self._init_lock:
            if self._engine is not None:
                await self._engine.dispose()
                self._engine = None
                self._session_factory = None
