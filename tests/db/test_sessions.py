"""Tests for the lazily-initialized shared Database."""
import asyncio

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine

from stock_watchlist.config import Settings
from stock_watchlist.db import Database, User, sessions


async def test_engine_is_created_once_under_concurrent_first_use(monkeypatch):
    created = []
    real_create = sessions.create_async_engine

    def counting_create(*args, **kwargs):
        engine = real_create(*args, **kwargs)
        created.append(engine)
        return engine

    monkeypatch.setattr(sessions, "create_async_engine", counting_create)
    database = Database("sqlite+aiosqlite:///:memory:", create_tables=True)
    try:
        engines = await asyncio.gather(*(database.engine() for _ in range(10)))

        assert len(created) == 1
        assert all(e is created[0] for e in engines)
        assert database.initialized is True
    finally:
        await database.dispose()


async def test_nothing_connects_until_first_use():
    database = Database("sqlite+aiosqlite:///:memory:")

    assert database.initialized is False
    assert database.dialect_name == "sqlite"


async def test_ping_and_dispose(database: Database):
    await database.ping()
    await database.dispose()

    assert database.initialized is False
    await database.ping()
    assert database.initialized is True


async def test_ping_fails_for_unreachable_database(broken_database: Database):
    with pytest.raises(Exception):
        await broken_database.ping()


async def test_session_rolls_back_on_error(database: Database):
    with pytest.raises(RuntimeError):
        async with database.session() as session:
            session.add(User(id="u1", email="ada@example.com"))
            await session.flush()
            raise RuntimeError("boom")

    async with database.session() as session:
        assert await session.get(User, "u1") is None


def test_from_settings():
    settings = Settings(
        database_url="postgresql+asyncpg://u:p@db:5432/watchlist", pool_size=3
    )

    database = Database.from_settings(settings)

    assert database.dialect_name == "postgresql"
    assert database.initialized is False


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///./local.db")
    monkeypatch.setenv("SQL_ECHO", "true")
    monkeypatch.setenv("DB_CREATE_TABLES", "1")
    monkeypatch.setenv("SESSION_COOKIE_NAME", "sid")
    monkeypatch.setenv("QUOTE_POLL_INTERVAL", "2.5")

    settings = Settings.from_env()

    assert settings.database_url == "sqlite+aiosqlite:///./local.db"
    assert settings.sql_echo is True
    assert settings.create_tables is True
    assert settings.session_cookie_name == "sid"
    assert settings.quote_poll_interval == 2.5
    assert settings.pool_size == 5


async def test_failed_table_creation_disposes_the_new_engine(monkeypatch, tmp_path):
    created = []
    disposed = []
    real_create = sessions.create_async_engine
    real_dispose = AsyncEngine.dispose

    def counting_create(*args, **kwargs):
        engine = real_create(*args, **kwargs)
        created.append(engine)
        return engine

    async def counting_dispose(self, *args, **kwargs):
        disposed.append(self)
        await real_dispose(self, *args, **kwargs)

    monkeypatch.setattr(sessions, "create_async_engine", counting_create)
    monkeypatch.setattr(AsyncEngine, "dispose", counting_dispose)
    database = Database(
        f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'watchlist.db'}", create_tables=True
    )

    for _ in range(2):
        with pytest.raises(Exception):
            await database.engine()

    assert database.initialized is False
    assert len(created) == 2
    assert disposed == created
