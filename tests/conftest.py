"""Shared fixtures: in-memory database, deterministic clock, fake quotes, API client."""
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from dependency_injector import providers
from httpx import ASGITransport, AsyncClient

from stock_watchlist.container import Container
from stock_watchlist.db import Database
from stock_watchlist.main import create_app
from stock_watchlist.stores import AlertStore, WatchlistStore
from tests.support.fakes import FakeClock, FakeQuoteProvider, ListenerSpy

MEMORY_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def database() -> AsyncGenerator[Database, None]:
    db = Database(MEMORY_URL, create_tables=True)
    yield db
    await db.dispose()


@pytest.fixture
def broken_database(tmp_path) -> Database:
    """Database whose file cannot be opened: every statement fails."""
    return Database(f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'watchlist.db'}")


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def listener() -> ListenerSpy:
    return ListenerSpy()


@pytest.fixture
def watchlist_store(
    database: Database, clock: FakeClock, listener: ListenerSpy
) -> WatchlistStore:
    return WatchlistStore(database, clock=clock, error_listener=listener)


@pytest.fixture
def alert_store(database: Database, clock: FakeClock, listener: ListenerSpy) -> AlertStore:
    return AlertStore(database, clock=clock, error_listener=listener)


@pytest.fixture
def quotes() -> FakeQuoteProvider:
    return FakeQuoteProvider(
        {"AAPL": 189.5, "TSLA": 251.0, "MSFT": 402.25}, changes={"AAPL": 0.8}
    )


@pytest.fixture
def container(database: Database, quotes: FakeQuoteProvider) -> Container:
    c = Container()
    c.database.override(providers.Object(database))
    c.quote_provider.override(providers.Object(quotes))
    return c


@pytest_asyncio.fixture
async def client(container: Container) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client over the app with the in-memory database and fake quotes."""
    app = create_app(container)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
