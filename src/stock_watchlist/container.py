"""DI container. create_app() attaches one to app.state; deps.py resolves from it."""
from dependency_injector import containers, providers

from stock_watchlist.auth import DatabaseSessionResolver
from stock_watchlist.config import Settings
from stock_watchlist.db import Database
from stock_watchlist.providers import YFinanceProvider
from stock_watchlist.services import PresentationAssembler
from stock_watchlist.stores import AlertStore, WatchlistStore


class Container(containers.DeclarativeContainer):
    settings = providers.Singleton(Settings.from_env)

    # One lazily-connected database (engine + pool) shared by everything below.
    database = providers.Singleton(Database.from_settings, settings)

    session_resolver = providers.Singleton(
        DatabaseSessionResolver,
        database,
        cookie_name=settings.provided.session_cookie_name,
    )

    watchlist_store = providers.Singleton(WatchlistStore, database)
    alert_store = providers.Singleton(AlertStore, database)

    quote_provider = providers.Singleton(
        YFinanceProvider, poll_interval=settings.provided.quote_poll_interval
    )
    presenter = providers.Singleton(PresentationAssembler, quote_provider)
