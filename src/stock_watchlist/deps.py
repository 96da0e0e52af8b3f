"""FastAPI dependency injection: app.state.container holds singletons; Depends() resolves them."""
from typing import Annotated

from fastapi import Depends
from starlette.requests import HTTPConnection

from stock_watchlist.auth import SessionResolver, SessionUser
from stock_watchlist.container import Container
from stock_watchlist.db import Database
from stock_watchlist.providers import MarketProviderABC
from stock_watchlist.services import PresentationAssembler
from stock_watchlist.stores import AlertStore, WatchlistStore


def get_container(connection: HTTPConnection) -> Container:
    """Container attached by create_app (works for HTTP and WebSocket)."""
    return connection.app.state.container


def get_database(container: Annotated[Container, Depends(get_container)]) -> Database:
    return container.database()


def get_session_resolver(
    container: Annotated[Container, Depends(get_container)],
) -> SessionResolver:
    return container.session_resolver()


async def get_session_user(
    connection: HTTPConnection,
    resolver: Annotated[SessionResolver, Depends(get_session_resolver)],
) -> SessionUser | None:
    """Resolve the caller; None when anonymous."""
    return await resolver.resolve(connection)


def get_watchlist_store(
    container: Annotated[Container, Depends(get_container)],
) -> WatchlistStore:
    return container.watchlist_store()


def get_alert_store(container: Annotated[Container, Depends(get_container)]) -> AlertStore:
    return container.alert_store()


def get_presenter(
    container: Annotated[Container, Depends(get_container)],
) -> PresentationAssembler:
    return container.presenter()


def get_quote_provider(
    container: Annotated[Container, Depends(get_container)],
) -> MarketProviderABC:
    return container.quote_provider()


def owner_id(user: SessionUser | None) -> str | None:
    """Owner id passed to stores; None keeps the store's session gate closed."""
    return user.id if user is not None else None


# Type aliases for route injection
DatabaseDep = Annotated[Database, Depends(get_database)]
CurrentUser = Annotated[SessionUser | None, Depends(get_session_user)]
WatchlistStoreDep = Annotated[WatchlistStore, Depends(get_watchlist_store)]
AlertStoreDep = Annotated[AlertStore, Depends(get_alert_store)]
PresenterDep = Annotated[PresentationAssembler, Depends(get_presenter)]
QuoteProviderDep = Annotated[MarketProviderABC, Depends(get_quote_provider)]
