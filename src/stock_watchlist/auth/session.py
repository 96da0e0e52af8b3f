"""Session identity for inbound requests.

resolve() returns the signed-in SessionUser or None. An anonymous caller is an
ordinary outcome, never an exception; stores turn None into NotAuthenticated.
"""
import logging
from abc import ABC, abstractmethod

from pydantic import BaseModel
from sqlalchemy import select
from sqlmodel import col
from starlette.requests import HTTPConnection

from stock_watchlist.db import AuthSession, Database, User, utcnow

logger = logging.getLogger(__name__)


class SessionUser(BaseModel):
    """Authenticated caller."""

    id: str
    email: str = ""
    name: str = ""


class SessionResolver(ABC):
    """Base interface for resolving the caller's identity."""

    @abstractmethod
    async def resolve(self, connection: HTTPConnection) -> SessionUser | None:
        """Return the session user, or None for an anonymous caller."""


def session_token(connection: HTTPConnection, cookie_name: str) -> str | None:
    """Token from the session cookie, else from an `Authorization: Bearer` header."""
    token = connection.cookies.get(cookie_name)
    if token:
        return token
    scheme, _, credentials = connection.headers.get("authorization", "").partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    return None


class DatabaseSessionResolver(SessionResolver):
    """Looks up unexpired sessions issued by the auth provider in the shared database."""

    def __init__(self, database: Database, cookie_name: str = "session_token") -> None:
        self._db = database
        self._cookie_name = cookie_name

    async def resolve(self, connection: HTTPConnection) -> SessionUser | None:
        token = session_token(connection, self._cookie_name)
        if not token:
            return None
        try:
            async with self._db.session() as session:
                result = await session.execute(
                    select(User)
                    .join(AuthSession, col(AuthSession.user_id) == col(User.id))
                    .where(
                        col(AuthSession.token) == token,
                        col(AuthSession.expires_at) > utcnow(),
                    )
                )
                user = result.scalars().first()
        except Exception as exc:  # pylint: disable=broad-except
            logger.warning("Session lookup failed; treating caller as anonymous: %s", exc)
            return None
        if user is None or not user.id:
            return None
        return SessionUser(id=user.id, email=user.email or "", name=user.name or "")
