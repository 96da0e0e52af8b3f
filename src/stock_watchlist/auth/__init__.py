"""Session identity resolution."""
from stock_watchlist.auth.session import (DatabaseSessionResolver,
                                          SessionResolver, SessionUser,
                                          session_token)

__all__ = ["DatabaseSessionResolver", "SessionResolver", "SessionUser", "session_token"]
