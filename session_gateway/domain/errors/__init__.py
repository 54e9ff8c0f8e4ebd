"""Domain errors package.

Usage:
    from session_gateway.domain.errors import StoreReadError, SessionError
"""

from session_gateway.domain.errors.session_error import (
    CacheUnavailableError,
    SessionBadRequestError,
    SessionError,
    SessionNotFoundError,
    StoreReadError,
    StoreWriteError,
)

__all__ = [
    "CacheUnavailableError",
    "SessionBadRequestError",
    "SessionError",
    "SessionNotFoundError",
    "StoreReadError",
    "StoreWriteError",
]
