"""Session error taxonomy.

Propagation policy:
    - SessionBadRequestError: caller supplied too little identity to act on.
    - SessionNotFoundError: legitimate outcome of a lookup, not a failure of
      the service. Reported with its own result code.
    - StoreReadError / StoreWriteError: durable store failed or timed out.
      Always aborts the operation.
    - CacheUnavailableError: cache failed or timed out. Logged and bypassed,
      never returned to callers of the coordinator.
"""

from dataclasses import dataclass
from typing import TypeAlias

from session_gateway.core.errors import DomainError, NotFoundError, ValidationError


@dataclass(frozen=True, slots=True, kw_only=True)
class SessionBadRequestError(ValidationError):
    """Missing or malformed identity fields."""


@dataclass(frozen=True, slots=True, kw_only=True)
class SessionNotFoundError(NotFoundError):
    """No active session matches the identity."""

    resource_type: str = "Session"


@dataclass(frozen=True, slots=True, kw_only=True)
class StoreReadError(DomainError):
    """Durable store query failed (connectivity, timeout, query error)."""


@dataclass(frozen=True, slots=True, kw_only=True)
class StoreWriteError(DomainError):
    """Durable store write failed.

    Attributes:
        retryable: True when the write was rejected by the token uniqueness
            constraint and can be retried with a freshly generated token.
    """

    retryable: bool = False


@dataclass(frozen=True, slots=True, kw_only=True)
class CacheUnavailableError(DomainError):
    """Cache call failed or timed out."""


SessionError: TypeAlias = (
    SessionBadRequestError | SessionNotFoundError | StoreReadError | StoreWriteError
)
