"""Key strategies for the two keying modes.

A deployment runs exactly one strategy. The strategy decides which fields
identify a session, which cache key holds it, and which repository call
reads or deactivates it. Everything else (timeouts, cache fail-open,
logging) lives in the coordinator and is identical for both modes.

    | Mode  | Cache key                                 | Store lookup               | Revoke by        |
    |-------|-------------------------------------------|----------------------------|------------------|
    | owner | session:owner:{owner}[:{origin}]          | (owner[, origin], active)  | (owner[, origin])|
    | token | session:token:{token}                     | token, active              | token[, owner]   |
"""

from dataclasses import dataclass
from typing import Protocol

from session_gateway.core.enums import ErrorCode
from session_gateway.core.errors import DomainError
from session_gateway.core.result import Failure, Result, Success
from session_gateway.domain.enums import KeyingMode
from session_gateway.domain.errors import SessionBadRequestError
from session_gateway.domain.protocols import SessionRecord, SessionRepository

CACHE_KEY_PREFIX = "session"


def clean(value: str | None) -> str | None:
    """Strip surrounding whitespace; blank values become None."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def bad_request(field: str, code: ErrorCode) -> Failure[SessionBadRequestError]:
    """Failure for a missing identity field."""
    return Failure(
        error=SessionBadRequestError(
            code=code,
            message=f"'{field}' is required",
            field=field,
        )
    )


@dataclass(frozen=True, slots=True, kw_only=True)
class SessionTarget:
    """Validated identity of the session an operation acts on.

    Attributes:
        cache_key: Cache slot for this identity.
        owner: Owner, when known. In token mode this is the caller's claim
            and the resolved record must match it.
        origin: Origin used to filter store queries (None = any origin).
        token: Token (token mode only).
    """

    cache_key: str
    owner: str | None = None
    origin: str | None = None
    token: str | None = None


class SessionKeyStrategy(Protocol):
    """Mode-specific part of the coordinator."""

    mode: KeyingMode

    def record_key(self, record: SessionRecord) -> str:
        """Cache key under which a freshly created record is stored."""
        ...

    def identify(
        self,
        *,
        owner: str | None,
        origin: str | None,
        token: str | None,
    ) -> Result[SessionTarget, SessionBadRequestError]:
        """Validate caller-supplied fields and derive the target."""
        ...

    async def find_active(
        self,
        repository: SessionRepository,
        target: SessionTarget,
    ) -> Result[SessionRecord | None, DomainError]:
        """Read the active record for a target from the durable store."""
        ...

    async def mark_inactive(
        self,
        repository: SessionRepository,
        target: SessionTarget,
    ) -> Result[int, DomainError]:
        """Deactivate every active record matching a target."""
        ...


class OwnerKeyStrategy:
    """Owner-keyed sessions: the cache holds one slot per (owner[, origin]).

    With origin scoping on, origin is part of both the cache key and the
    store filter, so two origins of one owner never see each other's session.
    """

    mode = KeyingMode.OWNER

    def __init__(self, *, scope_by_origin: bool) -> None:
        self._scope_by_origin = scope_by_origin

    def cache_key(self, owner: str, origin: str | None) -> str:
        if self._scope_by_origin:
            return f"{CACHE_KEY_PREFIX}:owner:{owner}:{origin or ''}"
        return f"{CACHE_KEY_PREFIX}:owner:{owner}"

    def record_key(self, record: SessionRecord) -> str:
        return self.cache_key(record.owner, record.origin)

    def identify(
        self,
        *,
        owner: str | None,
        origin: str | None,
        token: str | None = None,
    ) -> Result[SessionTarget, SessionBadRequestError]:
        owner = clean(owner)
        origin = clean(origin)
        if owner is None:
            return bad_request("uuid", ErrorCode.SESSION_OWNER_REQUIRED)
        if self._scope_by_origin and origin is None:
            return bad_request("origin", ErrorCode.SESSION_ORIGIN_REQUIRED)

        scoped_origin = origin if self._scope_by_origin else None
        return Success(
            value=SessionTarget(
                cache_key=self.cache_key(owner, scoped_origin),
                owner=owner,
                origin=scoped_origin,
            )
        )

    async def find_active(
        self,
        repository: SessionRepository,
        target: SessionTarget,
    ) -> Result[SessionRecord | None, DomainError]:
        assert target.owner is not None
        return await repository.find_active_by_owner(target.owner, target.origin)

    async def mark_inactive(
        self,
        repository: SessionRepository,
        target: SessionTarget,
    ) -> Result[int, DomainError]:
        assert target.owner is not None
        return await repository.mark_inactive_by_owner(target.owner, target.origin)


class TokenKeyStrategy:
    """Token-keyed sessions: every token has its own cache slot.

    Several active sessions of one owner are independently resolvable, each
    through its own token. A caller-supplied owner must match the record on
    both lookup and revoke; a mismatch reads as NotFound and revokes nothing.
    """

    mode = KeyingMode.TOKEN

    def cache_key(self, token: str) -> str:
        return f"{CACHE_KEY_PREFIX}:token:{token}"

    def record_key(self, record: SessionRecord) -> str:
        return self.cache_key(record.token)

    def identify(
        self,
        *,
        owner: str | None,
        origin: str | None = None,
        token: str | None,
    ) -> Result[SessionTarget, SessionBadRequestError]:
        token = clean(token)
        if token is None:
            return bad_request("session", ErrorCode.SESSION_TOKEN_REQUIRED)
        return Success(
            value=SessionTarget(
                cache_key=self.cache_key(token),
                owner=clean(owner),
                token=token,
            )
        )

    async def find_active(
        self,
        repository: SessionRepository,
        target: SessionTarget,
    ) -> Result[SessionRecord | None, DomainError]:
        assert target.token is not None
        return await repository.find_active_by_token(target.token)

    async def mark_inactive(
        self,
        repository: SessionRepository,
        target: SessionTarget,
    ) -> Result[int, DomainError]:
        assert target.token is not None
        return await repository.mark_inactive_by_token(target.token, owner=target.owner)


def key_strategy_for(mode: KeyingMode, *, scope_by_origin: bool) -> SessionKeyStrategy:
    """Build the strategy for a deployment's keying mode."""
    match mode:
        case KeyingMode.OWNER:
            return OwnerKeyStrategy(scope_by_origin=scope_by_origin)
        case KeyingMode.TOKEN:
            return TokenKeyStrategy()
    raise ValueError(f"Unsupported keying mode: {mode!r}")
