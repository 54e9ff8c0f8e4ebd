"""Session coordinator: cache-aside over the durable store.

Create:
1. Validate owner (and origin when sessions are scoped by origin)
2. Generate a token and insert a new record (never an upsert)
3. Regenerate and retry when the token collides with an existing one
4. Populate the cache only after the insert succeeded
5. Return the token

Lookup:
1. Probe the cache; a hit returns immediately
2. On a miss, read the newest active record from the durable store
3. Refill the cache on a store hit
4. Return the token, NotFound, or StoreReadError (never NotFound on failure)

Revoke:
1. Delete the cache entry (failure is logged, not fatal)
2. Deactivate every matching active record in the durable store
3. Return the number of rows deactivated (0 is success)

Consistency:
- The durable store is authoritative. The cache only ever holds the payload
  of an active record, or nothing.
- Cache failures and timeouts are logged and bypassed.
- Store failures and timeouts abort the operation.
- A lookup racing a revoke may return the revoked token until the next
  cache miss. Concurrent creates for one identity may both succeed.

Architecture:
- Application layer ONLY imports from domain/core (protocols, errors)
- Collaborators are injected; every call to them is bounded by a timeout
"""

import asyncio
from datetime import UTC, datetime
from typing import Any

from uuid_extensions import uuid7

from session_gateway.application.commands import CreateSession, RevokeSession
from session_gateway.application.queries import LookupSession
from session_gateway.application.services.coordinator_config import CoordinatorConfig
from session_gateway.application.services.session_keys import (
    SessionKeyStrategy,
    SessionTarget,
    bad_request,
    clean,
    key_strategy_for,
)
from session_gateway.core.enums import ErrorCode
from session_gateway.core.errors import DomainError
from session_gateway.core.result import Failure, Result, Success
from session_gateway.domain.errors import (
    CacheUnavailableError,
    SessionError,
    SessionNotFoundError,
    StoreReadError,
    StoreWriteError,
)
from session_gateway.domain.protocols import (
    CacheProtocol,
    LoggerProtocol,
    SessionRecord,
    SessionRepository,
    TokenGenerationProtocol,
)


def token_prefix(token: str) -> str:
    """First characters of a token, safe to log."""
    return token[:4]


class SessionCoordinator:
    """Issues, resolves and revokes session tokens.

    Holds no mutable state; one instance may serve concurrent requests as
    long as its repository is safe for the request that owns it.
    """

    def __init__(
        self,
        *,
        repository: SessionRepository,
        cache: CacheProtocol,
        token_generator: TokenGenerationProtocol,
        logger: LoggerProtocol,
        config: CoordinatorConfig,
    ) -> None:
        """Initialize coordinator with dependencies.

        Args:
            repository: Durable store (system of record).
            cache: Volatile cache (best effort).
            token_generator: Random token source.
            logger: Structured logger.
            config: Keying mode, scoping, timeouts and retry policy.
        """
        self._repository = repository
        self._cache = cache
        self._token_generator = token_generator
        self._logger = logger
        self._config = config
        self._keys: SessionKeyStrategy = key_strategy_for(
            config.keying_mode, scope_by_origin=config.scope_by_origin
        )

    @property
    def config(self) -> CoordinatorConfig:
        return self._config

    async def create(self, cmd: CreateSession) -> Result[str, SessionError]:
        """Issue a new session token.

        Args:
            cmd: CreateSession command.

        Returns:
            Success(token), Failure(SessionBadRequestError) for missing
            identity fields, or Failure(StoreWriteError) when the insert
            failed. No cache entry is written unless the insert succeeded.
        """
        owner = clean(cmd.owner)
        origin = clean(cmd.origin)
        if owner is None:
            return bad_request("uuid", ErrorCode.SESSION_OWNER_REQUIRED)
        if self._config.scope_by_origin and origin is None:
            return bad_request("origin", ErrorCode.SESSION_ORIGIN_REQUIRED)

        insert_result = await self._insert_with_fresh_token(owner, origin)
        match insert_result:
            case Failure(error=err):
                return Failure(error=err)
            case Success(value=record):
                pass

        await self._cache_set(self._keys.record_key(record), record.to_payload())

        self._logger.info(
            "Session created",
            owner=owner,
            origin=origin,
            token_prefix=token_prefix(record.token),
            keying_mode=self._config.keying_mode.value,
        )
        return Success(value=record.token)

    async def lookup(self, query: LookupSession) -> Result[str, SessionError]:
        """Resolve the current token for an identity.

        Args:
            query: LookupSession query.

        Returns:
            Success(token), Failure(SessionNotFoundError) when no active
            session exists, Failure(SessionBadRequestError), or
            Failure(StoreReadError) when the store could not be read.
        """
        identify_result = self._keys.identify(
            owner=query.owner, origin=query.origin, token=query.token
        )
        match identify_result:
            case Failure(error=err):
                return Failure(error=err)
            case Success(value=target):
                pass

        cached_token = self._cached_token(
            target, await self._cache_get(target.cache_key)
        )
        if cached_token is not None:
            self._logger.debug(
                "Session cache hit",
                cache_key=target.cache_key,
                token_prefix=token_prefix(cached_token),
            )
            return Success(value=cached_token)

        self._logger.debug("Session cache miss", cache_key=target.cache_key)

        try:
            async with asyncio.timeout(self._config.store_timeout_seconds):
                find_result = await self._keys.find_active(self._repository, target)
        except TimeoutError:
            return self._store_read_failure(target, "Session store read timed out")

        match find_result:
            case Failure(error=err):
                return self._store_read_failure(target, err.message, cause=err)
            case Success(value=None):
                return self._not_found(target)
            case Success(value=record):
                pass

        if not self._belongs_to(target, record.owner):
            return self._not_found(target)

        await self._cache_set(target.cache_key, record.to_payload())
        self._logger.debug(
            "Session cache refilled",
            cache_key=target.cache_key,
            token_prefix=token_prefix(record.token),
        )
        return Success(value=record.token)

    async def revoke(self, cmd: RevokeSession) -> Result[int, SessionError]:
        """Deactivate the session(s) matching an identity.

        Args:
            cmd: RevokeSession command.

        Returns:
            Success(count) with the number of rows deactivated (revoking an
            inactive or unknown session yields 0, not an error),
            Failure(SessionBadRequestError), or Failure(StoreWriteError).
            The cache entry may already be gone when the store write fails.
        """
        identify_result = self._keys.identify(
            owner=cmd.owner, origin=cmd.origin, token=cmd.token
        )
        match identify_result:
            case Failure(error=err):
                return Failure(error=err)
            case Success(value=target):
                pass

        await self._cache_delete(target.cache_key)

        try:
            async with asyncio.timeout(self._config.store_timeout_seconds):
                mark_result = await self._keys.mark_inactive(self._repository, target)
        except TimeoutError:
            return self._store_write_failure(
                "Session store write timed out", context=self._target_context(target)
            )

        match mark_result:
            case Failure(error=err):
                return self._store_write_failure(
                    err.message, context=self._target_context(target), cause=err
                )
            case Success(value=count):
                self._logger.info(
                    "Session revoked",
                    deactivated=count,
                    **self._target_context(target),
                )
                return Success(value=count)

    async def _insert_with_fresh_token(
        self,
        owner: str,
        origin: str | None,
    ) -> Result[SessionRecord, StoreWriteError]:
        """Insert a new record, regenerating the token on collisions."""
        context: dict[str, Any] = {"owner": owner, "origin": origin}
        for attempt in range(1, self._config.token_max_attempts + 1):
            record = SessionRecord(
                id=uuid7(),
                token=self._token_generator.generate(),
                owner=owner,
                origin=origin,
                active=True,
                created_at=datetime.now(UTC),
            )
            try:
                async with asyncio.timeout(self._config.store_timeout_seconds):
                    put_result = await self._repository.put(record)
            except TimeoutError:
                return self._store_write_failure(
                    "Session store write timed out", context=context
                )

            match put_result:
                case Success():
                    return Success(value=record)
                case Failure(error=err) if err.code is ErrorCode.SESSION_TOKEN_CONFLICT:
                    self._logger.warning(
                        "Session token collision, regenerating",
                        attempt=attempt,
                        max_attempts=self._config.token_max_attempts,
                        **context,
                    )
                case Failure(error=err):
                    return self._store_write_failure(
                        err.message, context=context, cause=err
                    )

        return self._store_write_failure(
            "Could not generate a unique session token",
            context={**context, "attempts": self._config.token_max_attempts},
            retryable=True,
        )

    def _belongs_to(self, target: SessionTarget, owner: Any) -> bool:
        return target.owner is None or owner == target.owner

    def _cached_token(
        self,
        target: SessionTarget,
        payload: dict[str, Any] | None,
    ) -> str | None:
        """Token from a cache entry, or None when the entry cannot answer.

        An entry for another owner is not trusted either way; the store
        decides.
        """
        if payload is None:
            return None
        cached_token = payload.get("session")
        if not isinstance(cached_token, str) or not cached_token:
            self._logger.warning(
                "Ignoring malformed cache entry", cache_key=target.cache_key
            )
            return None
        if not self._belongs_to(target, payload.get("uuid")):
            return None
        return cached_token

    def _not_found(self, target: SessionTarget) -> Failure[SessionNotFoundError]:
        self._logger.info("Session not found", **self._target_context(target))
        return Failure(
            error=SessionNotFoundError(
                code=ErrorCode.SESSION_NOT_FOUND,
                message="No active session for this identity",
                resource_id=target.cache_key,
            )
        )

    def _store_read_failure(
        self,
        target: SessionTarget,
        message: str,
        *,
        cause: DomainError | None = None,
    ) -> Failure[StoreReadError]:
        context = self._target_context(target)
        self._logger.error(
            "Session store read failed",
            reason=message,
            cause=str(cause) if cause else None,
            **context,
        )
        return Failure(
            error=StoreReadError(
                code=ErrorCode.SESSION_STORE_READ_FAILED,
                message=message,
                details=context,
            )
        )

    def _store_write_failure(
        self,
        message: str,
        *,
        context: dict[str, Any],
        cause: DomainError | None = None,
        retryable: bool = False,
    ) -> Failure[StoreWriteError]:
        self._logger.error(
            "Session store write failed",
            reason=message,
            cause=str(cause) if cause else None,
            **context,
        )
        return Failure(
            error=StoreWriteError(
                code=ErrorCode.SESSION_STORE_WRITE_FAILED,
                message=message,
                details=context,
                retryable=retryable,
            )
        )

    def _target_context(self, target: SessionTarget) -> dict[str, Any]:
        context: dict[str, Any] = {"cache_key": target.cache_key}
        if target.owner is not None:
            context["owner"] = target.owner
        if target.origin is not None:
            context["origin"] = target.origin
        if target.token is not None:
            context["token_prefix"] = token_prefix(target.token)
        return context

    async def _cache_get(self, key: str) -> dict[str, Any] | None:
        """Cache read; any failure counts as a miss."""
        try:
            async with asyncio.timeout(self._config.cache_timeout_seconds):
                result = await self._cache.get_json(key)
        except TimeoutError:
            self._log_cache_failure("get", key, self._cache_timeout("get"))
            return None

        match result:
            case Success(value=payload):
                return payload
            case Failure(error=err):
                self._log_cache_failure("get", key, err)
                return None

    async def _cache_set(self, key: str, payload: dict[str, Any]) -> None:
        try:
            async with asyncio.timeout(self._config.cache_timeout_seconds):
                result = await self._cache.set_json(
                    key, payload, ttl=self._config.cache_ttl_seconds
                )
        except TimeoutError:
            self._log_cache_failure("set", key, self._cache_timeout("set"))
            return

        if isinstance(result, Failure):
            self._log_cache_failure("set", key, result.error)

    async def _cache_delete(self, key: str) -> None:
        try:
            async with asyncio.timeout(self._config.cache_timeout_seconds):
                result = await self._cache.delete(key)
        except TimeoutError:
            self._log_cache_failure("delete", key, self._cache_timeout("delete"))
            return

        if isinstance(result, Failure):
            self._log_cache_failure("delete", key, result.error)

    def _cache_timeout(self, operation: str) -> CacheUnavailableError:
        return CacheUnavailableError(
            code=ErrorCode.SESSION_CACHE_UNAVAILABLE,
            message=f"Cache {operation} timed out",
            details={"timeout_seconds": self._config.cache_timeout_seconds},
        )

    def _log_cache_failure(self, operation: str, key: str, error: DomainError) -> None:
        self._logger.warning(
            "Session cache unavailable, bypassing",
            operation=operation,
            cache_key=key,
            error_code=error.code.value,
            reason=error.message,
        )
