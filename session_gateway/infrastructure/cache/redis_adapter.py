"""Redis adapter implementing CacheProtocol.

Wraps an async Redis client and maps every Redis exception to a CacheError
inside a Failure. Nothing here raises: the session cache is an optimization,
so its callers must always be able to carry on without it.

Architecture:
- Implements CacheProtocol without inheritance (structural typing)
- Maps Redis exceptions to CacheError with an InfrastructureErrorCode
- Returns Result types for all operations
"""

import json
from typing import Any

from redis.asyncio import Redis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError
from redis.exceptions import TimeoutError as RedisTimeoutError

from session_gateway.core.enums import ErrorCode
from session_gateway.core.result import Failure, Result, Success
from session_gateway.infrastructure.enums import InfrastructureErrorCode
from session_gateway.infrastructure.errors import CacheError


def _redis_failure(
    exc: Exception,
    *,
    operation_code: InfrastructureErrorCode,
    message: str,
    details: dict[str, Any],
) -> Failure[CacheError]:
    """Build a Failure for a Redis exception, keeping timeouts and connection loss apart."""
    if isinstance(exc, RedisTimeoutError):
        infrastructure_code = InfrastructureErrorCode.CACHE_TIMEOUT
    elif isinstance(exc, RedisConnectionError):
        infrastructure_code = InfrastructureErrorCode.CACHE_CONNECTION_ERROR
    else:
        infrastructure_code = operation_code
    return Failure(
        error=CacheError(
            code=ErrorCode.SESSION_CACHE_UNAVAILABLE,
            infrastructure_code=infrastructure_code,
            message=message,
            details={**details, "error": str(exc), "type": type(exc).__name__},
        )
    )


class RedisAdapter:
    """Redis implementation of CacheProtocol.

    Note: Does NOT inherit from CacheProtocol (uses structural typing).

    Attributes:
        _redis: Async Redis client instance.
    """

    def __init__(self, redis_client: Redis) -> None:
        """Initialize Redis adapter.

        Args:
            redis_client: Async Redis client instance (pooled).
        """
        self._redis = redis_client

    async def get(self, key: str) -> Result[str | None, CacheError]:
        """Get value from Redis.

        Args:
            key: Cache key.

        Returns:
            Result with value if found, None if not found, or CacheError.
        """
        try:
            value = await self._redis.get(key)
        except RedisError as e:
            return _redis_failure(
                e,
                operation_code=InfrastructureErrorCode.CACHE_GET_ERROR,
                message=f"Failed to get key '{key}' from cache",
                details={"key": key},
            )
        except Exception as e:
            return _redis_failure(
                e,
                operation_code=InfrastructureErrorCode.CACHE_GET_ERROR,
                message=f"Unexpected error getting key '{key}'",
                details={"key": key},
            )
        if value is None:
            return Success(value=None)
        decoded = value.decode("utf-8") if isinstance(value, bytes) else value
        return Success(value=decoded)

    async def get_json(self, key: str) -> Result[dict[str, Any] | None, CacheError]:
        """Get JSON object from Redis.

        A value that is not a JSON object is reported as a CacheError, so a
        corrupted entry behaves like an unavailable cache rather than a hit.

        Args:
            key: Cache key.

        Returns:
            Result with parsed dict if found, None if not found, or CacheError.
        """
        result = await self.get(key)

        match result:
            case Success(value=None):
                return Success(value=None)
            case Success(value=raw):
                try:
                    parsed = json.loads(raw)
                except json.JSONDecodeError as e:
                    return Failure(
                        error=CacheError(
                            code=ErrorCode.SESSION_CACHE_UNAVAILABLE,
                            infrastructure_code=InfrastructureErrorCode.CACHE_GET_ERROR,
                            message=f"Failed to parse JSON for key '{key}'",
                            details={"key": key, "error": str(e)},
                        )
                    )
                if not isinstance(parsed, dict):
                    return Failure(
                        error=CacheError(
                            code=ErrorCode.SESSION_CACHE_UNAVAILABLE,
                            infrastructure_code=InfrastructureErrorCode.CACHE_GET_ERROR,
                            message=f"Cached value for key '{key}' is not an object",
                            details={"key": key, "type": type(parsed).__name__},
                        )
                    )
                return Success(value=parsed)
            case Failure(error=err):
                return Failure(error=err)

    async def set(
        self,
        key: str,
        value: str,
        ttl: int | None = None,
    ) -> Result[None, CacheError]:
        """Set value in Redis.

        Args:
            key: Cache key.
            value: Value to cache.
            ttl: Time to live in seconds (None = no expiration).

        Returns:
            Result with None on success, or CacheError.
        """
        try:
            if ttl is not None:
                await self._redis.setex(key, ttl, value)
            else:
                await self._redis.set(key, value)
            return Success(value=None)
        except RedisError as e:
            return _redis_failure(
                e,
                operation_code=InfrastructureErrorCode.CACHE_SET_ERROR,
                message=f"Failed to set key '{key}' in cache",
                details={"key": key, "ttl": ttl},
            )
        except Exception as e:
            return _redis_failure(
                e,
                operation_code=InfrastructureErrorCode.CACHE_SET_ERROR,
                message=f"Unexpected error setting key '{key}'",
                details={"key": key, "ttl": ttl},
            )

    async def set_json(
        self,
        key: str,
        value: dict[str, Any],
        ttl: int | None = None,
    ) -> Result[None, CacheError]:
        """Set JSON value in Redis.

        Args:
            key: Cache key.
            value: Dict to cache (will be JSON serialized).
            ttl: Time to live in seconds (None = no expiration).

        Returns:
            Result with None on success, or CacheError.
        """
        try:
            serialized = json.dumps(value)
        except (TypeError, ValueError) as e:
            return Failure(
                error=CacheError(
                    code=ErrorCode.SESSION_CACHE_UNAVAILABLE,
                    infrastructure_code=InfrastructureErrorCode.CACHE_SET_ERROR,
                    message=f"Failed to serialize value for key '{key}'",
                    details={"key": key, "error": str(e)},
                )
            )
        return await self.set(key, serialized, ttl)

    async def delete(self, key: str) -> Result[bool, CacheError]:
        """Delete key from Redis.

        Args:
            key: Cache key to delete.

        Returns:
            Result with True if deleted, False if key didn't exist, or CacheError.
        """
        try:
            deleted_count = await self._redis.delete(key)
            return Success(value=deleted_count > 0)
        except RedisError as e:
            return _redis_failure(
                e,
                operation_code=InfrastructureErrorCode.CACHE_DELETE_ERROR,
                message=f"Failed to delete key '{key}' from cache",
                details={"key": key},
            )
        except Exception as e:
            return _redis_failure(
                e,
                operation_code=InfrastructureErrorCode.CACHE_DELETE_ERROR,
                message=f"Unexpected error deleting key '{key}'",
                details={"key": key},
            )

    async def ping(self) -> Result[bool, CacheError]:
        """Check Redis connectivity (health check).

        Returns:
            Result with True if Redis is reachable, or CacheError.
        """
        try:
            await self._redis.ping()  # type: ignore[misc]
            return Success(value=True)
        except RedisError as e:
            return _redis_failure(
                e,
                operation_code=InfrastructureErrorCode.CACHE_CONNECTION_ERROR,
                message="Redis health check failed",
                details={},
            )
        except Exception as e:
            return _redis_failure(
                e,
                operation_code=InfrastructureErrorCode.CACHE_CONNECTION_ERROR,
                message="Unexpected error during Redis health check",
                details={},
            )

    async def close(self) -> None:
        """Close the client and release its pooled connections."""
        await self._redis.aclose()
