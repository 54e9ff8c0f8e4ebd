# mypy: disable-error-code="arg-type"
"""Infrastructure dependency factories.

Application-scoped singletons for core infrastructure services:
- Cache (Redis)
- Database (PostgreSQL)
- Token generation (random alphanumeric)
- Logging (console)

Request-scoped:
- Database session (one per request, released on every exit path)
"""

from functools import lru_cache
from typing import TYPE_CHECKING, AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from session_gateway.core.config import settings
from session_gateway.infrastructure.persistence.database import Database

if TYPE_CHECKING:
    from session_gateway.application.services import CoordinatorConfig
    from session_gateway.domain.protocols import (
        LoggerProtocol,
        TokenGenerationProtocol,
    )
    from session_gateway.infrastructure.cache import RedisAdapter


# ============================================================================
# Application-Scoped Dependencies (Singletons)
# ============================================================================


@lru_cache()
def get_cache() -> "RedisAdapter":
    """Get cache client singleton (app-scoped).

    Returns RedisAdapter with connection pooling. The pool is shared across
    the entire application and closed by close_resources() on shutdown.

    Returns:
        Cache client implementing CacheProtocol.
    """
    from redis.asyncio import ConnectionPool, Redis

    from session_gateway.infrastructure.cache import RedisAdapter

    pool = ConnectionPool.from_url(
        settings.redis_url,
        max_connections=50,
        decode_responses=False,
        socket_connect_timeout=settings.cache_timeout_seconds,
        socket_timeout=settings.cache_timeout_seconds,
        socket_keepalive=True,
    )
    redis_client = Redis(connection_pool=pool)
    return RedisAdapter(redis_client=redis_client)


@lru_cache()
def get_database() -> Database:
    """Get database manager singleton (app-scoped).

    Returns Database instance with connection pool.
    Use get_db_session() for per-request sessions.

    Returns:
        Database manager instance.
    """
    return Database(
        database_url=settings.database_url,
        echo=settings.db_echo,
        pool_size=settings.db_pool_size,
        command_timeout=settings.store_timeout_seconds,
    )


@lru_cache()
def get_token_generator() -> "TokenGenerationProtocol":
    """Get session token generator singleton (app-scoped).

    Returns:
        RandomTokenGenerator with the configured token length.
    """
    from session_gateway.infrastructure.security import RandomTokenGenerator

    return RandomTokenGenerator(length=settings.session_token_length)


@lru_cache()
def get_coordinator_config() -> "CoordinatorConfig":
    """Get the session coordinator configuration (app-scoped).

    Returns:
        CoordinatorConfig built once from settings.
    """
    from session_gateway.application.services import CoordinatorConfig

    return CoordinatorConfig.from_settings(settings)


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    Adapter selection is centralized here (composition root):
    - development: ConsoleAdapter (human-readable)
    - testing/ci/production: ConsoleAdapter (JSON)

    Returns:
        LoggerProtocol: Logger instance implementing the protocol.
    """
    from session_gateway.infrastructure.logging import ConsoleAdapter

    return ConsoleAdapter(
        use_json=not settings.is_development,
        level=settings.log_level,
    )


# ============================================================================
# Request-Scoped Dependencies (Per-Request)
# ============================================================================


async def get_db_session(
    database: Database = Depends(get_database),
) -> AsyncGenerator[AsyncSession, None]:
    """Get database session (request-scoped).

    Creates new session per request with automatic transaction management:
        - Commits on success
        - Rolls back on exception
        - Always closes session

    Args:
        database: Database manager (overridable FastAPI dependency).

    Yields:
        Database session for request duration.
    """
    async with database.get_session() as session:
        yield session


# ============================================================================
# Lifecycle
# ============================================================================


async def close_resources() -> None:
    """Release pooled clients (called on application shutdown).

    Only clients that were actually created are closed; the factories are
    reset so a later call builds fresh ones.
    """
    if get_cache.cache_info().currsize:
        await get_cache().close()
        get_cache.cache_clear()
    if get_database.cache_info().currsize:
        await get_database().close()
        get_database.cache_clear()
