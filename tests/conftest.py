"""Pytest configuration and shared fixtures.

Test doubles:
- fakeredis stands in for Redis (in-memory, async API)
- SQLite (aiosqlite, static pool) stands in for PostgreSQL

Every async client is created inside an async fixture so it is bound to
the test's own event loop.
"""

import os

# Settings are read at import time; point them at test backends first.
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("REDIS_URL", "redis://localhost:6379/1")

from collections.abc import AsyncGenerator, Callable  # noqa: E402
from typing import Any  # noqa: E402
from unittest.mock import MagicMock  # noqa: E402

import fakeredis.aioredis  # noqa: E402
import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: E402

from session_gateway.application.services import (  # noqa: E402
    CoordinatorConfig,
    SessionCoordinator,
)
from session_gateway.domain.enums import KeyingMode  # noqa: E402
from session_gateway.infrastructure.cache import RedisAdapter  # noqa: E402
from session_gateway.infrastructure.persistence import Database  # noqa: E402
from session_gateway.infrastructure.persistence.repositories import (  # noqa: E402
    SessionRepository,
)
from session_gateway.infrastructure.security import RandomTokenGenerator  # noqa: E402

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


def make_logger() -> MagicMock:
    """Logger double that records calls; bind() returns the same double."""
    logger = MagicMock()
    logger.bind.return_value = logger
    return logger


@pytest.fixture
def logger() -> MagicMock:
    return make_logger()


@pytest_asyncio.fixture
async def fake_redis() -> AsyncGenerator[fakeredis.aioredis.FakeRedis, None]:
    """In-memory Redis bound to the test's event loop."""
    client = fakeredis.aioredis.FakeRedis(decode_responses=False)
    yield client
    await client.flushall()
    await client.aclose()


@pytest.fixture
def cache(fake_redis: fakeredis.aioredis.FakeRedis) -> RedisAdapter:
    return RedisAdapter(redis_client=fake_redis)


@pytest_asyncio.fixture
async def database() -> AsyncGenerator[Database, None]:
    """Fresh in-memory SQLite database with the schema created."""
    db = Database(database_url=TEST_DATABASE_URL)
    await db.create_all()
    yield db
    await db.drop_all()
    await db.close()


@pytest_asyncio.fixture
async def db_session(database: Database) -> AsyncGenerator[AsyncSession, None]:
    async with database.get_session() as session:
        yield session


@pytest.fixture
def repository(db_session: AsyncSession) -> SessionRepository:
    return SessionRepository(session=db_session)


@pytest.fixture
def make_coordinator(
    repository: SessionRepository,
    cache: RedisAdapter,
    logger: MagicMock,
) -> Callable[..., SessionCoordinator]:
    """Build a coordinator over SQLite + fakeredis with config overrides."""

    def _make(**overrides: Any) -> SessionCoordinator:
        config = CoordinatorConfig(
            **{
                "keying_mode": KeyingMode.OWNER,
                "scope_by_origin": True,
                **overrides,
            }
        )
        return SessionCoordinator(
            repository=repository,
            cache=cache,
            token_generator=RandomTokenGenerator(length=16),
            logger=logger,
            config=config,
        )

    return _make
