"""Store timeouts leave nothing behind in the durable store.

A write that times out is cancelled mid-transaction. The repository must
roll it back before the cancellation propagates; otherwise the request-scoped
session commits it on exit and a row appears whose outcome the caller was
told had failed.

Tests cover:
- Create timing out on commit: no row survives the request session
- Revoke timing out on commit: the session stays active
- Repository writes cancelled by a timeout are rolled back
"""

import asyncio
from collections.abc import Callable

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from uuid_extensions import uuid7

from session_gateway.application.commands import CreateSession, RevokeSession
from session_gateway.application.queries import LookupSession
from session_gateway.application.services import CoordinatorConfig, SessionCoordinator
from session_gateway.core.result import Failure, Success
from session_gateway.domain.errors import StoreWriteError
from session_gateway.domain.protocols import SessionRecord
from session_gateway.infrastructure.persistence.models import SessionModel
from session_gateway.infrastructure.persistence.repositories import SessionRepository
from session_gateway.infrastructure.security import RandomTokenGenerator


def hang_commits(monkeypatch, session: AsyncSession) -> Callable[[], None]:
    """Make session.commit hang until the returned release() is called."""
    original_commit = session.commit
    hanging = True

    async def commit() -> None:
        if hanging:
            await asyncio.sleep(10)
        await original_commit()

    def release() -> None:
        nonlocal hanging
        hanging = False

    monkeypatch.setattr(session, "commit", commit)
    return release


def build_coordinator(session, cache, logger) -> SessionCoordinator:
    return SessionCoordinator(
        repository=SessionRepository(session=session),
        cache=cache,
        token_generator=RandomTokenGenerator(),
        logger=logger,
        config=CoordinatorConfig(store_timeout_seconds=0.05),
    )


async def count_rows(database, **filters) -> int:
    async with database.get_session() as session:
        stmt = select(func.count()).select_from(SessionModel).filter_by(**filters)
        return await session.scalar(stmt)


@pytest.mark.integration
class TestCoordinatorStoreTimeouts:
    """Coordinator timeouts inside a real request-scoped session."""

    async def test_create_timeout_leaves_no_row(
        self, database, cache, fake_redis, logger, monkeypatch
    ):
        # Arrange
        async with database.get_session() as session:
            release = hang_commits(monkeypatch, session)
            coordinator = build_coordinator(session, cache, logger)

            # Act
            result = await coordinator.create(CreateSession(owner="u1", origin="o1"))
            release()
        # get_session() has committed on exit here

        # Assert
        assert isinstance(result, Failure)
        assert isinstance(result.error, StoreWriteError)
        assert await count_rows(database) == 0
        assert await fake_redis.keys("*") == []

    async def test_lookup_after_failed_create_is_not_found(
        self, database, cache, logger, monkeypatch
    ):
        async with database.get_session() as session:
            release = hang_commits(monkeypatch, session)
            await build_coordinator(session, cache, logger).create(
                CreateSession(owner="u1", origin="o1")
            )
            release()

        async with database.get_session() as session:
            result = await build_coordinator(session, cache, logger).lookup(
                LookupSession(owner="u1", origin="o1")
            )

        assert isinstance(result, Failure)
        assert result.error.code.value == "session_not_found"

    async def test_revoke_timeout_keeps_session_active(
        self, database, cache, logger, monkeypatch
    ):
        # Arrange
        async with database.get_session() as session:
            created = await build_coordinator(session, cache, logger).create(
                CreateSession(owner="u1", origin="o1")
            )
        assert isinstance(created, Success)

        # Act
        async with database.get_session() as session:
            release = hang_commits(monkeypatch, session)
            result = await build_coordinator(session, cache, logger).revoke(
                RevokeSession(owner="u1", origin="o1")
            )
            release()

        # Assert
        assert isinstance(result, Failure)
        assert isinstance(result.error, StoreWriteError)
        assert await count_rows(database, owner="u1", active=True) == 1


@pytest.mark.integration
class TestRepositoryCancellation:
    """Cancelled repository writes are rolled back before propagating."""

    async def test_cancelled_put_is_rolled_back(
        self, repository, db_session, monkeypatch
    ):
        release = hang_commits(monkeypatch, db_session)
        record = SessionRecord(id=uuid7(), token="TOK", owner="u1", origin="o1")

        with pytest.raises(TimeoutError):
            async with asyncio.timeout(0.05):
                await repository.put(record)
        release()

        assert not db_session.in_transaction()
        result = await repository.find_active_by_token("TOK")
        assert result == Success(value=None)

    async def test_cancelled_update_is_rolled_back(
        self, repository, db_session, monkeypatch
    ):
        await repository.put(
            SessionRecord(id=uuid7(), token="TOK", owner="u1", origin="o1")
        )
        release = hang_commits(monkeypatch, db_session)

        with pytest.raises(TimeoutError):
            async with asyncio.timeout(0.05):
                await repository.mark_inactive_by_token("TOK")
        release()

        result = await repository.find_active_by_token("TOK")
        assert result.value is not None
        assert result.value.active is True
