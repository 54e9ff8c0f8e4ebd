"""SessionRepository - SQLAlchemy implementation of SessionRepository protocol.

Adapter for hexagonal architecture.
Maps between domain SessionRecord DTOs and database SessionModel rows.

Every method returns a Result. SQLAlchemy and driver exceptions are caught
here, the transaction is rolled back, and the failure is reported as a
DatabaseError so callers never see a raw driver exception.

A write cancelled by the caller (timeout) is rolled back before the
cancellation propagates, so the request-scoped session never commits it
later.
"""

import asyncio
from typing import Any, cast

from sqlalchemy import and_, select, update
from sqlalchemy.exc import (
    IntegrityError,
    InterfaceError,
    OperationalError,
    SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import ColumnElement

from session_gateway.core.enums import ErrorCode
from session_gateway.core.result import Failure, Result, Success
from session_gateway.domain.protocols.session_repository import SessionRecord
from session_gateway.infrastructure.enums import InfrastructureErrorCode
from session_gateway.infrastructure.errors import DatabaseError
from session_gateway.infrastructure.persistence.base import utc_now
from session_gateway.infrastructure.persistence.models.session import SessionModel


def _normalize_origin(origin: str | None) -> str | None:
    """Empty origin is stored and matched as NULL."""
    return origin or None


def _classify(exc: Exception) -> InfrastructureErrorCode:
    """Pick the infrastructure code for a SQLAlchemy exception."""
    if isinstance(exc, IntegrityError):
        return InfrastructureErrorCode.DATABASE_CONSTRAINT_VIOLATION
    if isinstance(exc, (OperationalError, InterfaceError)):
        return InfrastructureErrorCode.DATABASE_CONNECTION_FAILED
    if isinstance(exc, SQLAlchemyError):
        return InfrastructureErrorCode.DATABASE_ERROR
    if isinstance(exc, (OSError, ConnectionError)):
        return InfrastructureErrorCode.DATABASE_CONNECTION_FAILED
    return InfrastructureErrorCode.DATABASE_UNKNOWN_ERROR


class SessionRepository:
    """SQLAlchemy implementation of SessionRepository protocol.

    This class does NOT inherit from SessionRepository protocol
    (Protocol uses structural typing - duck typing with type safety).

    Writes are committed before the method returns, so a Success from
    put() or mark_inactive_*() means the change is durable.

    Attributes:
        session: SQLAlchemy async session for database operations.

    Example:
        >>> async with database.get_session() as db_session:
        ...     repo = SessionRepository(db_session)
        ...     result = await repo.find_active_by_owner("user-1", "app")
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session.
        """
        self._session = session

    async def put(self, record: SessionRecord) -> Result[None, DatabaseError]:
        """Insert a new session row.

        Args:
            record: Session record to persist.

        Returns:
            Result with None on success, or DatabaseError. A duplicate token
            yields code SESSION_TOKEN_CONFLICT (is_constraint_violation is True).
        """
        model = self._to_model(record)
        try:
            self._session.add(model)
            await self._session.flush()
            await self._session.commit()
        except asyncio.CancelledError:
            await self._rollback()
            raise
        except Exception as e:
            return await self._failure(
                e,
                code=(
                    ErrorCode.SESSION_TOKEN_CONFLICT
                    if isinstance(e, IntegrityError)
                    else ErrorCode.SESSION_STORE_WRITE_FAILED
                ),
                message="Failed to insert session",
                details={"owner": record.owner, "origin": record.origin},
            )
        return Success(value=None)

    async def find_active_by_owner(
        self,
        owner: str,
        origin: str | None = None,
    ) -> Result[SessionRecord | None, DatabaseError]:
        """Find the most recent active session for an owner.

        Most recent means newest created_at; ties are broken by the
        time-ordered id.

        Args:
            owner: Owner identifier.
            origin: Origin to filter on, None to match any origin.

        Returns:
            Result with SessionRecord if found, None otherwise, or DatabaseError.
        """
        stmt = (
            select(SessionModel)
            .where(and_(*self._owner_conditions(owner, origin)))
            .order_by(SessionModel.created_at.desc(), SessionModel.id.desc())
            .limit(1)
        )
        try:
            result = await self._session.execute(stmt)
            model = result.scalars().first()
        except Exception as e:
            return await self._failure(
                e,
                code=ErrorCode.SESSION_STORE_READ_FAILED,
                message="Failed to query active session by owner",
                details={"owner": owner, "origin": origin},
            )
        return Success(value=self._to_record(model) if model is not None else None)

    async def find_active_by_token(
        self,
        token: str,
    ) -> Result[SessionRecord | None, DatabaseError]:
        """Find the active session carrying a token.

        Args:
            token: Session token.

        Returns:
            Result with SessionRecord if found and active, None otherwise,
            or DatabaseError.
        """
        stmt = select(SessionModel).where(
            and_(
                SessionModel.token == token,
                SessionModel.active.is_(True),
            )
        )
        try:
            result = await self._session.execute(stmt)
            model = result.scalar_one_or_none()
        except Exception as e:
            return await self._failure(
                e,
                code=ErrorCode.SESSION_STORE_READ_FAILED,
                message="Failed to query active session by token",
                details={"token_prefix": token[:4]},
            )
        return Success(value=self._to_record(model) if model is not None else None)

    async def mark_inactive_by_owner(
        self,
        owner: str,
        origin: str | None = None,
    ) -> Result[int, DatabaseError]:
        """Deactivate every active session of an owner (soft revoke).

        Args:
            owner: Owner identifier.
            origin: Origin to filter on, None to match any origin.

        Returns:
            Result with number of sessions deactivated, or DatabaseError.
        """
        stmt = (
            update(SessionModel)
            .where(and_(*self._owner_conditions(owner, origin)))
            .values(active=False, updated_at=utc_now())
        )
        return await self._execute_update(
            stmt,
            message="Failed to deactivate sessions by owner",
            details={"owner": owner, "origin": origin},
        )

    async def mark_inactive_by_token(
        self,
        token: str,
        owner: str | None = None,
    ) -> Result[int, DatabaseError]:
        """Deactivate every active session carrying a token.

        Args:
            token: Session token.
            owner: When given, only a session of this owner is deactivated.

        Returns:
            Result with number of sessions deactivated, or DatabaseError.
        """
        conditions: list[ColumnElement[bool]] = [
            SessionModel.token == token,
            SessionModel.active.is_(True),
        ]
        if owner is not None:
            conditions.append(SessionModel.owner == owner)
        stmt = (
            update(SessionModel)
            .where(and_(*conditions))
            .values(active=False, updated_at=utc_now())
        )
        return await self._execute_update(
            stmt,
            message="Failed to deactivate session by token",
            details={"token_prefix": token[:4]},
        )

    async def _execute_update(
        self,
        stmt: Any,
        *,
        message: str,
        details: dict[str, Any],
    ) -> Result[int, DatabaseError]:
        try:
            result = await self._session.execute(stmt)
            await self._session.commit()
        except asyncio.CancelledError:
            await self._rollback()
            raise
        except Exception as e:
            return await self._failure(
                e,
                code=ErrorCode.SESSION_STORE_WRITE_FAILED,
                message=message,
                details=details,
            )
        return Success(value=cast(Any, result).rowcount or 0)

    async def _failure(
        self,
        exc: Exception,
        *,
        code: ErrorCode,
        message: str,
        details: dict[str, Any],
    ) -> Failure[DatabaseError]:
        """Roll back and wrap a database exception."""
        await self._rollback()
        return Failure(
            error=DatabaseError(
                code=code,
                infrastructure_code=_classify(exc),
                message=message,
                details={**details, "error": str(exc), "type": type(exc).__name__},
            )
        )

    async def _rollback(self) -> None:
        try:
            await self._session.rollback()
        except SQLAlchemyError:
            # Connection already gone; report the first error
            pass

    @staticmethod
    def _owner_conditions(
        owner: str,
        origin: str | None,
    ) -> list[ColumnElement[bool]]:
        conditions: list[ColumnElement[bool]] = [
            SessionModel.owner == owner,
            SessionModel.active.is_(True),
        ]
        normalized = _normalize_origin(origin)
        if normalized is not None:
            conditions.append(SessionModel.origin == normalized)
        return conditions

    def _to_model(self, record: SessionRecord) -> SessionModel:
        """Convert domain DTO to database model.

        Args:
            record: Domain session record.

        Returns:
            SessionModel: Database model instance.
        """
        model = SessionModel(
            id=record.id,
            token=record.token,
            owner=record.owner,
            origin=_normalize_origin(record.origin),
            active=record.active,
        )
        if record.created_at is not None:
            model.created_at = record.created_at
        return model

    def _to_record(self, model: SessionModel) -> SessionRecord:
        """Convert database model to domain DTO.

        Args:
            model: Database model instance.

        Returns:
            SessionRecord: Domain session record.
        """
        return SessionRecord(
            id=model.id,
            token=model.token,
            owner=model.owner,
            origin=model.origin,
            active=model.active,
            created_at=model.created_at,
        )
