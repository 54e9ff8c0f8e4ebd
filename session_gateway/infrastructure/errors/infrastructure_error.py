"""Infrastructure layer error types.

Infrastructure errors represent failures in external systems (database, cache).

Architecture:
- Adapters catch library exceptions and return these inside Failure
- Inherit from DomainError (not Exception)
- InfrastructureErrorCode is kept for internal tracking and log context
"""

from dataclasses import dataclass

from session_gateway.core.errors import DomainError
from session_gateway.infrastructure.enums import InfrastructureErrorCode


@dataclass(frozen=True, slots=True, kw_only=True)
class InfrastructureError(DomainError):
    """Base infrastructure error.

    Attributes:
        infrastructure_code: Infrastructure-level error code.
    """

    infrastructure_code: InfrastructureErrorCode | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class DatabaseError(InfrastructureError):
    """Durable store error wrapping a SQLAlchemy/driver exception."""

    @property
    def is_constraint_violation(self) -> bool:
        """True when the database rejected the write on a unique constraint."""
        return (
            self.infrastructure_code
            is InfrastructureErrorCode.DATABASE_CONSTRAINT_VIOLATION
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class CacheError(InfrastructureError):
    """Cache error wrapping a Redis exception."""
