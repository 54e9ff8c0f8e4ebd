"""Common error types reused by the domain layer."""

from dataclasses import dataclass

from session_gateway.core.errors.domain_error import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class ValidationError(DomainError):
    """Input validation failure.

    Attributes:
        field: Field name that failed validation.
    """

    field: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class NotFoundError(DomainError):
    """Resource not found.

    Attributes:
        resource_type: Type of resource (Session, ...).
        resource_id: Identifier that was looked up.
    """

    resource_type: str
    resource_id: str
