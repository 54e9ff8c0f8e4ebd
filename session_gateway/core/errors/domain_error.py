"""Base error class for Railway-Oriented Programming.

DomainError is the base class for every error in the service. Errors are
returned inside ``Failure`` values, never raised.

Usage:
    @dataclass(frozen=True, slots=True, kw_only=True)
    class StoreReadError(DomainError):
        pass  # Inherits code, message, details
"""

from dataclasses import dataclass
from typing import Any

from session_gateway.core.enums import ErrorCode


@dataclass(frozen=True, slots=True, kw_only=True)
class DomainError:
    """Base domain error (does NOT inherit from Exception).

    Attributes:
        code: Machine-readable error code (enum).
        message: Human-readable error message.
        details: Optional context for debugging.
    """

    code: ErrorCode
    message: str
    details: dict[str, Any] | None = None

    def __str__(self) -> str:
        """String representation of error."""
        return f"{self.code.value}: {self.message}"
