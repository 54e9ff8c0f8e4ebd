"""Core errors package.

Usage:
    from session_gateway.core.errors import DomainError, ValidationError
"""

from session_gateway.core.errors.common_errors import NotFoundError, ValidationError
from session_gateway.core.errors.domain_error import DomainError

__all__ = [
    "DomainError",
    "ValidationError",
    "NotFoundError",
]
