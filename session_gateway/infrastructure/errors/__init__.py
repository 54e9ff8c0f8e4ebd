"""Infrastructure errors package."""

from session_gateway.infrastructure.errors.infrastructure_error import (
    CacheError,
    DatabaseError,
    InfrastructureError,
)

__all__ = ["CacheError", "DatabaseError", "InfrastructureError"]
