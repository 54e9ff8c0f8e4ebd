"""Cache protocol for the volatile session cache.

Architecture:
- Protocol-based - uses structural typing
- All operations return Result types
- Fail-open: callers treat a cache failure like a miss, never as fatal
"""

from typing import Any, Protocol

from session_gateway.core.errors import DomainError
from session_gateway.core.result import Result


class CacheProtocol(Protocol):
    """What the coordinator needs from the cache (CacheGet/CacheSet/CacheDelete)."""

    async def get_json(self, key: str) -> Result[dict[str, Any] | None, DomainError]:
        """Get a JSON object from cache.

        Args:
            key: Cache key.

        Returns:
            Result with parsed dict, None on miss, or a cache error.
        """
        ...

    async def set_json(
        self,
        key: str,
        value: dict[str, Any],
        ttl: int | None = None,
    ) -> Result[None, DomainError]:
        """Store a JSON object in cache.

        Args:
            key: Cache key.
            value: JSON-serializable dict.
            ttl: Time to live in seconds (None = no expiration).

        Returns:
            Result with None on success, or a cache error.
        """
        ...

    async def delete(self, key: str) -> Result[bool, DomainError]:
        """Delete key from cache.

        Args:
            key: Cache key.

        Returns:
            Result with True if a key was removed, False if absent, or a cache error.
        """
        ...

    async def ping(self) -> Result[bool, DomainError]:
        """Check cache connectivity.

        Returns:
            Result with True if reachable, or a cache error.
        """
        ...
