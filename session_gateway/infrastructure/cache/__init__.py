"""Cache infrastructure package.

Architecture:
- RedisAdapter: Concrete Redis implementation of CacheProtocol
- Use session_gateway.core.container.get_cache() for dependency injection
"""

from session_gateway.infrastructure.cache.redis_adapter import RedisAdapter

__all__ = ["RedisAdapter"]
