"""Explicit configuration for the session coordinator.

Built once at startup from Settings and handed to the coordinator, which
never reads the environment itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from session_gateway.domain.enums import KeyingMode

if TYPE_CHECKING:
    from session_gateway.core.config import Settings


@dataclass(frozen=True, slots=True, kw_only=True)
class CoordinatorConfig:
    """Coordinator configuration.

    Attributes:
        keying_mode: Owner- or token-keyed sessions (fixed per deployment).
        scope_by_origin: Whether origin scopes active sessions.
        store_timeout_seconds: Bound on each durable store call.
        cache_timeout_seconds: Bound on each cache call.
        cache_ttl_seconds: TTL for cache entries, None for no expiry.
        token_max_attempts: Inserts tried before a token collision is fatal.
    """

    keying_mode: KeyingMode = KeyingMode.OWNER
    scope_by_origin: bool = True
    store_timeout_seconds: float = 5.0
    cache_timeout_seconds: float = 2.0
    cache_ttl_seconds: int | None = None
    token_max_attempts: int = 3

    def __post_init__(self) -> None:
        if self.store_timeout_seconds <= 0 or self.cache_timeout_seconds <= 0:
            raise ValueError("Coordinator timeouts must be positive")
        if self.token_max_attempts < 1:
            raise ValueError("token_max_attempts must be at least 1")

    @classmethod
    def from_settings(cls, settings: Settings) -> CoordinatorConfig:
        """Build the configuration from application settings.

        Args:
            settings: Loaded application settings.

        Returns:
            CoordinatorConfig: Immutable coordinator configuration.
        """
        return cls(
            keying_mode=settings.session_keying_mode,
            scope_by_origin=settings.session_scope_by_origin,
            store_timeout_seconds=settings.store_timeout_seconds,
            cache_timeout_seconds=settings.cache_timeout_seconds,
            cache_ttl_seconds=settings.session_cache_ttl_seconds,
            token_max_attempts=settings.session_token_max_attempts,
        )
