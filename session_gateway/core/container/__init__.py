"""Container module - Centralized dependency injection.

    from session_gateway.core.container import get_cache, get_session_coordinator

The container is organized into modules:
- infrastructure: Core services (cache, db, logging, token generation)
- handlers: Request-scoped session coordinator
"""

from session_gateway.core.container.handlers import get_session_coordinator
from session_gateway.core.container.infrastructure import (
    close_resources,
    get_cache,
    get_coordinator_config,
    get_database,
    get_db_session,
    get_logger,
    get_token_generator,
)

__all__ = [
    "close_resources",
    "get_cache",
    "get_coordinator_config",
    "get_database",
    "get_db_session",
    "get_logger",
    "get_session_coordinator",
    "get_token_generator",
]
