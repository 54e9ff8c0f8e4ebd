"""Domain protocols (ports).

Infrastructure adapters implement these through structural typing; none of
them inherit from the protocol classes.
"""

from session_gateway.domain.protocols.cache_protocol import CacheProtocol
from session_gateway.domain.protocols.logger_protocol import LoggerProtocol
from session_gateway.domain.protocols.session_repository import (
    SessionRecord,
    SessionRepository,
)
from session_gateway.domain.protocols.token_generation_protocol import (
    TokenGenerationProtocol,
)

__all__ = [
    "CacheProtocol",
    "LoggerProtocol",
    "SessionRecord",
    "SessionRepository",
    "TokenGenerationProtocol",
]
