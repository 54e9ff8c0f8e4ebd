"""Repository implementations (adapters for domain protocols)."""

from session_gateway.infrastructure.persistence.repositories.session_repository import (
    SessionRepository,
)

__all__ = ["SessionRepository"]
