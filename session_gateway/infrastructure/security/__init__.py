"""Security infrastructure (token generation)."""

from session_gateway.infrastructure.security.token_generator import (
    RandomTokenGenerator,
)

__all__ = ["RandomTokenGenerator"]
