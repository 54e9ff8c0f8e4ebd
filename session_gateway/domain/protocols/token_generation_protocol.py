"""Token generation protocol.

Tokens are fixed-length random strings over [A-Za-z0-9]. Uniqueness is
probabilistic; the durable store's unique constraint is the final word.
"""

from typing import Protocol


class TokenGenerationProtocol(Protocol):
    """Random session token generator."""

    def generate(self) -> str:
        """Return a new random token."""
        ...
