"""Session token generator.

Token Strategy:
    - Opaque tokens with no embedded meaning
    - Fixed length, drawn uniformly from [a-zA-Z0-9]
    - Cryptographically random (secrets module)
    - Uniqueness is enforced by the durable store, not here: a collision
      surfaces as a constraint violation and the coordinator retries
"""

import secrets
import string

TOKEN_ALPHABET = string.ascii_letters + string.digits


class RandomTokenGenerator:
    """Generates opaque alphanumeric session tokens.

    Implements TokenGenerationProtocol (structural typing).

    Usage:
        generator = RandomTokenGenerator(length=16)
        token = generator.generate()  # e.g. "aZ3kQ9xLm2Pq7RtB"
    """

    def __init__(self, length: int = 16) -> None:
        """Initialize generator.

        Args:
            length: Number of characters per token (default: 16, ~95 bits).

        Raises:
            ValueError: If length is not positive.
        """
        if length < 1:
            raise ValueError(f"Token length must be positive, got {length}")
        self._length = length

    @property
    def length(self) -> int:
        """Configured token length."""
        return self._length

    def generate(self) -> str:
        """Generate a new random token.

        Returns:
            str: Token of the configured length.
        """
        return "".join(secrets.choice(TOKEN_ALPHABET) for _ in range(self._length))
