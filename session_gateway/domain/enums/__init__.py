"""Domain enums package."""

from session_gateway.domain.enums.keying_mode import KeyingMode

__all__ = ["KeyingMode"]
