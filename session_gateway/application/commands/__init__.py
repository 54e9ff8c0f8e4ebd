"""Commands (write operations)."""

from session_gateway.application.commands.session_commands import (
    CreateSession,
    RevokeSession,
)

__all__ = ["CreateSession", "RevokeSession"]
