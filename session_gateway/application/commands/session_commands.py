"""Session commands (CQRS write operations).

Commands represent caller intent to change session state.
All commands are immutable (frozen=True) and use keyword-only arguments (kw_only=True).

Pattern:
- Commands are data containers (no logic)
- The coordinator validates them against the deployment's keying mode
- The coordinator returns Result types
"""

from dataclasses import dataclass


@dataclass(frozen=True, kw_only=True)
class CreateSession:
    """Issue a new session token for an owner.

    Always inserts a new record; an existing active session for the same
    identity is left untouched.

    Attributes:
        owner: Principal the session belongs to.
        origin: Requesting context. Required when sessions are scoped by origin.

    Example:
        >>> result = await coordinator.create(CreateSession(owner="u1", origin="web"))
    """

    owner: str
    origin: str | None = None


@dataclass(frozen=True, kw_only=True)
class RevokeSession:
    """Deactivate the session(s) matching an identity.

    Owner-keyed deployments identify the target by (owner, origin);
    token-keyed deployments identify it by token.

    Attributes:
        owner: Owner identifier (owner-keyed mode).
        origin: Origin (owner-keyed mode with origin scoping).
        token: Session token (token-keyed mode).
    """

    owner: str | None = None
    origin: str | None = None
    token: str | None = None
