"""Session queries (CQRS read operations).

Queries never change durable state. A lookup may refill the cache on a
store hit, which is not a change to the session record.
"""

from dataclasses import dataclass


@dataclass(frozen=True, kw_only=True)
class LookupSession:
    """Resolve the current session token for an identity.

    Attributes:
        owner: Owner identifier. Required in owner-keyed mode; in token-keyed
            mode, when given, the resolved session must belong to it.
        origin: Origin (owner-keyed mode with origin scoping).
        token: Session token (token-keyed mode).

    Example:
        >>> result = await coordinator.lookup(LookupSession(owner="u1", origin="web"))
    """

    owner: str | None = None
    origin: str | None = None
    token: str | None = None
