"""Session repository protocol for the durable store.

The durable store is the system of record for session existence and for the
active/inactive flag. It allows several historical rows per owner; keeping at
most one *active* row per identity is not its job.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from uuid import UUID

from session_gateway.core.errors import DomainError
from session_gateway.core.result import Result


@dataclass(slots=True, kw_only=True)
class SessionRecord:
    """Data transfer object for a session row.

    Attributes:
        id: Record identifier (time-ordered).
        token: Opaque session token, unique across all records.
        owner: Principal the session belongs to.
        origin: Requesting context (tenant/application), None when absent.
        active: False once revoked; rows are never physically removed.
        created_at: Creation timestamp (provenance only).
    """

    id: UUID
    token: str
    owner: str
    origin: str | None = None
    active: bool = True
    created_at: datetime | None = None

    def to_payload(self) -> dict[str, str]:
        """Payload cached for this record and exposed on the wire."""
        payload = {"uuid": self.owner, "session": self.token}
        if self.origin:
            payload["origin"] = self.origin
        return payload


class SessionRepository(Protocol):
    """Session repository protocol (port).

    Binds PutSession, FindActiveSessionByOwner and MarkInactive, plus the
    token-indexed variants used by token-keyed deployments.
    """

    async def put(self, record: SessionRecord) -> Result[None, DomainError]:
        """Insert a new record (never an upsert).

        Args:
            record: Record to insert.

        Returns:
            Result with None on success, or a database error. A token
            uniqueness violation carries ErrorCode.SESSION_TOKEN_CONFLICT.
        """
        ...

    async def find_active_by_owner(
        self,
        owner: str,
        origin: str | None = None,
    ) -> Result[SessionRecord | None, DomainError]:
        """Find the most recent active record for an owner.

        Args:
            owner: Owner identifier.
            origin: Origin to filter on, None to ignore origin.

        Returns:
            Result with the newest active record, None if there is none,
            or a database error.
        """
        ...

    async def find_active_by_token(
        self,
        token: str,
    ) -> Result[SessionRecord | None, DomainError]:
        """Find the active record carrying a token.

        Args:
            token: Session token.

        Returns:
            Result with the record, None if absent or inactive, or a database error.
        """
        ...

    async def mark_inactive_by_owner(
        self,
        owner: str,
        origin: str | None = None,
    ) -> Result[int, DomainError]:
        """Deactivate every active record of an owner.

        Args:
            owner: Owner identifier.
            origin: Origin to filter on, None to ignore origin.

        Returns:
            Result with number of rows deactivated (0 is not an error).
        """
        ...

    async def mark_inactive_by_token(
        self,
        token: str,
        owner: str | None = None,
    ) -> Result[int, DomainError]:
        """Deactivate every active record carrying a token.

        Args:
            token: Session token.
            owner: When given, a record of another owner is left untouched.

        Returns:
            Result with number of rows deactivated (0 is not an error).
        """
        ...
