"""Session database model.

One row per issued session. Rows are never deleted: revocation flips
`active` to False, so the table doubles as a history of every token ever
issued to an owner.
"""

from sqlalchemy import Boolean, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from session_gateway.infrastructure.persistence.base import BaseMutableModel


class SessionModel(BaseMutableModel):
    """Session model.

    Fields:
        id: UUIDv7 primary key (from BaseMutableModel)
        created_at: Timestamp when session created (from BaseMutableModel)
        updated_at: Timestamp of last change, i.e. revocation (from BaseMutableModel)
        token: Opaque session token (unique)
        owner: Principal the session belongs to
        origin: Requesting context, NULL when the caller sent none
        active: False once revoked

    Indexes:
        - ix_sessions_token: unique, token-keyed lookups and revokes
        - ix_sessions_owner: owner-keyed lookups
        - ix_sessions_owner_origin_active: newest active row per identity
    """

    __tablename__ = "sessions"

    token: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        unique=True,
        index=True,
        comment="Opaque session token",
    )

    owner: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
        comment="Principal the session belongs to",
    )

    origin: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        comment="Requesting context (tenant/application)",
    )

    active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        index=True,
        comment="False once revoked",
    )

    __table_args__ = (
        Index("ix_sessions_owner_origin_active", "owner", "origin", "active"),
    )

    def __repr__(self) -> str:
        """String representation for debugging.

        The token is truncated so reprs are safe to log.
        """
        return (
            f"<SessionModel(id={self.id}, owner={self.owner!r}, "
            f"origin={self.origin!r}, token={self.token[:4]}..., active={self.active})>"
        )
