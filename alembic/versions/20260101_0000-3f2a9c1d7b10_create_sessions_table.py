"""Create sessions table

Revision ID: 3f2a9c1d7b10
Revises:
Create Date: 2026-01-01 00:00:00.000000+00:00

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3f2a9c1d7b10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "sessions",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column(
            "token", sa.String(length=64), nullable=False, comment="Opaque session token"
        ),
        sa.Column(
            "owner",
            sa.String(length=255),
            nullable=False,
            comment="Principal the session belongs to",
        ),
        sa.Column(
            "origin",
            sa.String(length=255),
            nullable=True,
            comment="Requesting context (tenant/application)",
        ),
        sa.Column("active", sa.Boolean(), nullable=False, comment="False once revoked"),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_sessions_token", "sessions", ["token"], unique=True)
    op.create_index("ix_sessions_owner", "sessions", ["owner"], unique=False)
    op.create_index("ix_sessions_active", "sessions", ["active"], unique=False)
    op.create_index(
        "ix_sessions_owner_origin_active",
        "sessions",
        ["owner", "origin", "active"],
        unique=False,
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_sessions_owner_origin_active", table_name="sessions")
    op.drop_index("ix_sessions_active", table_name="sessions")
    op.drop_index("ix_sessions_owner", table_name="sessions")
    op.drop_index("ix_sessions_token", table_name="sessions")
    op.drop_table("sessions")
