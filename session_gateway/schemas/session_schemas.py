"""Session request/response schemas.

Pydantic models for the private sessions API. Kept separate from the
domain record: these are HTTP-layer concerns.

Wire names follow the existing client contract:
    uuid    -> owner
    origin  -> origin
    session -> token

Endpoints:
    POST /api/v1/private/sessions/add/    - Create session
    POST /api/v1/private/sessions/check/  - Look up session
    POST /api/v1/private/sessions/del/    - Revoke session
"""

from pydantic import BaseModel, ConfigDict, Field


class SessionRequest(BaseModel):
    """Request body shared by add, check and del.

    Every field is optional at the schema level; which ones are required
    depends on the operation and the deployment's keying mode, and is
    decided by the coordinator.
    """

    uuid: str | None = Field(
        default=None,
        max_length=255,
        description="Owner identifier (user or device)",
    )
    origin: str | None = Field(
        default=None,
        max_length=255,
        description="Requesting context (tenant/application)",
    )
    session: str | None = Field(
        default=None,
        max_length=64,
        description="Session token",
    )

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {
                "uuid": "6f1c7c1e-2b8e-4f3c-9a0e-5d8f1b2c3d4e",
                "origin": "web",
            }
        },
    )


class SessionEnvelope(BaseModel):
    """Response envelope: result code plus the token when there is one.

    Serialized with exclude_none so `session` is omitted when absent.
    """

    code: int = Field(..., description="Stable result code")
    session: str | None = Field(
        default=None,
        description="Session token (omitted when absent)",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "code": 200,
                "session": "aZ3kQ9xLm2Pq7RtB",
            }
        }
    )


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="healthy or degraded")
    database: bool = Field(..., description="Durable store reachable")
    cache: bool = Field(..., description="Cache reachable")
