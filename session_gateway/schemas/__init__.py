"""Pydantic request/response models for the HTTP wire format."""

from session_gateway.schemas.session_schemas import (
    HealthResponse,
    SessionEnvelope,
    SessionRequest,
)

__all__ = ["HealthResponse", "SessionEnvelope", "SessionRequest"]
