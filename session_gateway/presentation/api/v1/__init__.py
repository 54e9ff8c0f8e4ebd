"""API v1 router aggregation."""

from fastapi import APIRouter

from session_gateway.presentation.api.v1.sessions import router as sessions_router

v1_router = APIRouter(prefix="/api/v1")
v1_router.include_router(sessions_router)

__all__ = ["v1_router"]
