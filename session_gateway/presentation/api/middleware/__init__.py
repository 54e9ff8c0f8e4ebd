"""HTTP middleware."""

from session_gateway.presentation.api.middleware.trace_middleware import (
    TraceMiddleware,
)

__all__ = ["TraceMiddleware"]
