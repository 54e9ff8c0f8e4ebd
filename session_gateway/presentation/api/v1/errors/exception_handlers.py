"""Global exception handlers for FastAPI application.

Sessions API requests always get an envelope back:
- malformed bodies/parameters -> family error code, HTTP 200 (never a 422)
- unexpected exceptions -> family error code, HTTP 500

Other paths keep FastAPI's default validation response and get a plain
500 body for unexpected exceptions.

Exports:
    register_exception_handlers: Register all exception handlers with FastAPI app
"""

from fastapi import FastAPI, Request, status
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from session_gateway.core.container import get_logger
from session_gateway.presentation.api.v1.errors.envelope import (
    envelope_response,
    family_for_path,
)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Turn request validation failures into the family's error envelope.

    Args:
        request: FastAPI Request object
        exc: Validation error raised while parsing the request

    Returns:
        JSONResponse envelope (HTTP 200) for sessions API paths.
    """
    family = family_for_path(request.url.path)
    if family is None:
        return await request_validation_exception_handler(request, exc)

    get_logger().info(
        "Rejected malformed session request",
        path=request.url.path,
        family=family.value,
        errors=len(exc.errors()),
    )
    return envelope_response(family.error_code)


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected Python exceptions.

    Prevents leaking stack traces or internal details to API consumers.

    Args:
        request: FastAPI Request object
        exc: Unhandled exception

    Returns:
        JSONResponse (500 Internal Server Error)
    """
    trace_id = getattr(request.state, "trace_id", None)

    get_logger().error(
        "Unhandled exception",
        error=exc,
        trace_id=trace_id,
        request_path=request.url.path,
        request_method=request.method,
    )

    family = family_for_path(request.url.path)
    if family is not None:
        return envelope_response(
            family.error_code,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal Server Error", "trace_id": trace_id},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with FastAPI application.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, generic_exception_handler)
