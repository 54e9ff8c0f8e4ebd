"""
Main FastAPI application entry point.

This module initializes the FastAPI application instance, wires middleware,
exception handlers and the v1 routers, and releases pooled clients on
shutdown.

Run with:
    session-gateway            # console script, uses HOST/PORT settings
    uvicorn session_gateway.main:app
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Annotated

import uvicorn
from fastapi import Depends, FastAPI, status
from fastapi.responses import JSONResponse, PlainTextResponse

from session_gateway.core.config import settings
from session_gateway.core.container import (
    close_resources,
    get_cache,
    get_database,
    get_logger,
)
from session_gateway.core.result import Success
from session_gateway.infrastructure.cache import RedisAdapter
from session_gateway.infrastructure.persistence import Database
from session_gateway.presentation.api.middleware import TraceMiddleware
from session_gateway.presentation.api.v1 import v1_router
from session_gateway.presentation.api.v1.errors import register_exception_handlers
from session_gateway.schemas import HealthResponse


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan context manager.

    Handles startup and shutdown events:
    - Startup: Log the effective session configuration
    - Shutdown: Close the Redis pool and dispose the database engine

    Args:
        app: FastAPI application instance.

    Yields:
        None during application lifetime.
    """
    logger = get_logger()
    logger.info(
        "Session gateway starting",
        environment=settings.environment.value,
        keying_mode=settings.session_keying_mode.value,
        scope_by_origin=settings.session_scope_by_origin,
        cache_ttl_seconds=settings.session_cache_ttl_seconds,
    )

    yield

    await close_resources()
    logger.info("Session gateway stopped")


# Initialize FastAPI application with settings and lifespan
app = FastAPI(
    title=settings.app_name,
    description="Issues, looks up and revokes opaque session tokens",
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    debug=settings.debug,
    lifespan=lifespan,
)

# Wire trace middleware (request correlation)
app.add_middleware(TraceMiddleware)

# Register global exception handlers (envelope error responses)
register_exception_handlers(app)

# Include API v1 routers
app.include_router(v1_router)


@app.get("/", response_class=PlainTextResponse)
async def root() -> str:
    """
    Root endpoint.

    Returns:
        str: The literal "Default".
    """
    return "Default"


@app.get("/health", response_model=HealthResponse)
async def health(
    database: Annotated[Database, Depends(get_database)],
    cache: Annotated[RedisAdapter, Depends(get_cache)],
) -> JSONResponse:
    """
    Health check endpoint for monitoring and load balancers.

    Returns:
        JSONResponse: 200 when both backends are reachable, 503 otherwise.
    """
    database_ok = await database.check_connection()
    cache_ok = isinstance(await cache.ping(), Success)
    healthy = database_ok and cache_ok
    body = HealthResponse(
        status="healthy" if healthy else "degraded",
        database=database_ok,
        cache=cache_ok,
    )
    return JSONResponse(
        status_code=status.HTTP_200_OK
        if healthy
        else status.HTTP_503_SERVICE_UNAVAILABLE,
        content=body.model_dump(),
    )


def run() -> None:
    """Run the HTTP server with uvicorn."""
    uvicorn.run(
        "session_gateway.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        reload=settings.is_development and settings.debug,
    )


if __name__ == "__main__":
    run()
