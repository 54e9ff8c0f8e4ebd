"""Private sessions router.

Endpoints:
    POST /api/v1/private/sessions/add/          - Create session (body)
    POST /api/v1/private/sessions/add/{owner}   - Create session (owner in path)
    POST /api/v1/private/sessions/check/        - Look up session (body)
    GET  /api/v1/private/sessions/get/{owner}   - Look up session (owner in path)
    POST /api/v1/private/sessions/del/          - Revoke session(s)

All outcomes are HTTP 200 envelopes; see errors/envelope.py for codes.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query
from fastapi.responses import JSONResponse

from session_gateway.application.commands import CreateSession, RevokeSession
from session_gateway.application.queries import LookupSession
from session_gateway.application.services import SessionCoordinator
from session_gateway.core.container import get_session_coordinator
from session_gateway.presentation.api.v1.errors.envelope import (
    OperationFamily,
    result_to_response,
)
from session_gateway.schemas.session_schemas import SessionEnvelope, SessionRequest

router = APIRouter(prefix="/private/sessions", tags=["Sessions"])

Coordinator = Annotated[SessionCoordinator, Depends(get_session_coordinator)]
OwnerPath = Annotated[str, Path(max_length=255, description="Owner identifier")]
OriginQuery = Annotated[
    str | None, Query(max_length=255, description="Requesting context")
]
TokenQuery = Annotated[str | None, Query(max_length=64, description="Session token")]


@router.post(
    "/add/",
    response_model=SessionEnvelope,
    response_model_exclude_none=True,
    summary="Create session",
    description="Issue a new session token for `uuid` (and `origin`).",
)
async def create_session(
    data: SessionRequest,
    coordinator: Coordinator,
) -> JSONResponse:
    """Create a session from a JSON body.

    Returns:
        `{code: 200, session}` on success, `{code: 201}` otherwise.
    """
    result = await coordinator.create(CreateSession(owner=data.uuid, origin=data.origin))
    return result_to_response(OperationFamily.CREATE, result)


@router.post(
    "/add/{owner}",
    response_model=SessionEnvelope,
    response_model_exclude_none=True,
    summary="Create session for owner",
)
async def create_session_for_owner(
    owner: OwnerPath,
    coordinator: Coordinator,
    origin: OriginQuery = None,
) -> JSONResponse:
    """Create a session with the owner in the path."""
    result = await coordinator.create(CreateSession(owner=owner, origin=origin))
    return result_to_response(OperationFamily.CREATE, result)


@router.post(
    "/check/",
    response_model=SessionEnvelope,
    response_model_exclude_none=True,
    summary="Look up session",
    description="Resolve the active session for `uuid`/`origin` (or `session`).",
)
async def check_session(
    data: SessionRequest,
    coordinator: Coordinator,
) -> JSONResponse:
    """Look up a session from a JSON body.

    Returns:
        `{code: 100, session}` when found, `{code: 102}` when there is no
        active session, `{code: 104}` on bad input or store failure.
    """
    result = await coordinator.lookup(
        LookupSession(owner=data.uuid, origin=data.origin, token=data.session)
    )
    return result_to_response(OperationFamily.LOOKUP, result)


@router.get(
    "/get/{owner}",
    response_model=SessionEnvelope,
    response_model_exclude_none=True,
    summary="Look up session for owner",
)
async def get_session(
    owner: OwnerPath,
    coordinator: Coordinator,
    origin: OriginQuery = None,
    session: TokenQuery = None,
) -> JSONResponse:
    """Look up a session with the owner in the path."""
    result = await coordinator.lookup(
        LookupSession(owner=owner, origin=origin, token=session)
    )
    return result_to_response(OperationFamily.LOOKUP, result)


@router.post(
    "/del/",
    response_model=SessionEnvelope,
    response_model_exclude_none=True,
    summary="Revoke session",
    description="Deactivate every active session matching the identity.",
)
async def delete_session(
    data: SessionRequest,
    coordinator: Coordinator,
) -> JSONResponse:
    """Revoke session(s).

    Returns:
        `{code: 300}` on success (including when nothing was active),
        `{code: 301}` on bad input or store failure.
    """
    result = await coordinator.revoke(
        RevokeSession(owner=data.uuid, origin=data.origin, token=data.session)
    )
    return result_to_response(OperationFamily.REVOKE, result)
