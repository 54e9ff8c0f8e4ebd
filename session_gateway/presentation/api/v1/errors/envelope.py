"""Result codes and envelope responses.

Every coordinator outcome is sent as HTTP 200 with a `{code, session?}`
envelope; the code, not the HTTP status, tells clients what happened.

    | Family  | Success | Not found | Error |
    |---------|---------|-----------|-------|
    | lookup  | 100     | 102       | 104   |
    | create  | 200     | -         | 201   |
    | revoke  | 300     | -         | 301   |

Exports:
    ResultCode: Stable integer result codes
    OperationFamily: Operation families and their codes
    envelope_response: Build a JSON envelope response
    result_to_response: Map a coordinator Result onto an envelope
"""

from enum import Enum, IntEnum

from fastapi import status
from fastapi.responses import JSONResponse

from session_gateway.core.result import Failure, Result, Success
from session_gateway.domain.errors import SessionError, SessionNotFoundError
from session_gateway.schemas.session_schemas import SessionEnvelope

ENVELOPE_HEADERS = {"Access-Control-Allow-Origin": "*"}


class ResultCode(IntEnum):
    """Stable wire result codes."""

    LOOKUP_SUCCESS = 100
    LOOKUP_MULTIPLE = 101  # reserved, never emitted
    LOOKUP_NOT_FOUND = 102
    LOOKUP_TOO_OLD = 103  # reserved, never emitted
    LOOKUP_ERROR = 104
    CREATE_SUCCESS = 200
    CREATE_ERROR = 201
    REVOKE_SUCCESS = 300
    REVOKE_ERROR = 301


class OperationFamily(Enum):
    """Operation families, each with its own success/error codes."""

    LOOKUP = "lookup"
    CREATE = "create"
    REVOKE = "revoke"

    @property
    def success_code(self) -> ResultCode:
        return _CODES[self][0]

    @property
    def error_code(self) -> ResultCode:
        return _CODES[self][1]

    @property
    def not_found_code(self) -> ResultCode:
        """Not found is only distinct for lookups; elsewhere it is an error."""
        if self is OperationFamily.LOOKUP:
            return ResultCode.LOOKUP_NOT_FOUND
        return self.error_code


_CODES: dict[OperationFamily, tuple[ResultCode, ResultCode]] = {
    OperationFamily.LOOKUP: (ResultCode.LOOKUP_SUCCESS, ResultCode.LOOKUP_ERROR),
    OperationFamily.CREATE: (ResultCode.CREATE_SUCCESS, ResultCode.CREATE_ERROR),
    OperationFamily.REVOKE: (ResultCode.REVOKE_SUCCESS, ResultCode.REVOKE_ERROR),
}


def envelope_response(
    code: ResultCode,
    session: str | None = None,
    status_code: int = status.HTTP_200_OK,
) -> JSONResponse:
    """Build a JSON envelope response with the fixed response headers.

    Args:
        code: Result code.
        session: Token to include, omitted when None.
        status_code: HTTP status (200 except for unexpected failures).

    Returns:
        JSONResponse with `{code, session?}` body.
    """
    envelope = SessionEnvelope(code=int(code), session=session)
    return JSONResponse(
        status_code=status_code,
        content=envelope.model_dump(exclude_none=True),
        headers=ENVELOPE_HEADERS,
    )


def result_to_response(
    family: OperationFamily,
    result: Result[str, SessionError] | Result[int, SessionError],
) -> JSONResponse:
    """Map a coordinator Result onto an envelope response.

    Args:
        family: Operation family the result belongs to.
        result: Coordinator result. A str value is echoed as the session.

    Returns:
        JSONResponse envelope (HTTP 200).
    """
    match result:
        case Success(value=str() as token):
            return envelope_response(family.success_code, session=token)
        case Success():
            return envelope_response(family.success_code)
        case Failure(error=SessionNotFoundError()):
            return envelope_response(family.not_found_code)
        case Failure():
            return envelope_response(family.error_code)
    raise TypeError(f"Unexpected result: {result!r}")


def family_for_path(path: str) -> OperationFamily | None:
    """Operation family served by a sessions API path, if any."""
    segments = [segment for segment in path.split("/") if segment]
    if "sessions" not in segments:
        return None
    tail = segments[segments.index("sessions") + 1 :]
    if not tail:
        return None
    match tail[0]:
        case "add":
            return OperationFamily.CREATE
        case "check" | "get":
            return OperationFamily.LOOKUP
        case "del":
            return OperationFamily.REVOKE
    return None
