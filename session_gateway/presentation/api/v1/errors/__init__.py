"""Envelope responses and exception handlers."""

from session_gateway.presentation.api.v1.errors.envelope import (
    OperationFamily,
    ResultCode,
    envelope_response,
    result_to_response,
)
from session_gateway.presentation.api.v1.errors.exception_handlers import (
    register_exception_handlers,
)

__all__ = [
    "OperationFamily",
    "ResultCode",
    "envelope_response",
    "register_exception_handlers",
    "result_to_response",
]
