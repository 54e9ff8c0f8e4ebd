"""Domain-level error codes (machine-readable).

Error codes follow ENTITY_ACTION_REASON naming convention and are used with
Result types. They are internal identifiers; the numeric result codes sent
over the wire live in the presentation layer.
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain-level error codes (machine-readable)."""

    # Validation errors
    VALIDATION_FAILED = "validation_failed"
    SESSION_OWNER_REQUIRED = "session_owner_required"
    SESSION_ORIGIN_REQUIRED = "session_origin_required"
    SESSION_TOKEN_REQUIRED = "session_token_required"

    # Resource errors
    SESSION_NOT_FOUND = "session_not_found"

    # Durable store errors
    SESSION_STORE_READ_FAILED = "session_store_read_failed"
    SESSION_STORE_WRITE_FAILED = "session_store_write_failed"
    SESSION_TOKEN_CONFLICT = "session_token_conflict"

    # Cache errors
    SESSION_CACHE_UNAVAILABLE = "session_cache_unavailable"
