"""Core enums package.

Usage:
    from session_gateway.core.enums import ErrorCode, Environment
"""

from session_gateway.core.enums.environment import Environment
from session_gateway.core.enums.error_code import ErrorCode

__all__ = ["ErrorCode", "Environment"]
