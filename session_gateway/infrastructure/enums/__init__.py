"""Infrastructure enums package.

Usage:
    from session_gateway.infrastructure.enums import InfrastructureErrorCode
"""

from session_gateway.infrastructure.enums.infrastructure_error_code import (
    InfrastructureErrorCode,
)

__all__ = ["InfrastructureErrorCode"]
