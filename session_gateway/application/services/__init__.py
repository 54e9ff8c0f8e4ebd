"""Application services."""

from session_gateway.application.services.coordinator_config import CoordinatorConfig
from session_gateway.application.services.session_coordinator import (
    SessionCoordinator,
)

__all__ = ["CoordinatorConfig", "SessionCoordinator"]
