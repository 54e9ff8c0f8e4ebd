"""Database persistence infrastructure.

This module provides:
- Base model for all database entities
- Database connection and session management
- Repository implementations
"""

from session_gateway.infrastructure.persistence.base import BaseModel
from session_gateway.infrastructure.persistence.database import Database

__all__ = [
    "BaseModel",
    "Database",
]
