"""Database models for persistence layer.

These are infrastructure concerns and should not be imported by the domain
layer. Repositories map them to SessionRecord DTOs.

Models Organization:
    - session.py: Session model
"""

from session_gateway.infrastructure.persistence.models.session import SessionModel

__all__ = ["SessionModel"]
