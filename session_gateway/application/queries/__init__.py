"""Queries (read operations)."""

from session_gateway.application.queries.session_queries import LookupSession

__all__ = ["LookupSession"]
