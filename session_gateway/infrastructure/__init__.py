"""Infrastructure adapters (Redis, SQLAlchemy, structlog, token generation)."""
