"""Test suite for the session gateway.

Test structure:
- unit/: Coordinator, key strategies, config and helpers with mocked collaborators
- integration/: Redis adapter (fakeredis), repository (SQLite) and full
  coordinator flows over both
- api/: HTTP endpoints through the FastAPI app with dependency overrides
"""
