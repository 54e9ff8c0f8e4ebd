"""API tests for the full session lifecycle through the real dependency chain.

Only the backends are swapped: get_database returns an in-memory SQLite
database and get_cache a fakeredis-backed adapter. Everything between the
route and the store (get_db_session, get_session_coordinator, the coordinator
and SessionRepository) is the production wiring.
"""

import asyncio
from collections.abc import Iterator

import fakeredis.aioredis
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession

from session_gateway.application.services import CoordinatorConfig
from session_gateway.core.container import get_cache, get_database
from session_gateway.core.container import handlers as handler_factories
from session_gateway.infrastructure.cache import RedisAdapter
from session_gateway.infrastructure.persistence import Database
from session_gateway.main import app

BASE = "/api/v1/private/sessions"
OWNER = {"uuid": "u1", "origin": "o1"}


@pytest.fixture
def fake_redis_client() -> fakeredis.aioredis.FakeRedis:
    return fakeredis.aioredis.FakeRedis()


@pytest.fixture
def client(fake_redis_client) -> Iterator[TestClient]:
    database = Database(database_url="sqlite+aiosqlite:///:memory:")
    cache = RedisAdapter(redis_client=fake_redis_client)
    app.dependency_overrides[get_database] = lambda: database
    app.dependency_overrides[get_cache] = lambda: cache

    # One portal (event loop) for setup, requests and teardown
    with TestClient(app) as test_client:
        test_client.portal.call(database.create_all)
        yield test_client
        test_client.portal.call(database.close)

    app.dependency_overrides.clear()


@pytest.mark.api
class TestSessionLifecycle:
    """add -> check -> del -> check against SQLite and fakeredis."""

    def test_create_lookup_revoke_lookup(self, client):
        created = client.post(f"{BASE}/add/", json=OWNER)
        assert created.status_code == 200
        assert created.json()["code"] == 200
        token = created.json()["session"]

        found = client.post(f"{BASE}/check/", json=OWNER)
        assert found.json() == {"code": 100, "session": token}

        revoked = client.post(f"{BASE}/del/", json=OWNER)
        assert revoked.json() == {"code": 300}

        missing = client.post(f"{BASE}/check/", json=OWNER)
        assert missing.json() == {"code": 102}

    def test_lookup_is_served_from_cache_after_create(
        self, client, fake_redis_client
    ):
        token = client.post(f"{BASE}/add/", json=OWNER).json()["session"]

        cached = client.portal.call(fake_redis_client.keys, "*")
        response = client.get(f"{BASE}/get/u1", params={"origin": "o1"})

        assert len(cached) == 1
        assert response.json() == {"code": 100, "session": token}

    def test_second_create_replaces_first_token(self, client):
        first = client.post(f"{BASE}/add/", json=OWNER).json()["session"]
        second = client.post(f"{BASE}/add/", json=OWNER).json()["session"]

        response = client.post(f"{BASE}/check/", json=OWNER)

        assert first != second
        assert response.json() == {"code": 100, "session": second}

    def test_unknown_owner_not_found(self, client):
        response = client.post(
            f"{BASE}/check/", json={"uuid": "nobody", "origin": "o1"}
        )

        assert response.json() == {"code": 102}


@pytest.mark.api
class TestCreateTimeoutThroughApi:
    """A create that times out on commit never becomes visible."""

    def test_timed_out_create_is_not_found_later(self, client, monkeypatch):
        monkeypatch.setattr(
            handler_factories,
            "get_coordinator_config",
            lambda: CoordinatorConfig(store_timeout_seconds=0.05),
        )
        original_commit = AsyncSession.commit
        commits = []

        async def commit(self):
            commits.append(self)
            if len(commits) == 1:
                await asyncio.sleep(10)
            await original_commit(self)

        monkeypatch.setattr(AsyncSession, "commit", commit)

        created = client.post(f"{BASE}/add/", json=OWNER)
        found = client.post(f"{BASE}/check/", json=OWNER)

        assert created.json() == {"code": 201}
        assert found.json() == {"code": 102}
