"""API tests for the private sessions endpoints.

The coordinator dependency is overridden with a stub so these tests only
exercise HTTP concerns: routing, request parsing, result-code envelopes,
headers and error handling.
"""

from dataclasses import dataclass, field
from typing import Any

import pytest
from fastapi.testclient import TestClient

from session_gateway.core.container import get_session_coordinator
from session_gateway.core.enums import ErrorCode
from session_gateway.core.result import Failure, Success
from session_gateway.domain.errors import (
    SessionNotFoundError,
    StoreReadError,
    StoreWriteError,
)
from session_gateway.main import app

BASE = "/api/v1/private/sessions"


@dataclass
class StubCoordinator:
    """Coordinator double returning canned results and recording calls."""

    create_result: Any = None
    lookup_result: Any = None
    revoke_result: Any = None
    raises: Exception | None = None
    calls: list[tuple[str, Any]] = field(default_factory=list)

    async def create(self, cmd):
        return self._answer("create", cmd, self.create_result)

    async def lookup(self, query):
        return self._answer("lookup", query, self.lookup_result)

    async def revoke(self, cmd):
        return self._answer("revoke", cmd, self.revoke_result)

    def _answer(self, name, arg, result):
        self.calls.append((name, arg))
        if self.raises is not None:
            raise self.raises
        return result


@pytest.fixture
def stub():
    coordinator = StubCoordinator()
    app.dependency_overrides[get_session_coordinator] = lambda: coordinator
    yield coordinator
    app.dependency_overrides.clear()


@pytest.fixture
def client(stub):
    return TestClient(app, raise_server_exceptions=False)


@pytest.mark.api
class TestCreateEndpoints:
    """POST /add/ and /add/{owner}."""

    def test_create_success(self, client, stub):
        stub.create_result = Success(value="abcDEF1234567890")

        response = client.post(f"{BASE}/add/", json={"uuid": "u1", "origin": "o1"})

        assert response.status_code == 200
        assert response.json() == {"code": 200, "session": "abcDEF1234567890"}
        name, cmd = stub.calls[0]
        assert name == "create"
        assert (cmd.owner, cmd.origin) == ("u1", "o1")

    def test_create_failure(self, client, stub):
        stub.create_result = Failure(
            error=StoreWriteError(
                code=ErrorCode.SESSION_STORE_WRITE_FAILED, message="down"
            )
        )

        response = client.post(f"{BASE}/add/", json={"uuid": "u1", "origin": "o1"})

        assert response.status_code == 200
        assert response.json() == {"code": 201}

    def test_create_with_owner_in_path(self, client, stub):
        stub.create_result = Success(value="TOK")

        response = client.post(f"{BASE}/add/u1", params={"origin": "o1"})

        assert response.json() == {"code": 200, "session": "TOK"}
        _, cmd = stub.calls[0]
        assert (cmd.owner, cmd.origin) == ("u1", "o1")

    def test_malformed_body_is_error_envelope(self, client, stub):
        response = client.post(
            f"{BASE}/add/",
            content="not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 200
        assert response.json() == {"code": 201}
        assert stub.calls == []

    def test_oversized_owner_is_error_envelope(self, client, stub):
        response = client.post(f"{BASE}/add/", json={"uuid": "u" * 300, "origin": "o1"})

        assert response.status_code == 200
        assert response.json() == {"code": 201}

    def test_unknown_fields_ignored(self, client, stub):
        stub.create_result = Success(value="TOK")

        response = client.post(
            f"{BASE}/add/", json={"uuid": "u1", "origin": "o1", "extra": 1}
        )

        assert response.json() == {"code": 200, "session": "TOK"}


@pytest.mark.api
class TestLookupEndpoints:
    """POST /check/ and GET /get/{owner}."""

    def test_check_found(self, client, stub):
        stub.lookup_result = Success(value="TOK")

        response = client.post(f"{BASE}/check/", json={"uuid": "u1", "origin": "o1"})

        assert response.json() == {"code": 100, "session": "TOK"}

    def test_check_not_found(self, client, stub):
        stub.lookup_result = Failure(
            error=SessionNotFoundError(
                code=ErrorCode.SESSION_NOT_FOUND, message="none", resource_id="k"
            )
        )

        response = client.post(f"{BASE}/check/", json={"uuid": "u1", "origin": "o1"})

        assert response.status_code == 200
        assert response.json() == {"code": 102}

    def test_check_store_failure(self, client, stub):
        stub.lookup_result = Failure(
            error=StoreReadError(code=ErrorCode.SESSION_STORE_READ_FAILED, message="down")
        )

        response = client.post(f"{BASE}/check/", json={"uuid": "u1", "origin": "o1"})

        assert response.json() == {"code": 104}

    def test_check_passes_token(self, client, stub):
        stub.lookup_result = Success(value="TOK")

        client.post(f"{BASE}/check/", json={"uuid": "u1", "session": "TOK"})

        _, query = stub.calls[0]
        assert (query.owner, query.origin, query.token) == ("u1", None, "TOK")

    def test_check_malformed_body(self, client, stub):
        response = client.post(f"{BASE}/check/", json=["not", "an", "object"])

        assert response.status_code == 200
        assert response.json() == {"code": 104}

    def test_get_with_owner_in_path(self, client, stub):
        stub.lookup_result = Success(value="TOK")

        response = client.get(f"{BASE}/get/u1", params={"origin": "o1"})

        assert response.json() == {"code": 100, "session": "TOK"}
        _, query = stub.calls[0]
        assert (query.owner, query.origin) == ("u1", "o1")


@pytest.mark.api
class TestRevokeEndpoint:
    """POST /del/."""

    def test_revoke_success(self, client, stub):
        stub.revoke_result = Success(value=2)

        response = client.post(f"{BASE}/del/", json={"uuid": "u1", "origin": "o1"})

        assert response.json() == {"code": 300}

    def test_revoke_nothing_is_success(self, client, stub):
        stub.revoke_result = Success(value=0)

        response = client.post(f"{BASE}/del/", json={"uuid": "u1", "origin": "o1"})

        assert response.json() == {"code": 300}

    def test_revoke_failure(self, client, stub):
        stub.revoke_result = Failure(
            error=StoreWriteError(
                code=ErrorCode.SESSION_STORE_WRITE_FAILED, message="down"
            )
        )

        response = client.post(f"{BASE}/del/", json={"uuid": "u1", "origin": "o1"})

        assert response.json() == {"code": 301}

    def test_revoke_malformed_body(self, client, stub):
        response = client.post(
            f"{BASE}/del/",
            content="{",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 200
        assert response.json() == {"code": 301}


@pytest.mark.api
class TestEnvelopeHeaders:
    """Response headers and unexpected failures."""

    def test_cors_and_trace_headers(self, client, stub):
        stub.lookup_result = Success(value="TOK")

        response = client.post(f"{BASE}/check/", json={"uuid": "u1", "origin": "o1"})

        assert response.headers["access-control-allow-origin"] == "*"
        assert response.headers["content-type"] == "application/json"
        assert response.headers["x-trace-id"]

    def test_incoming_trace_id_echoed(self, client, stub):
        stub.lookup_result = Success(value="TOK")

        response = client.post(
            f"{BASE}/check/",
            json={"uuid": "u1", "origin": "o1"},
            headers={"X-Trace-Id": "trace-abc"},
        )

        assert response.headers["x-trace-id"] == "trace-abc"

    def test_unexpected_exception_is_500_envelope(self, client, stub):
        stub.raises = RuntimeError("boom")

        response = client.post(f"{BASE}/add/", json={"uuid": "u1", "origin": "o1"})

        assert response.status_code == 500
        assert response.json() == {"code": 201}
        assert "boom" not in response.text
