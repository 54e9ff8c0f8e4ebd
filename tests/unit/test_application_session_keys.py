"""Unit tests for the session key strategies.

Tests cover:
- Cache key derivation per keying mode and origin scoping
- Identity validation (required fields, whitespace handling)
- Repository dispatch for find_active / mark_inactive
"""

from unittest.mock import AsyncMock

import pytest
from uuid_extensions import uuid7

from session_gateway.application.services.session_keys import (
    OwnerKeyStrategy,
    TokenKeyStrategy,
    clean,
    key_strategy_for,
)
from session_gateway.core.enums import ErrorCode
from session_gateway.core.result import Failure, Success
from session_gateway.domain.enums import KeyingMode
from session_gateway.domain.errors import SessionBadRequestError
from session_gateway.domain.protocols import SessionRecord


@pytest.mark.unit
class TestClean:
    """Test input normalization."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [(None, None), ("", None), ("   ", None), (" u1 ", "u1"), ("u1", "u1")],
    )
    def test_clean(self, raw, expected):
        assert clean(raw) == expected


@pytest.mark.unit
class TestOwnerKeyStrategy:
    """Test owner-keyed sessions."""

    def test_scoped_key_includes_origin(self):
        strategy = OwnerKeyStrategy(scope_by_origin=True)

        assert strategy.cache_key("u1", "o1") == "session:owner:u1:o1"

    def test_unscoped_key_ignores_origin(self):
        strategy = OwnerKeyStrategy(scope_by_origin=False)

        assert strategy.cache_key("u1", "o1") == "session:owner:u1"

    def test_record_key_matches_lookup_key(self):
        """Test create and lookup agree on the cache slot."""
        strategy = OwnerKeyStrategy(scope_by_origin=True)
        record = SessionRecord(id=uuid7(), token="T", owner="u1", origin="o1")

        target = strategy.identify(owner="u1", origin="o1").value

        assert strategy.record_key(record) == target.cache_key

    def test_identify_strips_whitespace(self):
        strategy = OwnerKeyStrategy(scope_by_origin=True)

        result = strategy.identify(owner=" u1 ", origin=" o1 ")

        assert isinstance(result, Success)
        assert result.value.owner == "u1"
        assert result.value.origin == "o1"
        assert result.value.cache_key == "session:owner:u1:o1"

    def test_identify_requires_owner(self):
        strategy = OwnerKeyStrategy(scope_by_origin=False)

        result = strategy.identify(owner="  ", origin="o1")

        assert isinstance(result, Failure)
        assert isinstance(result.error, SessionBadRequestError)
        assert result.error.code is ErrorCode.SESSION_OWNER_REQUIRED
        assert result.error.field == "uuid"

    def test_identify_requires_origin_when_scoped(self):
        strategy = OwnerKeyStrategy(scope_by_origin=True)

        result = strategy.identify(owner="u1", origin=None)

        assert isinstance(result, Failure)
        assert result.error.code is ErrorCode.SESSION_ORIGIN_REQUIRED

    def test_unscoped_target_drops_origin(self):
        """Test origin never filters the store when scoping is off."""
        strategy = OwnerKeyStrategy(scope_by_origin=False)

        result = strategy.identify(owner="u1", origin="o1")

        assert result.value.origin is None

    async def test_find_and_mark_use_owner_queries(self):
        strategy = OwnerKeyStrategy(scope_by_origin=True)
        target = strategy.identify(owner="u1", origin="o1").value
        repository = AsyncMock()
        repository.find_active_by_owner.return_value = Success(value=None)
        repository.mark_inactive_by_owner.return_value = Success(value=1)

        await strategy.find_active(repository, target)
        await strategy.mark_inactive(repository, target)

        repository.find_active_by_owner.assert_awaited_once_with("u1", "o1")
        repository.mark_inactive_by_owner.assert_awaited_once_with("u1", "o1")
        repository.find_active_by_token.assert_not_called()


@pytest.mark.unit
class TestTokenKeyStrategy:
    """Test token-keyed sessions."""

    def test_key_is_token(self):
        assert TokenKeyStrategy().cache_key("abc") == "session:token:abc"

    def test_identify_requires_token(self):
        result = TokenKeyStrategy().identify(owner="u1", origin="o1", token=None)

        assert isinstance(result, Failure)
        assert result.error.code is ErrorCode.SESSION_TOKEN_REQUIRED
        assert result.error.field == "session"

    def test_owner_is_optional(self):
        result = TokenKeyStrategy().identify(owner=None, token="abc")

        assert isinstance(result, Success)
        assert result.value.owner is None
        assert result.value.token == "abc"

    async def test_find_and_mark_use_token_queries(self):
        strategy = TokenKeyStrategy()
        target = strategy.identify(owner="u1", token="abc").value
        repository = AsyncMock()
        repository.find_active_by_token.return_value = Success(value=None)
        repository.mark_inactive_by_token.return_value = Success(value=0)

        await strategy.find_active(repository, target)
        await strategy.mark_inactive(repository, target)

        repository.find_active_by_token.assert_awaited_once_with("abc")
        repository.mark_inactive_by_token.assert_awaited_once_with("abc", owner="u1")
        repository.find_active_by_owner.assert_not_called()


@pytest.mark.unit
class TestKeyStrategyFor:
    """Test strategy selection."""

    def test_owner_mode(self):
        strategy = key_strategy_for(KeyingMode.OWNER, scope_by_origin=True)

        assert isinstance(strategy, OwnerKeyStrategy)

    def test_token_mode(self):
        strategy = key_strategy_for(KeyingMode.TOKEN, scope_by_origin=True)

        assert isinstance(strategy, TokenKeyStrategy)
