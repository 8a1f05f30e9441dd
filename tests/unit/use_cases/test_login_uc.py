"""Tests for LoginUseCase."""

from unittest.mock import AsyncMock

import pytest

from subsidiary_manager.application.security import hash_password
from subsidiary_manager.application.use_cases.login import LoginUseCase
from subsidiary_manager.core.entities import User, UserRole
from subsidiary_manager.core.exceptions import AuthenticationError


@pytest.fixture
def mock_user_store():
    return AsyncMock()


@pytest.fixture
def mock_session_store():
    return AsyncMock()


@pytest.fixture
def mock_activity_log_store():
    return AsyncMock()


@pytest.fixture
def use_case(mock_user_store, mock_session_store, mock_activity_log_store):
    return LoginUseCase(
        user_store=mock_user_store,
        session_store=mock_session_store,
        activity_log_store=mock_activity_log_store,
        session_ttl_seconds=3600,
    )


@pytest.fixture(scope="module")
def hashed_secret():
    return hash_password("secret")


@pytest.fixture
def account(hashed_secret):
    return User(
        id=3, username="clerk", password=hashed_secret, role=UserRole.STAFF, subsidiary_id=10
    )


class TestLoginUseCase:
    async def test_successful_login(
        self, use_case, mock_user_store, mock_session_store, mock_activity_log_store, account
    ):
        mock_user_store.get_user_by_username.return_value = account

        result = await use_case.execute("clerk", "secret")

        assert result.user.id == 3
        assert result.session.user_id == 3
        assert len(result.session.sid) >= 32
        lifetime = result.session.expires_at - result.session.created_at
        assert lifetime.total_seconds() == 3600
        mock_session_store.set.assert_awaited_once_with(result.session)

        entry = mock_activity_log_store.create_activity_log.call_args[0][0]
        assert entry.action == "login"
        assert entry.subsidiary_id == 10

    async def test_wrong_password(self, use_case, mock_user_store, mock_session_store, account):
        mock_user_store.get_user_by_username.return_value = account

        with pytest.raises(AuthenticationError, match="Invalid username or password"):
            await use_case.execute("clerk", "wrong")
        mock_session_store.set.assert_not_called()

    async def test_unknown_user(self, use_case, mock_user_store, mock_session_store):
        mock_user_store.get_user_by_username.return_value = None

        with pytest.raises(AuthenticationError, match="Invalid username or password"):
            await use_case.execute("ghost", "secret")
        mock_session_store.set.assert_not_called()

    async def test_plaintext_stored_password_never_matches(self, use_case, mock_user_store):
        mock_user_store.get_user_by_username.return_value = User(
            id=4, username="legacy", password="secret", role=UserRole.MHC_ADMIN
        )

        with pytest.raises(AuthenticationError):
            await use_case.execute("legacy", "secret")

    async def test_each_login_gets_new_session(self, use_case, mock_user_store, account):
        mock_user_store.get_user_by_username.return_value = account

        first = await use_case.execute("clerk", "secret")
        second = await use_case.execute("clerk", "secret")

        assert first.session.sid != second.session.sid
