"""
TaskHub Backend — Auth Service Unit Tests
===========================================

What we test:
    ✅ An unknown email still pays for one bcrypt check
    ✅ The dummy digest is built once per work factor
    ✅ A wrong password checks the stored digest
"""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from taskhub.exceptions import AuthenticationError
from taskhub.models.user import User
from taskhub.schemas.user import LoginRequest
from taskhub.services.auth_service import INVALID_CREDENTIALS_MESSAGE, AuthService


def _result(value=None):
    result = MagicMock()
    result.scalar_one_or_none.return_value = value
    return result


class TestAuthenticate:

    def setup_method(self):
        self.service = AuthService()
        self.payload = LoginRequest(email="nobody@example.com", password="guess")

    @pytest.mark.asyncio
    async def test_unknown_email_verifies_against_dummy_digest(self, mock_db_session):
        mock_db_session.execute.return_value = _result(None)

        with patch(
            "taskhub.services.auth_service.hash_password_async",
            AsyncMock(return_value="$2b$04$dummy"),
        ) as mock_hash, patch(
            "taskhub.services.auth_service.verify_password_async",
            AsyncMock(return_value=False),
        ) as mock_verify:
            with pytest.raises(AuthenticationError) as exc_info:
                await self.service.authenticate(mock_db_session, self.payload, bcrypt_rounds=4)

        assert exc_info.value.message == INVALID_CREDENTIALS_MESSAGE
        mock_hash.assert_awaited_once()
        assert mock_hash.await_args.args[1] == 4
        mock_verify.assert_awaited_once_with("guess", "$2b$04$dummy")

    @pytest.mark.asyncio
    async def test_dummy_digest_is_cached_per_rounds(self, mock_db_session):
        mock_db_session.execute.return_value = _result(None)

        with patch(
            "taskhub.services.auth_service.hash_password_async",
            AsyncMock(return_value="$2b$04$dummy"),
        ) as mock_hash, patch(
            "taskhub.services.auth_service.verify_password_async",
            AsyncMock(return_value=False),
        ) as mock_verify:
            for _ in range(3):
                with pytest.raises(AuthenticationError):
                    await self.service.authenticate(mock_db_session, self.payload, bcrypt_rounds=4)

        assert mock_hash.await_count == 1
        assert mock_verify.await_count == 3

    @pytest.mark.asyncio
    async def test_wrong_password_checks_stored_digest(self, mock_db_session):
        user = User(id=1, username="u1", email="nobody@example.com", password_digest="$2b$04$real")
        mock_db_session.execute.return_value = _result(user)

        with patch(
            "taskhub.services.auth_service.verify_password_async",
            AsyncMock(return_value=False),
        ) as mock_verify:
            with pytest.raises(AuthenticationError):
                await self.service.authenticate(mock_db_session, self.payload)

        mock_verify.assert_awaited_once_with("guess", "$2b$04$real")
