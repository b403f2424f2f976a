"""
TaskHub Backend — Password Digest Tests
"""

import pytest

from taskhub.security import (
    hash_password,
    hash_password_async,
    verify_password,
    verify_password_async,
)


class TestPasswordDigests:

    def test_digest_is_not_the_password(self):
        digest = hash_password("hunter2", rounds=4)

        assert digest != "hunter2"
        assert digest.startswith("$2b$04$")

    def test_same_password_gets_different_salts(self):
        assert hash_password("hunter2", rounds=4) != hash_password("hunter2", rounds=4)

    def test_verify(self):
        digest = hash_password("hunter2", rounds=4)

        assert verify_password("hunter2", digest) is True
        assert verify_password("hunter3", digest) is False

    def test_malformed_digest_is_a_mismatch(self):
        assert verify_password("hunter2", "not-a-bcrypt-digest") is False

    @pytest.mark.asyncio
    async def test_async_wrappers(self):
        digest = await hash_password_async("hunter2", rounds=4)

        assert await verify_password_async("hunter2", digest) is True
        assert await verify_password_async("wrong", digest) is False
