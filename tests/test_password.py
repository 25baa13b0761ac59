"""
Tests for bcrypt password hashing.
"""

import pytest
from unittest.mock import patch

from auth.password import HashingError, PasswordHasher, hash_password, verify_password


class TestHashPassword:
    def test_verify_accepts_original_password(self):
        digest = hash_password("secret123", rounds=4)
        assert verify_password("secret123", digest) is True

    def test_verify_rejects_wrong_password(self):
        digest = hash_password("secret123", rounds=4)
        assert verify_password("secret124", digest) is False

    def test_digest_is_salted(self):
        a = hash_password("secret123", rounds=4)
        b = hash_password("secret123", rounds=4)
        assert a != b
        assert a.startswith("$2")

    def test_digest_embeds_cost(self):
        digest = hash_password("secret123", rounds=5)
        assert digest.split("$")[2] == "05"

    def test_verify_against_garbage_digest_is_false(self):
        assert verify_password("secret123", "not-a-bcrypt-hash") is False

    def test_primitive_failure_raises_hashing_error(self):
        with patch("auth.password.bcrypt.hashpw", side_effect=ValueError("boom")):
            with pytest.raises(HashingError):
                hash_password("secret123", rounds=4)


class TestPasswordHasher:
    @pytest.mark.asyncio
    async def test_async_round_trip(self):
        hasher = PasswordHasher(rounds=4, max_concurrency=2)
        digest = await hasher.hash("hunter22")
        assert await hasher.verify("hunter22", digest) is True
        assert await hasher.verify("hunter23", digest) is False

    @pytest.mark.asyncio
    async def test_verify_dummy_never_matches(self):
        hasher = PasswordHasher(rounds=4)
        assert await hasher.verify_dummy("unused-dummy-password") is False
