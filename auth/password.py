"""
Password hashing and verification.

Uses bcrypt for password hashing with automatic
salting and configurable work factor.  The digest carries its own salt
and cost, so nothing besides the digest needs to be stored.
"""

from __future__ import annotations

import asyncio

import bcrypt


class HashingError(Exception):
    """The bcrypt primitive itself failed."""


def hash_password(password: str, rounds: int = 12) -> str:
    """Hash a password with bcrypt (auto-salted, work factor ``rounds``)."""
    try:
        return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=rounds)).decode()
    except (ValueError, TypeError) as exc:
        raise HashingError(str(exc)) from exc


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time comparison against a bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except (ValueError, TypeError):
        return False


class PasswordHasher:
    """
    Async front for the bcrypt helpers.

    bcrypt is deliberately slow, so every call runs in a worker thread and
    at most ``max_concurrency`` of them are in flight at once.
    """

    def __init__(self, rounds: int = 12, max_concurrency: int = 4):
        self.rounds = rounds
        self._semaphore = asyncio.Semaphore(max_concurrency)
        # Same cost as real digests, so a lookup miss takes as long as a mismatch.
        self._dummy_hash = hash_password("unused-dummy-password", rounds)

    async def hash(self, password: str) -> str:
        async with self._semaphore:
            return await asyncio.to_thread(hash_password, password, self.rounds)

    async def verify(self, password: str, password_hash: str) -> bool:
        async with self._semaphore:
            return await asyncio.to_thread(verify_password, password, password_hash)

    async def verify_dummy(self, password: str) -> bool:
        """Spend one verify on a throwaway digest; always False."""
        await self.verify(password, self._dummy_hash)
        return False
