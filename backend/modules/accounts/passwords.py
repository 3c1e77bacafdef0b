"""
Password hashing for local accounts.

Both operations run in a worker thread to keep the event loop free.
"""

import asyncio

import bcrypt

# bcrypt only looks at the first 72 bytes and newer releases refuse longer input
MAX_PASSWORD_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:MAX_PASSWORD_BYTES]


class PasswordHasher:
    """Hashes and verifies passwords with bcrypt."""

    def __init__(self, rounds: int = 12):
        self._rounds = rounds
        # Verified against when the user is unknown, so a failed login costs
        # the same whether or not the email exists.
        self._dummy_hash = self._hash("dummy-password")

    async def hash(self, password: str) -> str:
        return await asyncio.to_thread(self._hash, password)

    async def verify(self, password: str, password_hash: str | None) -> bool:
        """Check a password against a stored hash. A missing hash never matches."""
        if not password_hash:
            await asyncio.to_thread(self._check, password, self._dummy_hash)
            return False
        return await asyncio.to_thread(self._check, password, password_hash)

    def _hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(_encode(password), salt).decode("utf-8")

    @staticmethod
    def _check(password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))
        except ValueError:
            # Stored value is not a bcrypt hash
            return False
