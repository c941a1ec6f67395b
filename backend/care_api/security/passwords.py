"""Password hashing with bcrypt.

bcrypt work is CPU-bound, so both operations run in a worker thread and the
event loop keeps serving other requests while a hash is computed.
"""

import asyncio

import bcrypt

from care_api.logging_config import get_logger

logger = get_logger(__name__)

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72
DEFAULT_ROUNDS = 10


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


class PasswordHasher:
    """Salted one-way hashing with a configurable work factor."""

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        self.rounds = rounds

    def hash_sync(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(_encode(password), salt).decode("utf-8")

    def verify_sync(self, password: str, stored_hash: str) -> bool:
        try:
            return bcrypt.checkpw(_encode(password), stored_hash.encode("utf-8"))
        except (ValueError, TypeError, AttributeError):
            # Unparseable stored hash: treat as a mismatch
            logger.warning("password_hash_unreadable")
            return False

    async def hash(self, password: str) -> str:
        """Hash a plaintext password; the returned string embeds salt and cost."""
        return await asyncio.to_thread(self.hash_sync, password)

    async def verify(self, password: str, stored_hash: str) -> bool:
        """Check a plaintext password against a stored hash. Never raises on mismatch."""
        return await asyncio.to_thread(self.verify_sync, password, stored_hash)
