"""Password hashing domain service."""

import asyncio

import bcrypt

from .base import Service

# bcrypt only looks at the first 72 bytes
BCRYPT_MAX_BYTES = 72


class PasswordHasher(Service):
    """One-way salted password hashing with bcrypt.

    The sync methods are CPU bound; async callers use ``hash_async`` and
    ``verify_async``, which run them in a worker thread.
    """

    def __init__(self, rounds: int = 12) -> None:
        """Initialize password hasher.

        Args:
            rounds: bcrypt work factor
        """
        self.rounds = rounds

    @staticmethod
    def _encode(plaintext: str) -> bytes:
        return plaintext.encode("utf-8")[:BCRYPT_MAX_BYTES]

    def hash(self, plaintext: str) -> str:
        """Hash a password.

        Args:
            plaintext: Raw password

        Returns:
            bcrypt hash string
        """
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(self._encode(plaintext), salt).decode("utf-8")

    def verify(self, plaintext: str, password_hash: str) -> bool:
        """Check a password against a bcrypt hash.

        Malformed hashes never verify.
        """
        try:
            return bcrypt.checkpw(
                self._encode(plaintext), password_hash.encode("utf-8")
            )
        except ValueError:
            return False

    async def hash_async(self, plaintext: str) -> str:
        return await asyncio.to_thread(self.hash, plaintext)

    async def verify_async(self, plaintext: str, password_hash: str) -> bool:
        return await asyncio.to_thread(self.verify, plaintext, password_hash)
