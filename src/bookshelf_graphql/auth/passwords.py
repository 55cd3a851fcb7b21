"""
Password hashing for the credential store.

bcrypt salts every hash and its cost factor is tunable, which keeps offline
brute force of a leaked ``users`` table expensive. Comparison goes through
``bcrypt.checkpw``, which compares in constant time.
"""

import asyncio
import logging

import bcrypt

logger = logging.getLogger(__name__)

DEFAULT_ROUNDS = 12
MAX_INPUT_BYTES = 72


class PasswordHasher:
    """Hashes and verifies passwords with a fixed bcrypt cost factor."""

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        if not 4 <= rounds <= 31:
            raise ValueError("bcrypt rounds must be between 4 and 31")
        self.rounds = rounds
        self._dummy_hash: bytes | None = None

    def hash(self, password: str) -> str:
        """Return a salted bcrypt hash of ``password``."""
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("ascii")

    def verify(self, password: str, password_hash: str) -> bool:
        """Check ``password`` against a stored hash.

        A malformed stored hash counts as a mismatch, as does a password
        bcrypt could never have hashed.
        """
        if len(password.encode("utf-8")) > MAX_INPUT_BYTES:
            # Same bcrypt cost as a real comparison
            self.burn(password)
            return False
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("ascii"))
        except ValueError:
            logger.warning("Stored password hash is malformed")
            return False

    def burn(self, password: str) -> None:
        """Spend the same work as ``verify`` without a real account.

        Used on login for unknown usernames so the response time does not
        reveal whether the account exists.
        """
        if self._dummy_hash is None:
            self._dummy_hash = bcrypt.hashpw(b"not-a-real-password", bcrypt.gensalt(self.rounds))
        bcrypt.checkpw(password.encode("utf-8")[:MAX_INPUT_BYTES], self._dummy_hash)

    # bcrypt holds the CPU for the whole cost; keep it off the event loop

    async def hash_async(self, password: str) -> str:
        return await asyncio.to_thread(self.hash, password)

    async def verify_async(self, password: str, password_hash: str) -> bool:
        return await asyncio.to_thread(self.verify, password, password_hash)

    async def burn_async(self, password: str) -> None:
        await asyncio.to_thread(self.burn, password)
