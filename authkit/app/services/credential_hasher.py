"""
Credential Hasher

argon2id hashing for passwords, refresh tokens and password-reset tokens.
Email-verification tokens never pass through here; they are matched exactly.
"""

import asyncio
import logging

from argon2 import PasswordHasher, Type
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

logger = logging.getLogger(__name__)


class CredentialHasher:
    """
    Self-salting, memory-hard hash/verify.

    hash() and verify() are CPU-bound (tens to hundreds of milliseconds with
    production parameters). Request handlers call the *_async variants,
    which run on the default thread pool so the event loop stays responsive.
    """

    def __init__(
        self,
        time_cost: int = 3,
        memory_cost: int = 65536,
        parallelism: int = 4,
    ):
        self._hasher = PasswordHasher(
            time_cost=time_cost,
            memory_cost=memory_cost,
            parallelism=parallelism,
            type=Type.ID,
        )
        self._dummy_hash = None

    def hash(self, secret: str) -> str:
        return self._hasher.hash(secret)

    def verify(self, digest: str, secret: str) -> bool:
        """Constant-time check of secret against digest. Never raises."""
        if not isinstance(digest, str) or not isinstance(secret, str):
            return False
        try:
            return self._hasher.verify(digest, secret)
        except VerifyMismatchError:
            return False
        except (VerificationError, InvalidHashError):
            logger.debug("Rejected malformed credential digest")
            return False
        except Exception:
            logger.exception("Unexpected failure while verifying credential")
            return False

    def dummy_verify(self, secret: str) -> bool:
        """
        Spend the same work as a real verify on a throwaway digest.

        Used when the account does not exist so that the miss costs as much
        as a wrong password. Always returns False.
        """
        if self._dummy_hash is None:
            self._dummy_hash = self._hasher.hash("dummy-credential")
        self.verify(self._dummy_hash, secret)
        return False

    async def hash_async(self, secret: str) -> str:
        return await asyncio.to_thread(self.hash, secret)

    async def verify_async(self, digest: str, secret: str) -> bool:
        return await asyncio.to_thread(self.verify, digest, secret)

    async def dummy_verify_async(self, secret: str) -> bool:
        return await asyncio.to_thread(self.dummy_verify, secret)
