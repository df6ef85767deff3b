"""
Token Store

One state machine shared by the three token kinds:
absent -> active -> (consumed | expired | superseded) -> absent

A TokenPolicy decides the TTL, whether the stored form is an argon2 digest
or the plaintext, and whether a successful consume destroys the record.
Only the plaintext returned by issue() ever leaves the store.

Hashed kinds hand out "<record id hex>.<secret>": the selector locates
one row and only the secret is digested, so a lookup costs one verify.
"""

import secrets
from dataclasses import dataclass
from datetime import timedelta
from typing import Callable, Optional, Tuple
from uuid import UUID

from authkit.app.repositories.token_repository import ITokenRepository
from authkit.app.services.clock import Clock
from authkit.app.services.credential_hasher import CredentialHasher
from authkit.domain.entities import TokenRecord
from authkit.result import Error, Result, Return

TOKEN_BYTES = 32
SELECTOR_SEPARATOR = "."

TOKEN_NOT_FOUND = "TOKEN_NOT_FOUND"
TOKEN_EXPIRED = "TOKEN_EXPIRED"
TOKEN_MISMATCH = "TOKEN_MISMATCH"


@dataclass(frozen=True)
class TokenPolicy:
    name: str
    ttl: timedelta
    hashed: bool
    single_use: bool


def refresh_token_policy(ttl: timedelta = timedelta(days=7)) -> TokenPolicy:
    return TokenPolicy(name="refresh", ttl=ttl, hashed=True, single_use=False)


def password_reset_token_policy(ttl: timedelta = timedelta(hours=1)) -> TokenPolicy:
    return TokenPolicy(name="password_reset", ttl=ttl, hashed=True, single_use=True)


def email_verification_token_policy(ttl: timedelta = timedelta(hours=24)) -> TokenPolicy:
    return TokenPolicy(name="email_verification", ttl=ttl, hashed=False, single_use=True)


def split_token(candidate: str) -> Optional[Tuple[UUID, str]]:
    """Return (record id, secret) for a selector token, None when malformed"""
    selector, separator, secret = candidate.partition(SELECTOR_SEPARATOR)
    if not separator or not secret:
        return None
    try:
        return UUID(hex=selector), secret
    except ValueError:
        return None


class TokenStore:
    def __init__(
        self,
        policy: TokenPolicy,
        hasher: CredentialHasher,
        clock: Clock,
        random_bytes: Callable[[int], bytes] = secrets.token_bytes,
    ):
        self.policy = policy
        self.hasher = hasher
        self.clock = clock
        self.random_bytes = random_bytes

    def _generate(self) -> str:
        return self.random_bytes(TOKEN_BYTES).hex()

    async def issue(self, repository: ITokenRepository, user_id: UUID) -> str:
        """
        Replace the user's token of this kind and return the new plaintext.

        Delete-then-insert is not atomic across concurrent requests for the
        same user; the last writer wins.
        """
        await repository.delete_by_user_id(user_id)

        secret = self._generate()
        record = repository.build(
            user_id=user_id,
            token=secret,
            expires_at=self.clock.now() + self.policy.ttl,
        )
        if not self.policy.hashed:
            await repository.create(record)
            return secret

        record.token = await self.hasher.hash_async(secret)
        await repository.create(record)
        return f"{record.id.hex}{SELECTOR_SEPARATOR}{secret}"

    async def consume(
        self,
        repository: ITokenRepository,
        candidate: str,
        user_id: Optional[UUID] = None,
    ) -> Result[TokenRecord]:
        """
        Locate and verify a presented token.

        With user_id the user's newest record is checked (expiry first, then
        the digest). Without it the selector picks the one live record to
        verify. Single-use kinds are destroyed (reset) or flagged used
        (verification) on success; the caller's unit of work decides
        whether that sticks.
        """
        if not candidate:
            return Return.err(Error(TOKEN_NOT_FOUND, "Token not found"))

        if user_id is not None:
            result = await self._find_for_user(repository, candidate, user_id)
        elif self.policy.hashed:
            result = await self._find_by_selector(repository, candidate)
        else:
            record = await repository.get_live_by_token(candidate, self.clock.now())
            if record is None:
                result = Return.err(Error(TOKEN_NOT_FOUND, "Token not found"))
            else:
                result = Return.ok(record)

        if result.is_ok() and self.policy.single_use:
            await self._finalize(repository, result.value)
        return result

    async def revoke_all(self, repository: ITokenRepository, user_id: UUID) -> int:
        return await repository.delete_by_user_id(user_id)

    async def _matches(self, record: TokenRecord, candidate: str) -> bool:
        if not self.policy.hashed:
            return secrets.compare_digest(record.token, candidate)

        parts = split_token(candidate)
        if parts is None or parts[0] != record.id:
            return False
        return await self.hasher.verify_async(record.token, parts[1])

    async def _find_for_user(
        self, repository: ITokenRepository, candidate: str, user_id: UUID
    ) -> Result[TokenRecord]:
        records = [
            r for r in await repository.get_by_user_id(user_id)
            if not getattr(r, "used", False)
        ]
        if not records:
            return Return.err(Error(TOKEN_NOT_FOUND, "Token not found"))

        now = self.clock.now()
        live = [r for r in records if r.expires_at > now]
        if not live:
            return Return.err(Error(TOKEN_EXPIRED, "Token expired"))

        # Should only ever be one; the newest unexpired record wins.
        record = max(live, key=lambda r: r.created_at)
        if not await self._matches(record, candidate):
            return Return.err(Error(TOKEN_MISMATCH, "Token mismatch"))
        return Return.ok(record)

    async def _find_by_selector(
        self, repository: ITokenRepository, candidate: str
    ) -> Result[TokenRecord]:
        parts = split_token(candidate)
        if parts is not None:
            record = await repository.get_live_by_id(parts[0], self.clock.now())
            if record is not None and await self._matches(record, candidate):
                return Return.ok(record)
        return Return.err(Error(TOKEN_NOT_FOUND, "Token not found"))

    async def _finalize(self, repository: ITokenRepository, record: TokenRecord) -> None:
        if hasattr(record, "used"):
            record.used = True
            await repository.update(record)
        else:
            await repository.delete(record)
