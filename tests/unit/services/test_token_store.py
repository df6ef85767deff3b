from datetime import datetime, timedelta
from uuid import uuid4

import pytest

from authkit.app.services.credential_hasher import CredentialHasher
from authkit.app.services.token_store import (
    TOKEN_EXPIRED,
    TOKEN_MISMATCH,
    TOKEN_NOT_FOUND,
    TokenStore,
    email_verification_token_policy,
    password_reset_token_policy,
    refresh_token_policy,
)
from authkit.domain.entities import EmailVerificationToken, PasswordResetToken, RefreshToken
from tests.fixtures.fakes import FixedClock, InMemoryTokenRepository


@pytest.fixture
def clock():
    return FixedClock(datetime(2025, 1, 15, 12, 0, 0))


@pytest.fixture
def hasher():
    return CredentialHasher(time_cost=1, memory_cost=8, parallelism=1)


@pytest.fixture
def refresh_store(hasher, clock):
    return TokenStore(refresh_token_policy(), hasher, clock)


@pytest.fixture
def reset_store(hasher, clock):
    return TokenStore(password_reset_token_policy(), hasher, clock)


@pytest.fixture
def verification_store(hasher, clock):
    return TokenStore(email_verification_token_policy(), hasher, clock)


@pytest.mark.asyncio
async def test_issue_returns_plaintext_and_stores_digest(refresh_store):
    # Arrange
    repo = InMemoryTokenRepository(RefreshToken)
    user_id = uuid4()

    # Act
    token = await refresh_store.issue(repo, user_id)

    # Assert
    selector, secret = token.split(".")
    assert len(secret) == 64
    int(secret, 16)
    [record] = repo.records.values()
    assert selector == record.id.hex
    assert record.user_id == user_id
    assert secret not in record.token
    assert record.token.startswith("$argon2id$")
    assert await refresh_store.hasher.verify_async(record.token, secret)


@pytest.mark.asyncio
async def test_issue_sets_expiry_from_policy(refresh_store, clock):
    repo = InMemoryTokenRepository(RefreshToken)

    await refresh_store.issue(repo, uuid4())

    [record] = repo.records.values()
    assert record.expires_at == clock.now() + timedelta(days=7)


@pytest.mark.asyncio
async def test_issue_uses_injected_random_source(hasher, clock):
    store = TokenStore(
        email_verification_token_policy(), hasher, clock, random_bytes=lambda n: b"\x01" * n
    )
    repo = InMemoryTokenRepository(EmailVerificationToken)

    token = await store.issue(repo, uuid4())

    assert token == "01" * 32
    [record] = repo.records.values()
    assert record.token == token


@pytest.mark.asyncio
async def test_second_issue_supersedes_first(refresh_store, clock):
    # Arrange
    repo = InMemoryTokenRepository(RefreshToken)
    user_id = uuid4()
    first = await refresh_store.issue(repo, user_id)
    clock.advance(timedelta(seconds=1))

    # Act
    second = await refresh_store.issue(repo, user_id)

    # Assert
    assert len(repo.records) == 1
    assert (await refresh_store.consume(repo, second, user_id=user_id)).is_ok()
    result = await refresh_store.consume(repo, first, user_id=user_id)
    assert result.is_err()
    assert result.error.code in (TOKEN_NOT_FOUND, TOKEN_MISMATCH)


@pytest.mark.asyncio
async def test_issue_only_replaces_tokens_of_the_same_user(refresh_store):
    repo = InMemoryTokenRepository(RefreshToken)
    alice, bob = uuid4(), uuid4()

    await refresh_store.issue(repo, alice)
    await refresh_store.issue(repo, bob)

    assert {r.user_id for r in repo.records.values()} == {alice, bob}


@pytest.mark.asyncio
async def test_consume_refresh_token_for_user_keeps_record(refresh_store):
    # Arrange
    repo = InMemoryTokenRepository(RefreshToken)
    user_id = uuid4()
    token = await refresh_store.issue(repo, user_id)

    # Act
    result = await refresh_store.consume(repo, token, user_id=user_id)

    # Assert - refresh tokens are only replaced by the next issue
    assert result.is_ok()
    assert result.value.user_id == user_id
    assert len(repo.records) == 1


@pytest.mark.asyncio
async def test_consume_unknown_user_is_not_found(refresh_store):
    repo = InMemoryTokenRepository(RefreshToken)

    result = await refresh_store.consume(repo, "whatever", user_id=uuid4())

    assert result.error.code == TOKEN_NOT_FOUND


@pytest.mark.asyncio
async def test_consume_checks_expiry_before_digest(refresh_store, clock):
    # Arrange
    repo = InMemoryTokenRepository(RefreshToken)
    user_id = uuid4()
    await refresh_store.issue(repo, user_id)
    clock.advance(timedelta(days=7, seconds=1))

    # Act - even a wrong token reports expiry, the digest is never consulted
    result = await refresh_store.consume(repo, "wrong-token", user_id=user_id)

    # Assert
    assert result.error.code == TOKEN_EXPIRED


@pytest.mark.asyncio
async def test_consume_wrong_token_is_mismatch(refresh_store):
    repo = InMemoryTokenRepository(RefreshToken)
    user_id = uuid4()
    await refresh_store.issue(repo, user_id)

    result = await refresh_store.consume(repo, "f" * 64, user_id=user_id)

    assert result.error.code == TOKEN_MISMATCH


@pytest.mark.asyncio
async def test_consume_empty_candidate_is_not_found(refresh_store):
    repo = InMemoryTokenRepository(RefreshToken)

    result = await refresh_store.consume(repo, "", user_id=uuid4())

    assert result.error.code == TOKEN_NOT_FOUND


@pytest.mark.asyncio
async def test_reset_token_is_found_without_user_and_destroyed(reset_store):
    # Arrange
    repo = InMemoryTokenRepository(PasswordResetToken)
    user_id = uuid4()
    await reset_store.issue(repo, uuid4())
    token = await reset_store.issue(repo, user_id)

    # Act
    result = await reset_store.consume(repo, token)

    # Assert
    assert result.is_ok()
    assert result.value.user_id == user_id
    assert all(r.user_id != user_id for r in repo.records.values())

    again = await reset_store.consume(repo, token)
    assert again.error.code == TOKEN_NOT_FOUND


@pytest.mark.asyncio
async def test_expired_reset_token_is_not_found(reset_store, clock):
    repo = InMemoryTokenRepository(PasswordResetToken)
    token = await reset_store.issue(repo, uuid4())
    clock.advance(timedelta(hours=1, seconds=1))

    result = await reset_store.consume(repo, token)

    assert result.error.code == TOKEN_NOT_FOUND


@pytest.mark.asyncio
async def test_verification_token_is_stored_plaintext_and_marked_used(verification_store):
    # Arrange
    repo = InMemoryTokenRepository(EmailVerificationToken)
    user_id = uuid4()
    token = await verification_store.issue(repo, user_id)

    # Act
    result = await verification_store.consume(repo, token)

    # Assert
    assert result.is_ok()
    [record] = repo.records.values()
    assert record.token == token
    assert record.used is True

    again = await verification_store.consume(repo, token)
    assert again.error.code == TOKEN_NOT_FOUND


@pytest.mark.asyncio
async def test_verification_issue_keeps_used_history(verification_store, clock):
    # Arrange
    repo = InMemoryTokenRepository(EmailVerificationToken)
    user_id = uuid4()
    first = await verification_store.issue(repo, user_id)
    await verification_store.consume(repo, first)
    pending = await verification_store.issue(repo, user_id)
    clock.advance(timedelta(seconds=1))

    # Act
    latest = await verification_store.issue(repo, user_id)

    # Assert - the used record stays, the pending one is replaced
    tokens = {r.token: r.used for r in repo.records.values()}
    assert tokens == {first: True, latest: False}
    assert (await verification_store.consume(repo, pending)).is_err()


@pytest.mark.asyncio
async def test_revoke_all_is_idempotent(refresh_store):
    repo = InMemoryTokenRepository(RefreshToken)
    user_id = uuid4()
    await refresh_store.issue(repo, user_id)

    assert await refresh_store.revoke_all(repo, user_id) == 1
    assert await refresh_store.revoke_all(repo, user_id) == 0
    assert repo.records == {}


@pytest.mark.asyncio
async def test_reset_lookup_verifies_only_the_selected_record(reset_store, monkeypatch):
    # Arrange - many live tokens of other users
    repo = InMemoryTokenRepository(PasswordResetToken)
    for _ in range(5):
        await reset_store.issue(repo, uuid4())
    user_id = uuid4()
    token = await reset_store.issue(repo, user_id)
    verified = []
    original = reset_store.hasher.verify_async

    async def counting_verify(digest, secret):
        verified.append(digest)
        return await original(digest, secret)

    monkeypatch.setattr(reset_store.hasher, "verify_async", counting_verify)

    # Act
    result = await reset_store.consume(repo, token)

    # Assert
    assert result.value.user_id == user_id
    assert len(verified) == 1


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "candidate",
    ["f" * 64, "not-a-uuid.abc", "{selector}.", "{selector}." + "0" * 64, "{other}.{secret}"],
)
async def test_malformed_or_forged_reset_token_is_not_found(reset_store, candidate):
    # Arrange
    repo = InMemoryTokenRepository(PasswordResetToken)
    token = await reset_store.issue(repo, uuid4())
    selector, secret = token.split(".")

    # Act
    result = await reset_store.consume(
        repo, candidate.format(selector=selector, secret=secret, other=uuid4().hex)
    )

    # Assert
    assert result.error.code == TOKEN_NOT_FOUND
    assert len(repo.records) == 1


@pytest.mark.asyncio
async def test_refresh_token_with_foreign_selector_is_mismatch(refresh_store):
    repo = InMemoryTokenRepository(RefreshToken)
    user_id = uuid4()
    token = await refresh_store.issue(repo, user_id)
    _, secret = token.split(".")

    result = await refresh_store.consume(repo, f"{uuid4().hex}.{secret}", user_id=user_id)

    assert result.error.code == TOKEN_MISMATCH
