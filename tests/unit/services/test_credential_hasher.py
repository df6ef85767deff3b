import pytest

from authkit.app.services.credential_hasher import CredentialHasher


@pytest.fixture
def hasher():
    return CredentialHasher(time_cost=1, memory_cost=8, parallelism=1)


def test_hash_then_verify_round_trip(hasher):
    digest = hasher.hash("Str0ng!Pass1357")

    assert digest.startswith("$argon2id$")
    assert hasher.verify(digest, "Str0ng!Pass1357") is True
    assert hasher.verify(digest, "Str0ng!Pass1357x") is False


def test_hash_is_self_salting(hasher):
    assert hasher.hash("same-secret") != hasher.hash("same-secret")


@pytest.mark.parametrize("digest", ["", "not-a-hash", "$argon2id$broken", None])
def test_verify_never_raises_on_malformed_digest(hasher, digest):
    assert hasher.verify(digest, "anything") is False


def test_verify_rejects_non_string_secret(hasher):
    digest = hasher.hash("secret")

    assert hasher.verify(digest, None) is False


def test_dummy_verify_is_always_false(hasher):
    assert hasher.dummy_verify("dummy-credential") is False
    assert hasher.dummy_verify("whatever") is False


@pytest.mark.asyncio
async def test_async_variants(hasher):
    digest = await hasher.hash_async("token-value")

    assert await hasher.verify_async(digest, "token-value") is True
    assert await hasher.verify_async(digest, "other-value") is False
    assert await hasher.dummy_verify_async("token-value") is False
