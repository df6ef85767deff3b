from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from authkit.app.services.access_tokens import AccessTokenIssuer
from authkit.app.services.context import AuthServices, RequestInfo
from authkit.app.services.credential_hasher import CredentialHasher
from authkit.app.services.security_events import SecurityEventSink
from tests.fixtures.fakes import FixedClock


def _mock_token_repository():
    repo = MagicMock()
    for name in (
        "create",
        "update",
        "delete",
        "delete_by_user_id",
        "purge_user",
        "get_by_user_id",
        "get_live_by_id",
        "get_live_by_token",
    ):
        setattr(repo, name, AsyncMock())
    return repo


def _mock_token_store():
    store = MagicMock()
    store.issue = AsyncMock(return_value="issued-token")
    store.consume = AsyncMock()
    store.revoke_all = AsyncMock(return_value=1)
    return store


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_email = AsyncMock(return_value=None)
    uow.users.get_by_id = AsyncMock(return_value=None)
    uow.users.list_all = AsyncMock(return_value=[])
    uow.users.create = AsyncMock(side_effect=lambda user: user)
    uow.users.update = AsyncMock(side_effect=lambda user: user)
    uow.users.delete = AsyncMock()

    uow.refresh_tokens = _mock_token_repository()
    uow.password_reset_tokens = _mock_token_repository()
    uow.email_verification_tokens = _mock_token_repository()
    return uow


@pytest.fixture
def fast_hasher():
    """argon2id with minimal cost, same code path as production"""
    return CredentialHasher(time_cost=1, memory_cost=8, parallelism=1)


@pytest.fixture
def clock():
    return FixedClock(datetime(2025, 1, 15, 12, 0, 0))


@pytest.fixture
def services(fast_hasher, clock):
    """AuthServices with real hashing and JWTs, mocked token stores, events and mail"""
    events = MagicMock(spec=SecurityEventSink)
    mailer = MagicMock()
    mailer.deliver = AsyncMock(return_value=True)

    return AuthServices(
        hasher=fast_hasher,
        clock=clock,
        events=events,
        mailer=mailer,
        access_tokens=AccessTokenIssuer("unit-test-secret"),
        refresh_tokens=_mock_token_store(),
        reset_tokens=_mock_token_store(),
        verification_tokens=_mock_token_store(),
        frontend_url="http://localhost:4200",
        admin_email=None,
        expose_reset_token=False,
    )


@pytest.fixture
def request_info():
    return RequestInfo(ip_address="203.0.113.42", user_agent="Mozilla/5.0 Firefox/120.0")

