import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from config import ApplicationConfig
from authkit.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from authkit.api.limiter import limiter
from authkit.app.services.credential_hasher import CredentialHasher
from authkit.bootstrap import build_services
from authkit.depends import get_unit_of_work
from tests.fixtures.flows import API, signed_in_user


@pytest_asyncio.fixture
async def default_client(db_session, mail_sender):
    """App built from the shipped defaults, only hashing cost lowered"""
    from authkit.api.app import create_app

    services = build_services(
        ApplicationConfig,
        mail_sender=mail_sender,
        hasher=CredentialHasher(time_cost=1, memory_cost=8, parallelism=1),
    )
    app = create_app(ApplicationConfig, services)
    limiter.reset()

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.mark.asyncio
async def test_default_request_reset_never_returns_the_token(default_client, mail_sender):
    # Arrange
    await signed_in_user(default_client, mail_sender)

    # Act
    known = await default_client.post(
        f"{API}/auth/request-reset", json={"email": "alice@example.com"}
    )
    unknown = await default_client.post(
        f"{API}/auth/request-reset", json={"email": "ghost@example.com"}
    )

    # Assert
    assert known.status_code == unknown.status_code == 200
    assert known.content == unknown.content
    assert "reset_token" not in known.json()
