import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from authkit.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from authkit.api.limiter import limiter
from authkit.bootstrap import build_services
from authkit.depends import get_unit_of_work
from tests.fixtures.fakes import RecordingMailSender

GENEROUS_LIMIT = "1000/minute"


class TestConfig(ApplicationConfig):
    __test__ = False

    ENVIRONMENT = "test"
    CREATE_TABLES = False
    LOG_LEVEL = "WARNING"
    JWT_SECRET = "integration-test-secret"
    LOG_SALT = "integration-test-salt"
    ENABLE_SENTRY = 0
    ADMIN_EMAIL = ""
    FRONTEND_URL = "http://frontend.test/"

    # Minimal argon2 cost, same algorithm
    ARGON2_TIME_COST = 1
    ARGON2_MEMORY_COST = 8
    ARGON2_PARALLELISM = 1

    RATE_LIMIT_ENABLED = True
    RATE_LIMITS = {
        name: GENEROUS_LIMIT
        for name in (
            "registration",
            "login",
            "password_reset_request",
            "password_reset_submit",
            "email_verification",
            "email_verification_resend",
        )
    }


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest.fixture
def mail_sender():
    return RecordingMailSender()


@pytest.fixture
def app_config():
    return TestConfig


@pytest.fixture
def services(app_config, mail_sender):
    return build_services(app_config, mail_sender=mail_sender)


@pytest_asyncio.fixture
async def client(db_session, app_config, services):
    from authkit.api.app import create_app

    app = create_app(app_config, services)
    limiter.reset()

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
