from uuid import UUID

from fastapi import Depends, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from authkit.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from authkit.api.error import ClientError
from authkit.api.utils.request_info import extract_request_info
from authkit.app.services.context import AuthServices, RequestInfo
from authkit.app.services.unit_of_work import UnitOfWork
from authkit.domain.entities import UserRole
from authkit.result import Error

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer(auto_error=False)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_services(request: Request) -> AuthServices:
    return request.app.state.services


def get_request_info(request: Request) -> RequestInfo:
    return extract_request_info(request)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    services: AuthServices = Depends(get_services),
) -> dict:
    """
    Dependency to extract and verify JWT token from Authorization header.

    Returns:
        Decoded JWT payload containing sub, email, role

    Raises:
        ClientError: 401 if token is missing, invalid or expired
    """
    payload = None
    if credentials is not None:
        payload = services.access_tokens.decode(credentials.credentials)

    if payload is None or not payload.get("sub"):
        raise ClientError(
            Error("ACCESS_DENIED", "Invalid or expired token"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )
    return payload


def current_user_id(current_user: dict = Depends(get_current_user)) -> UUID:
    try:
        return UUID(current_user["sub"])
    except ValueError:
        raise ClientError(
            Error("ACCESS_DENIED", "Invalid or expired token"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )


async def require_admin(
    current_user: dict = Depends(get_current_user),
    user_id: UUID = Depends(current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> dict:
    """
    Admit administrators only.

    The role and active flag are read from the user row, not the token
    claims, so a demoted or deactivated admin loses access immediately.
    """
    async with uow:
        user = await uow.users.get_by_id(user_id)
        allowed = (
            user is not None and user.is_active and user.role == UserRole.ADMIN
        )

    if not allowed:
        raise ClientError(
            Error("FORBIDDEN", "Administrator role required"),
            status_code=status.HTTP_403_FORBIDDEN,
        )
    return current_user
