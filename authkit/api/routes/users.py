from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field

from authkit.api.error import http_error
from authkit.app.services.context import AuthServices
from authkit.app.services.unit_of_work import UnitOfWork
from authkit.app.use_cases.auth import UserInfo
from authkit.app.use_cases.users import (
    CreateUserCommand,
    CreateUserUseCase,
    DeleteUserUseCase,
    GetUserUseCase,
    ListUsersUseCase,
    SetUserActiveUseCase,
    UpdateProfileCommand,
    UpdateProfileUseCase,
    UpdateUserCommand,
    UpdateUserUseCase,
    UserListResponse,
)
from authkit.depends import current_user_id, get_services, get_unit_of_work, require_admin
from authkit.domain.entities import UserRole

router = APIRouter(prefix="/users", tags=["Users"])


# ============================================================================
# Self-service profile
# ============================================================================


class UpdateProfileRequest(BaseModel):
    first_name: Optional[str] = Field(None, max_length=50)
    last_name: Optional[str] = Field(None, max_length=50)


@router.get("/profile", status_code=status.HTTP_200_OK, response_model=UserInfo)
async def get_profile(
    user_id: UUID = Depends(current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await GetUserUseCase(uow).execute(user_id)

    if result.is_err():
        raise http_error(result.error)
    return result.value


@router.patch("/profile", status_code=status.HTTP_200_OK, response_model=UserInfo)
async def update_profile(
    body: UpdateProfileRequest,
    user_id: UUID = Depends(current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    services: AuthServices = Depends(get_services),
):
    command = UpdateProfileCommand(first_name=body.first_name, last_name=body.last_name)
    result = await UpdateProfileUseCase(uow, services).execute(user_id, command)

    if result.is_err():
        raise http_error(result.error)
    return result.value


# ============================================================================
# Administration (role ADMIN)
# ============================================================================


class CreateUserRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)
    first_name: Optional[str] = Field(None, max_length=50)
    last_name: Optional[str] = Field(None, max_length=50)
    role: UserRole = UserRole.USER
    is_email_verified: bool = False


class UpdateUserRequest(BaseModel):
    first_name: Optional[str] = Field(None, max_length=50)
    last_name: Optional[str] = Field(None, max_length=50)
    role: Optional[UserRole] = None


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=UserInfo,
    dependencies=[Depends(require_admin)],
)
async def create_user(
    body: CreateUserRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    services: AuthServices = Depends(get_services),
):
    """
    Create User (admin)

    Raises:
        - 403 Forbidden: Caller is not an administrator
        - 409 Conflict: Email already exists
        - 400 Bad Request: Weak password
    """
    command = CreateUserCommand(
        email=body.email,
        password=body.password,
        first_name=body.first_name,
        last_name=body.last_name,
        role=body.role.value,
        is_email_verified=body.is_email_verified,
    )
    result = await CreateUserUseCase(uow, services).execute(command)

    if result.is_err():
        raise http_error(result.error)
    return result.value


@router.get(
    "",
    status_code=status.HTTP_200_OK,
    response_model=UserListResponse,
    dependencies=[Depends(require_admin)],
)
async def list_users(uow: UnitOfWork = Depends(get_unit_of_work)):
    result = await ListUsersUseCase(uow).execute()

    if result.is_err():
        raise http_error(result.error)
    return result.value


@router.get(
    "/{user_id}",
    status_code=status.HTTP_200_OK,
    response_model=UserInfo,
    dependencies=[Depends(require_admin)],
)
async def get_user(user_id: UUID, uow: UnitOfWork = Depends(get_unit_of_work)):
    result = await GetUserUseCase(uow).execute(user_id)

    if result.is_err():
        raise http_error(result.error)
    return result.value


@router.patch(
    "/{user_id}",
    status_code=status.HTTP_200_OK,
    response_model=UserInfo,
    dependencies=[Depends(require_admin)],
)
async def update_user(
    user_id: UUID,
    body: UpdateUserRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    services: AuthServices = Depends(get_services),
):
    command = UpdateUserCommand(
        first_name=body.first_name,
        last_name=body.last_name,
        role=body.role.value if body.role else None,
    )
    result = await UpdateUserUseCase(uow, services).execute(user_id, command)

    if result.is_err():
        raise http_error(result.error)
    return result.value


@router.patch(
    "/{user_id}/deactivate",
    status_code=status.HTTP_200_OK,
    response_model=UserInfo,
    dependencies=[Depends(require_admin)],
)
async def deactivate_user(
    user_id: UUID,
    uow: UnitOfWork = Depends(get_unit_of_work),
    services: AuthServices = Depends(get_services),
):
    """Deactivate a user and revoke their refresh tokens"""
    result = await SetUserActiveUseCase(uow, services).execute(user_id, active=False)

    if result.is_err():
        raise http_error(result.error)
    return result.value


@router.patch(
    "/{user_id}/activate",
    status_code=status.HTTP_200_OK,
    response_model=UserInfo,
    dependencies=[Depends(require_admin)],
)
async def activate_user(
    user_id: UUID,
    uow: UnitOfWork = Depends(get_unit_of_work),
    services: AuthServices = Depends(get_services),
):
    result = await SetUserActiveUseCase(uow, services).execute(user_id, active=True)

    if result.is_err():
        raise http_error(result.error)
    return result.value


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_200_OK,
    response_model=UserInfo,
    dependencies=[Depends(require_admin)],
)
async def delete_user(user_id: UUID, uow: UnitOfWork = Depends(get_unit_of_work)):
    result = await DeleteUserUseCase(uow).execute(user_id)

    if result.is_err():
        raise http_error(result.error)
    return result.value
