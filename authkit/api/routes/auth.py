from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel, EmailStr, Field

from authkit.api.error import ClientError, http_error
from authkit.api.limiter import limiter, rate_limit
from authkit.app.services.context import AuthServices, RequestInfo
from authkit.app.services.unit_of_work import UnitOfWork
from authkit.app.use_cases.auth import (
    CheckPasswordStrengthUseCase,
    LoginResponse,
    LoginUseCase,
    LogoutUseCase,
    MessageResponse,
    PasswordStrengthResponse,
    RefreshTokenResponse,
    RefreshTokenUseCase,
    RegisterCommand,
    RegisterResponse,
    RegisterUseCase,
    RequestPasswordResetResponse,
    RequestPasswordResetUseCase,
    ResendVerificationUseCase,
    ResetPasswordUseCase,
    UserInfo,
    VerifyEmailUseCase,
)
from authkit.app.use_cases.users import GetUserUseCase
from authkit.depends import (
    current_user_id,
    get_request_info,
    get_services,
    get_unit_of_work,
)
from authkit.result import Error

router = APIRouter(prefix="/auth", tags=["Authentication"])


class RegisterRequest(BaseModel):
    """
    Register HTTP request payload

    Shape only; password rules are enforced by the use case so that every
    failed rule is reported at once.
    """

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="User password")
    first_name: Optional[str] = Field(None, max_length=50)
    last_name: Optional[str] = Field(None, max_length=50)


@router.post(
    "/register", status_code=status.HTTP_201_CREATED, response_model=RegisterResponse
)
@limiter.limit(rate_limit("registration"))
async def register(
    request: Request,
    body: RegisterRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    services: AuthServices = Depends(get_services),
    request_info: RequestInfo = Depends(get_request_info),
):
    """
    User Registration

    Creates an unverified account and mails a verification link.
    No tokens are returned.

    Raises:
        - 409 Conflict: Email already exists
        - 400 Bad Request: Weak password or malformed input
    """
    command = RegisterCommand(
        email=body.email,
        password=body.password,
        first_name=body.first_name,
        last_name=body.last_name,
    )

    result = await RegisterUseCase(uow, services).execute(command, request_info)

    if result.is_err():
        raise http_error(result.error)
    return result.value


class LoginRequest(BaseModel):
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="User password")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginResponse)
@limiter.limit(rate_limit("login"))
async def login(
    request: Request,
    body: LoginRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    services: AuthServices = Depends(get_services),
    request_info: RequestInfo = Depends(get_request_info),
):
    """
    User Login

    Raises:
        - 401 Unauthorized: Invalid credentials, disabled or unverified account
    """
    result = await LoginUseCase(uow, services).execute(
        body.email, body.password, request_info
    )

    if result.is_err():
        raise http_error(result.error)
    return result.value


class RefreshRequest(BaseModel):
    user_id: UUID = Field(..., description="Owner of the refresh token")
    refresh_token: str = Field(..., min_length=1, description="Refresh token")


@router.post(
    "/refresh", status_code=status.HTTP_200_OK, response_model=RefreshTokenResponse
)
async def refresh(
    body: RefreshRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    services: AuthServices = Depends(get_services),
    request_info: RequestInfo = Depends(get_request_info),
):
    """
    Rotate the refresh token and issue a new access token

    Raises:
        - 401 Unauthorized: Unknown user, expired or mismatched token
    """
    result = await RefreshTokenUseCase(uow, services).execute(
        body.user_id, body.refresh_token, request_info
    )

    if result.is_err():
        raise http_error(result.error)
    return result.value


@router.post("/logout", status_code=status.HTTP_200_OK, response_model=MessageResponse)
async def logout(
    user_id: UUID = Depends(current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    services: AuthServices = Depends(get_services),
    request_info: RequestInfo = Depends(get_request_info),
):
    """Revoke every refresh token of the authenticated user"""
    result = await LogoutUseCase(uow, services).execute(user_id, request_info)

    if result.is_err():
        raise http_error(result.error)
    return result.value


@router.get("/me", status_code=status.HTTP_200_OK, response_model=UserInfo)
async def get_me(
    user_id: UUID = Depends(current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await GetUserUseCase(uow).execute(user_id)

    if result.is_err():
        # Token outlived its user
        raise ClientError(
            Error("ACCESS_DENIED", "Access denied"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )
    return result.value


class RequestPasswordResetRequest(BaseModel):
    email: EmailStr = Field(..., description="Account email address")


@router.post(
    "/request-reset",
    status_code=status.HTTP_200_OK,
    response_model=RequestPasswordResetResponse,
    response_model_exclude_none=True,
)
@limiter.limit(rate_limit("password_reset_request"))
async def request_password_reset(
    request: Request,
    body: RequestPasswordResetRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    services: AuthServices = Depends(get_services),
    request_info: RequestInfo = Depends(get_request_info),
):
    """
    Request Password Reset

    Always answers with the same generic message, whether or not the
    email belongs to an account.
    """
    result = await RequestPasswordResetUseCase(uow, services).execute(
        body.email, request_info
    )

    if result.is_err():
        raise http_error(result.error)
    return result.value


class ResetPasswordRequest(BaseModel):
    token: str = Field(..., min_length=1, description="Token from the reset email")
    new_password: str = Field(..., min_length=1, description="New password")


@router.post(
    "/reset-password", status_code=status.HTTP_200_OK, response_model=MessageResponse
)
@limiter.limit(rate_limit("password_reset_submit"))
async def reset_password(
    request: Request,
    body: ResetPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    services: AuthServices = Depends(get_services),
    request_info: RequestInfo = Depends(get_request_info),
):
    """
    Reset Password

    Raises:
        - 400 Bad Request: Invalid or expired token, weak password
    """
    result = await ResetPasswordUseCase(uow, services).execute(
        body.token, body.new_password, request_info
    )

    if result.is_err():
        raise http_error(result.error)
    return result.value


class VerifyEmailRequest(BaseModel):
    token: str = Field(..., min_length=1, description="Token from the verification email")


@router.post(
    "/verify-email", status_code=status.HTTP_200_OK, response_model=MessageResponse
)
@limiter.limit(rate_limit("email_verification"))
async def verify_email(
    request: Request,
    body: VerifyEmailRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    services: AuthServices = Depends(get_services),
    request_info: RequestInfo = Depends(get_request_info),
):
    """
    Verify Email

    Raises:
        - 400 Bad Request: Invalid or expired token, already verified
    """
    result = await VerifyEmailUseCase(uow, services).execute(body.token, request_info)

    if result.is_err():
        raise http_error(result.error)
    return result.value


class ResendVerificationRequest(BaseModel):
    email: EmailStr = Field(..., description="Account email address")


@router.post(
    "/resend-verification",
    status_code=status.HTTP_200_OK,
    response_model=MessageResponse,
)
@limiter.limit(rate_limit("email_verification_resend"))
async def resend_verification(
    request: Request,
    body: ResendVerificationRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    services: AuthServices = Depends(get_services),
    request_info: RequestInfo = Depends(get_request_info),
):
    """
    Resend Verification Email

    Raises:
        - 400 Bad Request: Email already verified
    """
    result = await ResendVerificationUseCase(uow, services).execute(
        body.email, request_info
    )

    if result.is_err():
        raise http_error(result.error)
    return result.value


class CheckPasswordStrengthRequest(BaseModel):
    password: str = Field(..., description="Password to score")


@router.post(
    "/check-password-strength",
    status_code=status.HTTP_200_OK,
    response_model=PasswordStrengthResponse,
)
async def check_password_strength(body: CheckPasswordStrengthRequest):
    """Advisory score; never rejects a password"""
    result = await CheckPasswordStrengthUseCase().execute(body.password)
    return result.value
