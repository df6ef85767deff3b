"""
Login Use Case

Authenticates email + password and issues an access/refresh token pair.
"""

from typing import Optional

from authkit.app.services.context import AuthServices, RequestInfo
from authkit.app.services.unit_of_work import UnitOfWork
from authkit.domain.entities import SecurityEventType, normalize_email
from authkit.result import Error, Result, Return
from .dtos import LoginResponse, UserInfo
from .errors import internal_error

INVALID_CREDENTIALS_MESSAGE = "Invalid credentials"


class LoginUseCase:
    """
    Use case for user login and token issuance.

    Business Rules:
    - Unknown email and wrong password are indistinguishable to the caller
    - An unknown email still costs one full hash verification
    - Credentials are checked before account state, so a disabled or
      unverified account is only revealed to someone holding its password
    - Issuing a refresh token replaces the user's previous one
    """

    def __init__(self, uow: UnitOfWork, services: AuthServices):
        self.uow = uow
        self.services = services

    async def execute(
        self,
        email: str,
        password: str,
        request_info: Optional[RequestInfo] = None,
    ) -> Result[LoginResponse]:
        email = normalize_email(email)
        try:
            return await self._login(email, password, request_info)
        except Exception as exc:
            return internal_error(
                self.services.events,
                SecurityEventType.LOGIN_ERROR,
                request_info,
                exc,
                "An error occurred during login",
                email=email,
            )

    async def _login(
        self, email: str, password: str, request_info: Optional[RequestInfo]
    ) -> Result[LoginResponse]:
        events = self.services.events
        hasher = self.services.hasher

        async with self.uow:
            user = await self.uow.users.get_by_email(email)

            if user is None:
                await hasher.dummy_verify_async(password)
                events.emit(SecurityEventType.LOGIN_INVALID_EMAIL, request_info, email=email)
                return Return.err(
                    Error("INVALID_CREDENTIALS", INVALID_CREDENTIALS_MESSAGE)
                )

            if not await hasher.verify_async(user.password_hash, password):
                events.emit(
                    SecurityEventType.LOGIN_INVALID_PASSWORD,
                    request_info,
                    user_id=user.id,
                    email=email,
                )
                return Return.err(
                    Error("INVALID_CREDENTIALS", INVALID_CREDENTIALS_MESSAGE)
                )

            if not user.is_active:
                events.emit(
                    SecurityEventType.LOGIN_INACTIVE_USER,
                    request_info,
                    user_id=user.id,
                    email=email,
                )
                return Return.err(Error("ACCOUNT_DISABLED", "Account disabled"))

            if not user.is_email_verified:
                events.emit(
                    SecurityEventType.LOGIN_UNVERIFIED_EMAIL,
                    request_info,
                    user_id=user.id,
                    email=email,
                )
                return Return.err(
                    Error(
                        "EMAIL_NOT_VERIFIED",
                        "Please verify your email address before logging in",
                    )
                )

            refresh_token = await self.services.refresh_tokens.issue(
                self.uow.refresh_tokens, user.id
            )

            await self.uow.commit()

        access_token = self.services.access_tokens.issue(user)
        events.emit(
            SecurityEventType.AUTH_SUCCESS, request_info, user_id=user.id, email=email
        )

        return Return.ok(
            LoginResponse(
                user=UserInfo.from_user(user),
                access_token=access_token,
                refresh_token=refresh_token,
            )
        )
