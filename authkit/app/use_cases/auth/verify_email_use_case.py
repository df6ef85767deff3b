"""
Verify Email Use Case

Consumes a verification token and marks the address verified.
"""

from typing import Optional

from authkit.app.services.context import AuthServices, RequestInfo
from authkit.app.services.unit_of_work import UnitOfWork
from authkit.domain.entities import SecurityEventType
from authkit.result import Error, Result, Return
from .dtos import MessageResponse
from .errors import internal_error

INVALID_TOKEN_MESSAGE = "Invalid or expired verification token"


class VerifyEmailUseCase:
    """
    Use case for email verification.

    Business Rules:
    - Token must be unused and unexpired; it is marked used on success
    - Verification happens at most once per user
    """

    def __init__(self, uow: UnitOfWork, services: AuthServices):
        self.uow = uow
        self.services = services

    async def execute(
        self, token: str, request_info: Optional[RequestInfo] = None
    ) -> Result[MessageResponse]:
        try:
            return await self._verify(token, request_info)
        except Exception as exc:
            return internal_error(
                self.services.events,
                SecurityEventType.EMAIL_VERIFICATION_ERROR,
                request_info,
                exc,
                "An error occurred during email verification",
            )

    async def _verify(
        self, token: str, request_info: Optional[RequestInfo]
    ) -> Result[MessageResponse]:
        events = self.services.events

        async with self.uow:
            result = await self.services.verification_tokens.consume(
                self.uow.email_verification_tokens, token
            )
            if result.is_err():
                events.emit(
                    SecurityEventType.EMAIL_VERIFICATION_INVALID_TOKEN,
                    request_info,
                    details={"reason": result.error.code},
                )
                return Return.err(Error("INVALID_TOKEN", INVALID_TOKEN_MESSAGE))

            user = await self.uow.users.get_by_id(result.value.user_id)
            if user is None:
                events.emit(
                    SecurityEventType.EMAIL_VERIFICATION_INVALID_TOKEN,
                    request_info,
                    user_id=result.value.user_id,
                    details={"reason": "USER_NOT_FOUND"},
                )
                return Return.err(Error("INVALID_TOKEN", INVALID_TOKEN_MESSAGE))

            if user.is_email_verified:
                events.emit(
                    SecurityEventType.EMAIL_VERIFICATION_ALREADY_VERIFIED,
                    request_info,
                    user_id=user.id,
                    email=user.email,
                )
                return Return.err(Error("ALREADY_VERIFIED", "Email is already verified"))

            now = self.services.clock.now()
            user.is_email_verified = True
            user.email_verified_at = now
            user.updated_at = now
            await self.uow.users.update(user)

            await self.uow.commit()

        events.emit(
            SecurityEventType.EMAIL_VERIFICATION_SUCCESS,
            request_info,
            user_id=user.id,
            email=user.email,
        )
        return Return.ok(MessageResponse(message="Email verified successfully"))
