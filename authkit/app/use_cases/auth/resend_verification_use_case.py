"""
Resend Verification Use Case

Replaces the pending verification token and mails a fresh link.
"""

from typing import Optional

from authkit.app.services import mail
from authkit.app.services.context import AuthServices, RequestInfo
from authkit.app.services.unit_of_work import UnitOfWork
from authkit.domain.entities import SecurityEventType, normalize_email
from authkit.result import Error, Result, Return
from .dtos import MessageResponse
from .errors import internal_error

GENERIC_MESSAGE = "If an account with this email exists, a verification link has been sent"


class ResendVerificationUseCase:
    """
    Use case for resending the verification email.

    Business Rules:
    - Unknown emails get the generic success message
    - Already verified accounts get ALREADY_VERIFIED
    - Any unused verification token of the user is replaced
    """

    def __init__(self, uow: UnitOfWork, services: AuthServices):
        self.uow = uow
        self.services = services

    async def execute(
        self, email: str, request_info: Optional[RequestInfo] = None
    ) -> Result[MessageResponse]:
        email = normalize_email(email)
        try:
            return await self._resend(email, request_info)
        except Exception as exc:
            return internal_error(
                self.services.events,
                SecurityEventType.EMAIL_VERIFICATION_RESEND_ERROR,
                request_info,
                exc,
                "An error occurred while resending the verification email",
                email=email,
            )

    async def _resend(
        self, email: str, request_info: Optional[RequestInfo]
    ) -> Result[MessageResponse]:
        events = self.services.events

        async with self.uow:
            user = await self.uow.users.get_by_email(email)

            if user is None:
                events.emit(
                    SecurityEventType.EMAIL_VERIFICATION_RESEND_INVALID_EMAIL,
                    request_info,
                    email=email,
                )
                return Return.ok(MessageResponse(message=GENERIC_MESSAGE))

            if user.is_email_verified:
                events.emit(
                    SecurityEventType.EMAIL_VERIFICATION_RESEND_ALREADY_VERIFIED,
                    request_info,
                    user_id=user.id,
                    email=email,
                )
                return Return.err(Error("ALREADY_VERIFIED", "Email is already verified"))

            verification_token = await self.services.verification_tokens.issue(
                self.uow.email_verification_tokens, user.id
            )

            await self.uow.commit()

        await self.services.mailer.deliver(
            user.email,
            mail.EMAIL_VERIFICATION_RESEND,
            {
                "first_name": user.first_name or "",
                "verification_url": (
                    f"{self.services.frontend_url}/verify-email?token={verification_token}"
                ),
            },
        )

        events.emit(
            SecurityEventType.EMAIL_VERIFICATION_RESEND_SUCCESS,
            request_info,
            user_id=user.id,
            email=email,
        )
        return Return.ok(MessageResponse(message=GENERIC_MESSAGE))
