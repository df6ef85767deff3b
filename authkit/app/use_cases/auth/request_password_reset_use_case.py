"""
Request Password Reset Use Case

Issues a single-use reset token and mails the reset link.
"""

from typing import Optional

from authkit.app.services import mail
from authkit.app.services.context import AuthServices, RequestInfo
from authkit.app.services.unit_of_work import UnitOfWork
from authkit.domain.entities import SecurityEventType, normalize_email
from authkit.result import Result, Return
from .dtos import RequestPasswordResetResponse
from .errors import internal_error

GENERIC_MESSAGE = "If an account with this email exists, a reset link has been sent"


class RequestPasswordResetUseCase:
    """
    Use case for requesting a password reset.

    Business Rules:
    - Always returns the same generic message (no email enumeration)
    - Unknown emails spend one hash computation like the real path
    - A new reset token replaces any previous one of the user
    - The plaintext token only leaves the process by mail
      (and in the response when expose_reset_token is on, for development)
    """

    def __init__(self, uow: UnitOfWork, services: AuthServices):
        self.uow = uow
        self.services = services

    async def execute(
        self, email: str, request_info: Optional[RequestInfo] = None
    ) -> Result[RequestPasswordResetResponse]:
        email = normalize_email(email)
        try:
            return await self._request_reset(email, request_info)
        except Exception as exc:
            return internal_error(
                self.services.events,
                SecurityEventType.PASSWORD_RESET_ERROR,
                request_info,
                exc,
                "An error occurred while requesting a password reset",
                email=email,
            )

    async def _request_reset(
        self, email: str, request_info: Optional[RequestInfo]
    ) -> Result[RequestPasswordResetResponse]:
        events = self.services.events

        async with self.uow:
            user = await self.uow.users.get_by_email(email)

            if user is None:
                await self.services.hasher.hash_async(email)
                events.emit(
                    SecurityEventType.PASSWORD_RESET_INVALID_EMAIL, request_info, email=email
                )
                return Return.ok(RequestPasswordResetResponse(message=GENERIC_MESSAGE))

            reset_token = await self.services.reset_tokens.issue(
                self.uow.password_reset_tokens, user.id
            )

            await self.uow.commit()

        await self.services.mailer.deliver(
            user.email,
            mail.PASSWORD_RESET,
            {
                "first_name": user.first_name or "",
                "reset_url": f"{self.services.frontend_url}/reset-password?token={reset_token}",
            },
        )

        events.emit(
            SecurityEventType.PASSWORD_RESET_REQUEST,
            request_info,
            user_id=user.id,
            email=email,
        )

        return Return.ok(
            RequestPasswordResetResponse(
                message=GENERIC_MESSAGE,
                reset_token=reset_token if self.services.expose_reset_token else None,
            )
        )
