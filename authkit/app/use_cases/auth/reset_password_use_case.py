"""
Reset Password Use Case

Consumes a reset token, sets the new password and ends every session.
"""

from typing import Optional

from authkit.app.services.context import AuthServices, RequestInfo
from authkit.app.services.password_strength import evaluate
from authkit.app.services.unit_of_work import UnitOfWork
from authkit.domain.entities import SecurityEventType
from authkit.result import Error, Result, Return
from .dtos import MessageResponse
from .errors import internal_error

INVALID_TOKEN_MESSAGE = "Invalid or expired reset token"


class ResetPasswordUseCase:
    """
    Use case for completing a password reset.

    Business Rules:
    - Token must match a live reset record; it is destroyed on success
    - A weak new password leaves the token usable (nothing is committed)
    - All refresh tokens of the user are revoked
    """

    def __init__(self, uow: UnitOfWork, services: AuthServices):
        self.uow = uow
        self.services = services

    async def execute(
        self,
        token: str,
        new_password: str,
        request_info: Optional[RequestInfo] = None,
    ) -> Result[MessageResponse]:
        try:
            return await self._reset(token, new_password, request_info)
        except Exception as exc:
            return internal_error(
                self.services.events,
                SecurityEventType.PASSWORD_RESET_ERROR,
                request_info,
                exc,
                "An error occurred while resetting the password",
            )

    async def _reset(
        self, token: str, new_password: str, request_info: Optional[RequestInfo]
    ) -> Result[MessageResponse]:
        events = self.services.events

        async with self.uow:
            result = await self.services.reset_tokens.consume(
                self.uow.password_reset_tokens, token
            )
            if result.is_err():
                events.emit(
                    SecurityEventType.PASSWORD_RESET_INVALID_TOKEN,
                    request_info,
                    details={"reason": result.error.code},
                )
                return Return.err(Error("INVALID_TOKEN", INVALID_TOKEN_MESSAGE))

            user = await self.uow.users.get_by_id(result.value.user_id)
            if user is None:
                events.emit(
                    SecurityEventType.PASSWORD_RESET_INVALID_TOKEN,
                    request_info,
                    user_id=result.value.user_id,
                    details={"reason": "USER_NOT_FOUND"},
                )
                return Return.err(Error("INVALID_TOKEN", INVALID_TOKEN_MESSAGE))

            evaluation = evaluate(
                new_password,
                email=user.email,
                first_name=user.first_name,
                last_name=user.last_name,
            )
            if not evaluation.valid:
                events.emit(
                    SecurityEventType.AUTH_FAILURE,
                    request_info,
                    user_id=user.id,
                    details={"flow": "password_reset", "reason": "weak_credential"},
                )
                return Return.err(
                    Error("WEAK_PASSWORD", evaluation.message, evaluation.reasons)
                )

            user.password_hash = await self.services.hasher.hash_async(new_password)
            user.updated_at = self.services.clock.now()
            await self.uow.users.update(user)

            revoked = await self.services.refresh_tokens.revoke_all(
                self.uow.refresh_tokens, user.id
            )

            await self.uow.commit()

        events.emit(
            SecurityEventType.PASSWORD_RESET_SUCCESS,
            request_info,
            user_id=user.id,
            email=user.email,
            details={"sessions_revoked": revoked},
        )
        return Return.ok(MessageResponse(message="Password has been reset successfully"))
