from typing import Optional
from uuid import UUID

from authkit.app.services.context import AuthServices, RequestInfo
from authkit.app.services.unit_of_work import UnitOfWork
from authkit.domain.entities import SecurityEventType
from authkit.result import Result, Return
from .dtos import MessageResponse
from .errors import internal_error


class LogoutUseCase:
    """
    Use case for logout.

    Business Rules:
    - Revokes every refresh token of the user
    - Idempotent: logging out twice succeeds twice
    - Outstanding access tokens stay valid until they expire
    """

    def __init__(self, uow: UnitOfWork, services: AuthServices):
        self.uow = uow
        self.services = services

    async def execute(
        self, user_id: UUID, request_info: Optional[RequestInfo] = None
    ) -> Result[MessageResponse]:
        try:
            async with self.uow:
                revoked = await self.services.refresh_tokens.revoke_all(
                    self.uow.refresh_tokens, user_id
                )
                await self.uow.commit()
        except Exception as exc:
            return internal_error(
                self.services.events,
                SecurityEventType.LOGOUT_ERROR,
                request_info,
                exc,
                "An error occurred during logout",
                user_id=user_id,
            )

        self.services.events.emit(
            SecurityEventType.LOGOUT,
            request_info,
            user_id=user_id,
            details={"sessions_revoked": revoked},
        )
        return Return.ok(MessageResponse(message="Logged out successfully"))
