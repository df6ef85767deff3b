"""
Refresh Token Use Case

Rotates the refresh token and issues a new access token.
"""

from typing import Optional
from uuid import UUID

from authkit.app.services.context import AuthServices, RequestInfo
from authkit.app.services.unit_of_work import UnitOfWork
from authkit.domain.entities import SecurityEventType
from authkit.result import Error, Result, Return
from .dtos import RefreshTokenResponse
from .errors import internal_error


class RefreshTokenUseCase:
    """
    Use case for refresh token rotation.

    Business Rules:
    - The token must belong to the named user and be unexpired
    - Every failure collapses to ACCESS_DENIED
    - A new refresh token replaces the presented one
    - Concurrent refreshes for the same user: last writer wins
    """

    def __init__(self, uow: UnitOfWork, services: AuthServices):
        self.uow = uow
        self.services = services

    async def execute(
        self,
        user_id: UUID,
        refresh_token: str,
        request_info: Optional[RequestInfo] = None,
    ) -> Result[RefreshTokenResponse]:
        try:
            return await self._refresh(user_id, refresh_token, request_info)
        except Exception as exc:
            return internal_error(
                self.services.events,
                SecurityEventType.TOKEN_REFRESH_ERROR,
                request_info,
                exc,
                "An error occurred while refreshing the session",
                user_id=user_id,
            )

    async def _refresh(
        self, user_id: UUID, refresh_token: str, request_info: Optional[RequestInfo]
    ) -> Result[RefreshTokenResponse]:
        events = self.services.events

        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                events.emit(
                    SecurityEventType.AUTH_FAILURE,
                    request_info,
                    user_id=user_id,
                    details={"flow": "refresh", "reason": "unknown_user"},
                )
                return Return.err(Error("ACCESS_DENIED", "Access denied"))

            result = await self.services.refresh_tokens.consume(
                self.uow.refresh_tokens, refresh_token, user_id=user.id
            )
            if result.is_err():
                events.emit(
                    SecurityEventType.AUTH_FAILURE,
                    request_info,
                    user_id=user.id,
                    details={"flow": "refresh", "reason": result.error.code},
                )
                return Return.err(Error("ACCESS_DENIED", "Access denied"))

            new_refresh_token = await self.services.refresh_tokens.issue(
                self.uow.refresh_tokens, user.id
            )

            await self.uow.commit()

        access_token = self.services.access_tokens.issue(user)
        events.emit(SecurityEventType.TOKEN_REFRESH, request_info, user_id=user.id)

        return Return.ok(
            RefreshTokenResponse(
                access_token=access_token,
                refresh_token=new_refresh_token,
            )
        )
