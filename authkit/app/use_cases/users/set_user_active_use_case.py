"""
Activate / Deactivate User Use Case
"""

import logging
from uuid import UUID

from authkit.app.services.context import AuthServices
from authkit.app.services.unit_of_work import UnitOfWork
from authkit.app.use_cases.auth.dtos import UserInfo
from authkit.result import Error, Result, Return

logger = logging.getLogger(__name__)


class SetUserActiveUseCase:
    """
    Use case for toggling a user's active flag.

    Business Rules:
    - Only administrators reach this use case
    - Deactivation revokes every refresh token of the user, so the
      account is locked out once its access token expires
    - Toggling to the current value is a no-op success
    """

    def __init__(self, uow: UnitOfWork, services: AuthServices):
        self.uow = uow
        self.services = services

    async def execute(self, user_id: UUID, active: bool) -> Result[UserInfo]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            user.is_active = active
            user.updated_at = self.services.clock.now()
            user = await self.uow.users.update(user)

            if not active:
                await self.services.refresh_tokens.revoke_all(
                    self.uow.refresh_tokens, user.id
                )

            await self.uow.commit()

        logger.info(f"User {user.id} {'activated' if active else 'deactivated'}")
        return Return.ok(UserInfo.from_user(user))
