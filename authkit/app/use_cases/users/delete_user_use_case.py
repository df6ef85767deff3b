import logging
from uuid import UUID

from authkit.app.services.unit_of_work import UnitOfWork
from authkit.app.use_cases.auth.dtos import UserInfo
from authkit.result import Error, Result, Return

logger = logging.getLogger(__name__)


class DeleteUserUseCase:
    """
    Use case for deleting a user.

    Business Rules:
    - Every token record of the user goes first (foreign keys)
    - Returns the deleted user's public info
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[UserInfo]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            info = UserInfo.from_user(user)

            await self.uow.refresh_tokens.purge_user(user.id)
            await self.uow.password_reset_tokens.purge_user(user.id)
            await self.uow.email_verification_tokens.purge_user(user.id)
            await self.uow.users.delete(user)

            await self.uow.commit()

        logger.info(f"User {user_id} deleted")
        return Return.ok(info)
