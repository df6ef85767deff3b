from uuid import UUID

from authkit.app.services.unit_of_work import UnitOfWork
from authkit.app.use_cases.auth.dtos import UserInfo
from authkit.result import Error, Result, Return
from .dtos import UserListResponse


class GetUserUseCase:
    """Look up one user by id. Backs both the admin lookup and /users/profile."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[UserInfo]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))
            return Return.ok(UserInfo.from_user(user))


class ListUsersUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[UserListResponse]:
        async with self.uow:
            users = await self.uow.users.list_all()
            return Return.ok(
                UserListResponse(
                    users=[UserInfo.from_user(u) for u in users],
                    total=len(users),
                )
            )
