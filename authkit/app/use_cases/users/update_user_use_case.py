"""
Update User Use Cases

Name and role changes by an administrator, and name changes by the
user on their own profile.
"""

from uuid import UUID

from authkit.app.services.context import AuthServices
from authkit.app.services.unit_of_work import UnitOfWork
from authkit.app.use_cases.auth.dtos import UserInfo
from authkit.domain.entities import UserRole
from authkit.result import Error, Result, Return
from .dtos import UpdateProfileCommand, UpdateUserCommand


class UpdateUserUseCase:
    """
    Use case for an administrator editing a user.

    Business Rules:
    - Only first_name, last_name and role are editable
    - Fields left as None are unchanged
    - Email, password and verification state are never touched here
    """

    def __init__(self, uow: UnitOfWork, services: AuthServices):
        self.uow = uow
        self.services = services

    async def execute(self, user_id: UUID, command: UpdateUserCommand) -> Result[UserInfo]:
        role = None
        if command.role is not None:
            try:
                role = UserRole(command.role)
            except ValueError:
                return Return.err(
                    Error(
                        "INVALID_ROLE",
                        f"Invalid role: {command.role}. Must be one of: USER, ADMIN",
                    )
                )

        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            if command.first_name is not None:
                user.first_name = command.first_name
            if command.last_name is not None:
                user.last_name = command.last_name
            if role is not None:
                user.role = role
            user.updated_at = self.services.clock.now()

            user = await self.uow.users.update(user)
            await self.uow.commit()

        return Return.ok(UserInfo.from_user(user))


class UpdateProfileUseCase:
    """Self-service profile edit: names only."""

    def __init__(self, uow: UnitOfWork, services: AuthServices):
        self.uow = uow
        self.services = services

    async def execute(self, user_id: UUID, command: UpdateProfileCommand) -> Result[UserInfo]:
        return await UpdateUserUseCase(self.uow, self.services).execute(
            user_id,
            UpdateUserCommand(first_name=command.first_name, last_name=command.last_name),
        )
