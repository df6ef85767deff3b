"""
Create User Use Case

Administrator-side account creation.
"""

import logging

from authkit.app.repositories.errors import DuplicateEmailError
from authkit.app.services.context import AuthServices
from authkit.app.services.password_strength import evaluate
from authkit.app.services.unit_of_work import UnitOfWork
from authkit.app.use_cases.auth.dtos import UserInfo
from authkit.domain.entities import User, UserRole, normalize_email
from authkit.result import Error, Result, Return
from .dtos import CreateUserCommand

logger = logging.getLogger(__name__)


class CreateUserUseCase:
    """
    Use case for creating a user as an administrator.

    Business Rules:
    - Same email normalization, uniqueness and password rules as registration
    - Role is chosen by the administrator
    - No verification mail is sent; the administrator decides the verified flag
    """

    def __init__(self, uow: UnitOfWork, services: AuthServices):
        self.uow = uow
        self.services = services

    async def execute(self, command: CreateUserCommand) -> Result[UserInfo]:
        email = normalize_email(command.email)

        try:
            role = UserRole(command.role)
        except ValueError:
            return Return.err(
                Error("INVALID_ROLE", f"Invalid role: {command.role}. Must be one of: USER, ADMIN")
            )

        async with self.uow:
            if await self.uow.users.get_by_email(email):
                return Return.err(
                    Error("EMAIL_ALREADY_EXISTS", "An account with this email already exists")
                )

            evaluation = evaluate(
                command.password,
                email=email,
                first_name=command.first_name,
                last_name=command.last_name,
            )
            if not evaluation.valid:
                return Return.err(
                    Error("WEAK_PASSWORD", evaluation.message, evaluation.reasons)
                )

            now = self.services.clock.now()
            user = User(
                email=email,
                password_hash=await self.services.hasher.hash_async(command.password),
                first_name=command.first_name,
                last_name=command.last_name,
                role=role,
                is_active=True,
                is_email_verified=command.is_email_verified,
                email_verified_at=now if command.is_email_verified else None,
                created_at=now,
                updated_at=now,
            )

            try:
                user = await self.uow.users.create(user)
            except DuplicateEmailError:
                return Return.err(
                    Error("EMAIL_ALREADY_EXISTS", "An account with this email already exists")
                )

            await self.uow.commit()

        logger.info(f"User {user.id} created with role {role.value}")
        return Return.ok(UserInfo.from_user(user))
