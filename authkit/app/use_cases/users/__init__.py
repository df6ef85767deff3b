"""
User Management Use Cases

Administrator and self-service profile operations.
"""

from .create_user_use_case import CreateUserUseCase
from .get_user_use_case import GetUserUseCase, ListUsersUseCase
from .update_user_use_case import UpdateProfileUseCase, UpdateUserUseCase
from .set_user_active_use_case import SetUserActiveUseCase
from .delete_user_use_case import DeleteUserUseCase
from .dtos import (
    CreateUserCommand,
    UpdateProfileCommand,
    UpdateUserCommand,
    UserListResponse,
)

__all__ = [
    # Use Cases
    "CreateUserUseCase",
    "GetUserUseCase",
    "ListUsersUseCase",
    "UpdateUserUseCase",
    "UpdateProfileUseCase",
    "SetUserActiveUseCase",
    "DeleteUserUseCase",
    # DTOs
    "CreateUserCommand",
    "UpdateUserCommand",
    "UpdateProfileCommand",
    "UserListResponse",
]
