"""
User Management DTOs

Commands for the administrator and self-service profile surfaces.
"""

from typing import List, Optional

from pydantic import BaseModel

from authkit.app.use_cases.auth.dtos import UserInfo


class CreateUserCommand(BaseModel):
    email: str
    password: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: str = "USER"
    is_email_verified: bool = False


class UpdateUserCommand(BaseModel):
    """Partial update; None leaves the field unchanged"""

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: Optional[str] = None


class UpdateProfileCommand(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class UserListResponse(BaseModel):
    users: List[UserInfo]
    total: int
