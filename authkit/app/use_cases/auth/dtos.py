"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
Provides type safety and clear contracts between layers.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from authkit.domain.entities import User


# ============================================================================
# Command DTOs
# ============================================================================


class RegisterCommand(BaseModel):
    """
    Register command - represents validated registration intent

    Created by API layer after request validation passes.
    """

    email: str
    password: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None


# ============================================================================
# Nested Models
# ============================================================================


class UserInfo(BaseModel):
    """Public user information, never carries the password hash"""

    id: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: str
    is_active: bool
    is_email_verified: bool
    email_verified_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_user(cls, user: User) -> "UserInfo":
        return cls(
            id=str(user.id),
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            role=user.role.value,
            is_active=user.is_active,
            is_email_verified=user.is_email_verified,
            email_verified_at=user.email_verified_at,
            created_at=user.created_at,
        )


# ============================================================================
# Response DTOs
# ============================================================================


class RegisterResponse(BaseModel):
    """Response for registration use case. No tokens: registration does not log in."""

    user: UserInfo
    message: str
    requires_email_verification: bool = True


class LoginResponse(BaseModel):
    """Response for user login use case"""

    user: UserInfo
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class RefreshTokenResponse(BaseModel):
    """Response for refresh token use case"""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class MessageResponse(BaseModel):
    """Generic message-only response"""

    message: str


class RequestPasswordResetResponse(BaseModel):
    """
    Response for request password reset use case

    reset_token is only ever filled in development mode.
    """

    message: str
    reset_token: Optional[str] = None


class PasswordStrengthResponse(BaseModel):
    """Response for password strength check"""

    score: int
    is_strong: bool
    feedback: List[str]
    strength: str
