"""
Authentication Use Cases

All authentication-related business logic.
"""

from .register_use_case import RegisterUseCase
from .login_use_case import LoginUseCase
from .refresh_token_use_case import RefreshTokenUseCase
from .logout_use_case import LogoutUseCase
from .request_password_reset_use_case import RequestPasswordResetUseCase
from .reset_password_use_case import ResetPasswordUseCase
from .verify_email_use_case import VerifyEmailUseCase
from .resend_verification_use_case import ResendVerificationUseCase
from .check_password_strength_use_case import CheckPasswordStrengthUseCase
from .dtos import (
    RegisterCommand,
    RegisterResponse,
    LoginResponse,
    RefreshTokenResponse,
    MessageResponse,
    RequestPasswordResetResponse,
    PasswordStrengthResponse,
    UserInfo,
)

__all__ = [
    # Use Cases
    "RegisterUseCase",
    "LoginUseCase",
    "RefreshTokenUseCase",
    "LogoutUseCase",
    "RequestPasswordResetUseCase",
    "ResetPasswordUseCase",
    "VerifyEmailUseCase",
    "ResendVerificationUseCase",
    "CheckPasswordStrengthUseCase",
    # DTOs - Commands
    "RegisterCommand",
    # DTOs - Responses
    "RegisterResponse",
    "LoginResponse",
    "RefreshTokenResponse",
    "MessageResponse",
    "RequestPasswordResetResponse",
    "PasswordStrengthResponse",
    # DTOs - Nested Models
    "UserInfo",
]
