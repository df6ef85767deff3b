"""
Auth Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import SecurityEventType, UserRole

# Export all entities
from .user import User, normalize_email
from .token_record import TokenRecord
from .refresh_token import RefreshToken
from .password_reset_token import PasswordResetToken
from .email_verification_token import EmailVerificationToken
from .security_event import SecurityEvent

__all__ = [
    # Enums
    "SecurityEventType",
    "UserRole",
    # Entities
    "User",
    "TokenRecord",
    "RefreshToken",
    "PasswordResetToken",
    "EmailVerificationToken",
    "SecurityEvent",
    # Helpers
    "normalize_email",
]
