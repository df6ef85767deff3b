"""
PasswordResetToken Entity

Secure password reset tokens.
"""

from .token_record import TokenRecord


class PasswordResetToken(TokenRecord, table=True):
    """
    PasswordResetToken entity - one-time proof of reset-request ownership.

    Business Rules:
    - Expires after 1 hour
    - Stored as argon2 hash of 32 random bytes
    - Single-use: deleted on successful consumption
    - A newer request purges the previous token
    """

    __tablename__ = "password_reset_tokens"
