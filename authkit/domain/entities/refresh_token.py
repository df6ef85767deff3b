"""
RefreshToken Entity

The single current session-continuation secret of a user.
"""

from .token_record import TokenRecord


class RefreshToken(TokenRecord, table=True):
    """
    RefreshToken entity.

    Business Rules:
    - At most one per user: every issue deletes all prior records first
    - Stored as argon2 hash, plaintext only ever leaves in the login response
    - Deleted on logout, on password reset, or superseded by the next issue
    - Expires after 7 days
    """

    __tablename__ = "refresh_tokens"
