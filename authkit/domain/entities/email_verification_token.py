"""
EmailVerificationToken Entity

Proves control of the registered email address.
"""

from sqlmodel import Field

from .token_record import TokenRecord


class EmailVerificationToken(TokenRecord, table=True):
    """
    EmailVerificationToken entity.

    Business Rules:
    - Stored in plaintext and matched exactly (mailed verbatim, short-lived)
    - Expires after 24 hours
    - Single-use: used flips False -> True, terminal
    - A resend purges every unused token of the user
    """

    __tablename__ = "email_verification_tokens"

    token: str = Field(max_length=255, unique=True, index=True)
    used: bool = Field(default=False, index=True)
