"""
Token record base

Shared shape of the three token kinds kept by the token store.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import DateTime, Field, SQLModel

from ..base import utcnow


class TokenRecord(SQLModel):
    """
    Columns common to refresh, password-reset and email-verification tokens.

    `token` holds an argon2 digest for hashed kinds and the mailed value
    verbatim for plaintext kinds.
    """

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(foreign_key="users.id", index=True)
    token: str = Field(max_length=255)

    expires_at: datetime = Field(sa_type=DateTime, index=True)
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime)
