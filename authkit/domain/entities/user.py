"""
User Entity

Represents a person who can authenticate against the service.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow
from .enums import UserRole


def normalize_email(email: str) -> str:
    return email.strip().lower()


class User(SQLModel, table=True):
    """
    User entity - represents a person who can authenticate.

    Business Rules:
    - Email is stored lowercase and must be unique across all users
    - Password stored as argon2id hash
    - is_email_verified flips False -> True exactly once
    - is_active is toggled only by an administrator
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=255)

    first_name: Optional[str] = Field(default=None, max_length=50)
    last_name: Optional[str] = Field(default=None, max_length=50)

    role: UserRole = Field(default=UserRole.USER)
    is_active: bool = Field(default=True)

    is_email_verified: bool = Field(default=False)
    email_verified_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )

    # Timestamps
    created_at: datetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime)
    )
    updated_at: datetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime)
    )

    __table_args__ = (Index("idx_user_email_verified", "is_email_verified"),)
