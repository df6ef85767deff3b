from abc import ABC, abstractmethod
from datetime import datetime
from typing import Generic, List, Optional, TypeVar
from uuid import UUID

from authkit.domain.entities import TokenRecord

TRecord = TypeVar("TRecord", bound=TokenRecord)


class ITokenRepository(ABC, Generic[TRecord]):
    """
    Token repository interface - application layer

    One implementation per token kind. "Live" means unexpired and, for
    kinds with a used flag, unused.
    """

    @abstractmethod
    def build(self, user_id: UUID, token: str, expires_at: datetime) -> TRecord:
        """Instantiate an unsaved record of this kind"""
        pass

    @abstractmethod
    async def create(self, record: TRecord) -> TRecord:
        """Persist a new token record"""
        pass

    @abstractmethod
    async def update(self, record: TRecord) -> TRecord:
        """Update existing token record"""
        pass

    @abstractmethod
    async def delete(self, record: TRecord) -> None:
        """Delete a single token record"""
        pass

    @abstractmethod
    async def delete_by_user_id(self, user_id: UUID) -> int:
        """Delete the user's replaceable tokens. Returns count of deleted records."""
        pass

    @abstractmethod
    async def purge_user(self, user_id: UUID) -> int:
        """Delete every record of the user, used ones included (account removal)"""
        pass

    @abstractmethod
    async def get_by_user_id(self, user_id: UUID) -> List[TRecord]:
        """Get all records for a user, newest first, expired ones included"""
        pass

    @abstractmethod
    async def get_live_by_id(self, record_id: UUID, now: datetime) -> Optional[TRecord]:
        """Get a live record by primary key (selector of hashed kinds)"""
        pass

    @abstractmethod
    async def get_live_by_token(self, token: str, now: datetime) -> Optional[TRecord]:
        """Get a live record by exact token value (plaintext kinds)"""
        pass
