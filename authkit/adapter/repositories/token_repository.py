"""
SQLModel token repository shared by the three token kinds.

Subclasses name the table model; kinds with a `used` column only treat
unused rows as live or replaceable.
"""

from datetime import datetime
from typing import Generic, List, Optional, Type
from uuid import UUID

from sqlalchemy import delete
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from authkit.app.repositories.token_repository import TRecord


class SqlTokenRepository(Generic[TRecord]):
    model: Type[TRecord]

    def __init__(self, session: AsyncSession):
        self.session = session

    def _pending_filters(self) -> list:
        if hasattr(self.model, "used"):
            return [self.model.used == False]  # noqa: E712
        return []

    def build(self, user_id: UUID, token: str, expires_at: datetime) -> TRecord:
        return self.model(user_id=user_id, token=token, expires_at=expires_at)

    async def create(self, record: TRecord) -> TRecord:
        self.session.add(record)
        await self.session.flush()
        await self.session.refresh(record)
        return record

    async def update(self, record: TRecord) -> TRecord:
        self.session.add(record)
        await self.session.flush()
        await self.session.refresh(record)
        return record

    async def delete(self, record: TRecord) -> None:
        await self.session.delete(record)
        await self.session.flush()

    async def delete_by_user_id(self, user_id: UUID) -> int:
        stmt = delete(self.model).where(
            self.model.user_id == user_id, *self._pending_filters()
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def purge_user(self, user_id: UUID) -> int:
        stmt = delete(self.model).where(self.model.user_id == user_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def get_by_user_id(self, user_id: UUID) -> List[TRecord]:
        stmt = (
            select(self.model)
            .where(self.model.user_id == user_id)
            .order_by(self.model.created_at.desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def get_live_by_id(self, record_id: UUID, now: datetime) -> Optional[TRecord]:
        stmt = select(self.model).where(
            self.model.id == record_id,
            self.model.expires_at > now,
            *self._pending_filters(),
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def get_live_by_token(self, token: str, now: datetime) -> Optional[TRecord]:
        stmt = (
            select(self.model)
            .where(
                self.model.token == token,
                self.model.expires_at > now,
                *self._pending_filters(),
            )
            .order_by(self.model.created_at.desc())
        )
        result = await self.session.exec(stmt)
        return result.first()
