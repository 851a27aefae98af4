"""Refresh-token hash storage, scoped per user."""
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from finboss.models.user import RefreshToken


class RefreshTokenRepository:
    """Stores one-way hashes of outstanding refresh tokens."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def add(self, user_id: UUID, token_hash: str, max_sessions: int) -> None:
        """Store a hash and evict the oldest entries beyond ``max_sessions``."""
        self.db.add(RefreshToken(user_id=user_id, token_hash=token_hash))
        await self.db.flush()

        result = await self.db.execute(
            select(RefreshToken.id)
            .where(RefreshToken.user_id == user_id)
            .order_by(RefreshToken.created_at.desc(), RefreshToken.id.desc())
            .offset(max_sessions)
        )
        stale_ids = list(result.scalars().all())
        if stale_ids:
            await self.db.execute(delete(RefreshToken).where(RefreshToken.id.in_(stale_ids)))

        await self.db.commit()

    async def exists(self, user_id: UUID, token_hash: str) -> bool:
        result = await self.db.execute(
            select(RefreshToken.id).where(
                RefreshToken.user_id == user_id, RefreshToken.token_hash == token_hash
            )
        )
        return result.first() is not None

    async def consume(self, user_id: UUID, token_hash: str) -> bool:
        """Delete a stored hash. Returns False if it was not stored."""
        result = await self.db.execute(
            delete(RefreshToken).where(
                RefreshToken.user_id == user_id, RefreshToken.token_hash == token_hash
            )
        )
        await self.db.commit()
        return (result.rowcount or 0) > 0

    async def remove_all(self, user_id: UUID, commit: bool = True) -> int:
        result = await self.db.execute(
            delete(RefreshToken).where(RefreshToken.user_id == user_id)
        )
        if commit:
            await self.db.commit()
        return result.rowcount or 0

    async def count(self, user_id: UUID) -> int:
        result = await self.db.execute(
            select(RefreshToken.id).where(RefreshToken.user_id == user_id)
        )
        return len(result.all())
