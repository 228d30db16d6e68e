"""SQL-backed session store."""

import logging
import time
from typing import Optional

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from intentswap.agent.session import SwapSession
from intentswap.agent.store import DEFAULT_MAX_SESSIONS, EvictionCallback, SessionStore
from intentswap.storage.models import SwapSessionRecord

logger = logging.getLogger(__name__)


class SqlSessionStore(SessionStore):
    """Session store that survives restarts.

    Same capacity rule as the in-memory store: when full, the least
    recently active conversation is evicted.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        max_sessions: int = DEFAULT_MAX_SESSIONS,
        on_evict: Optional[EvictionCallback] = None,
    ):
        super().__init__(max_sessions, on_evict)
        self.session_factory = session_factory

    async def get(self, conversation_id: str) -> Optional[SwapSession]:
        async with self.session_factory() as db:
            record = await db.get(SwapSessionRecord, conversation_id)
            return record.to_session() if record else None

    async def get_or_create(self, conversation_id: str) -> SwapSession:
        async with self.session_factory() as db:
            record = await db.get(SwapSessionRecord, conversation_id)
            if record is not None:
                record.last_active_at = time.time()
                await db.commit()
                return record.to_session()

            evicted = await self._evict_oldest(db)

            session = SwapSession(conversation_id=conversation_id)
            db.add(
                SwapSessionRecord(
                    conversation_id=conversation_id,
                    created_at=session.created_at,
                    updated_at=session.updated_at,
                    last_active_at=time.time(),
                )
            )
            await db.commit()

        for oldest_id in evicted:
            self._evicted(oldest_id)
        return session

    async def _evict_oldest(self, db: AsyncSession) -> list[str]:
        """Delete least recently active rows until one more fits."""
        total = await db.scalar(select(func.count()).select_from(SwapSessionRecord))
        excess = (total or 0) - self.max_sessions + 1
        if excess <= 0:
            return []

        stmt = (
            select(SwapSessionRecord.conversation_id)
            .order_by(SwapSessionRecord.last_active_at.asc())
            .limit(excess)
        )
        oldest = list((await db.scalars(stmt)).all())
        await db.execute(
            delete(SwapSessionRecord).where(SwapSessionRecord.conversation_id.in_(oldest))
        )
        return oldest

    async def save(self, session: SwapSession) -> None:
        async with self.session_factory() as db:
            record = await db.get(SwapSessionRecord, session.conversation_id)
            if record is None:
                record = SwapSessionRecord(
                    conversation_id=session.conversation_id,
                    created_at=session.created_at,
                )
                db.add(record)
            record.update_from(session)
            record.last_active_at = time.time()
            await db.commit()

    async def delete(self, conversation_id: str) -> bool:
        async with self.session_factory() as db:
            result = await db.execute(
                delete(SwapSessionRecord).where(
                    SwapSessionRecord.conversation_id == conversation_id
                )
            )
            await db.commit()
            return result.rowcount > 0

    async def count(self) -> int:
        async with self.session_factory() as db:
            total = await db.scalar(select(func.count()).select_from(SwapSessionRecord))
            return total or 0
