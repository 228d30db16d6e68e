"""Engine and session factory for the SQL session store."""

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from intentswap.config import get_settings
from intentswap.storage.models import Base

logger = logging.getLogger(__name__)

_engine: Optional[AsyncEngine] = None
_session_factory: Optional[async_sessionmaker[AsyncSession]] = None


def async_database_url(url: str) -> str:
    """Plain ``sqlite:///`` URLs are switched to the aiosqlite driver."""
    if url.startswith("sqlite:///"):
        return "sqlite+aiosqlite:///" + url[len("sqlite:///"):]
    return url


def get_engine(database_url: Optional[str] = None) -> AsyncEngine:
    """Shared engine, created on first use.

    Args:
        database_url: Overrides ``DATABASE_URL``; only used on first call
    """
    global _engine
    if _engine is None:
        settings = get_settings()
        url = async_database_url(database_url or settings.database_url)
        _engine = create_async_engine(url, echo=settings.debug and not settings.is_production)
        logger.info(f"Session database engine created ({_engine.url.drivername})")
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    global _session_factory
    if _session_factory is None:
        _session_factory = async_sessionmaker(
            bind=get_engine(), class_=AsyncSession, expire_on_commit=False
        )
    return _session_factory


async def init_db(database_url: Optional[str] = None) -> None:
    """Create the ``swap_sessions`` table if it does not exist."""
    async with get_engine(database_url).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    global _engine, _session_factory
    if _engine is None:
        return
    await _engine.dispose()
    _engine = None
    _session_factory = None
    logger.info("Session database engine disposed")
