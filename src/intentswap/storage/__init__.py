"""Durable session storage."""

from intentswap.storage.database import (
    async_database_url,
    close_db,
    get_engine,
    get_session_factory,
    init_db,
)
from intentswap.storage.models import Base, SwapSessionRecord
from intentswap.storage.repository import SqlSessionStore

__all__ = [
    "Base",
    "SqlSessionStore",
    "SwapSessionRecord",
    "async_database_url",
    "close_db",
    "get_engine",
    "get_session_factory",
    "init_db",
]
