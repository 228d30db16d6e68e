"""Session stores.

The agent only talks to ``SessionStore``; the in-memory store is the
default and the SQL store (``intentswap.storage``) survives restarts.
"""

import logging
from abc import ABC, abstractmethod
from collections import OrderedDict
from typing import Callable, Optional

from intentswap.agent.session import SwapSession

logger = logging.getLogger(__name__)

DEFAULT_MAX_SESSIONS = 500

EvictionCallback = Callable[[str], None]


class SessionStore(ABC):
    """Capacity-bounded map of conversation id -> SwapSession."""

    def __init__(
        self,
        max_sessions: int = DEFAULT_MAX_SESSIONS,
        on_evict: Optional[EvictionCallback] = None,
    ):
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")
        self.max_sessions = max_sessions
        self.on_evict = on_evict

    @abstractmethod
    async def get(self, conversation_id: str) -> Optional[SwapSession]:
        """Get a session without creating it."""

    @abstractmethod
    async def get_or_create(self, conversation_id: str) -> SwapSession:
        """Get a session, creating it (and evicting the oldest) if needed."""

    @abstractmethod
    async def save(self, session: SwapSession) -> None:
        """Persist changes made during a turn."""

    @abstractmethod
    async def delete(self, conversation_id: str) -> bool:
        """Remove a session; True if it existed."""

    @abstractmethod
    async def count(self) -> int:
        """Number of live sessions."""

    def _evicted(self, conversation_id: str) -> None:
        logger.info(f"Evicted session {conversation_id} (store full at {self.max_sessions})")
        if self.on_evict is not None:
            self.on_evict(conversation_id)


class InMemorySessionStore(SessionStore):
    """Bounded in-process store.

    Sessions are ordered by last activity; when full, the least recently
    active one is evicted. Everything is lost on restart.
    """

    def __init__(
        self,
        max_sessions: int = DEFAULT_MAX_SESSIONS,
        on_evict: Optional[EvictionCallback] = None,
    ):
        super().__init__(max_sessions, on_evict)
        self._sessions: OrderedDict[str, SwapSession] = OrderedDict()

    async def get(self, conversation_id: str) -> Optional[SwapSession]:
        return self._sessions.get(conversation_id)

    async def get_or_create(self, conversation_id: str) -> SwapSession:
        session = self._sessions.get(conversation_id)
        if session is not None:
            self._sessions.move_to_end(conversation_id)
            return session

        while len(self._sessions) >= self.max_sessions:
            oldest_id, _ = self._sessions.popitem(last=False)
            self._evicted(oldest_id)

        session = SwapSession(conversation_id=conversation_id)
        self._sessions[conversation_id] = session
        return session

    async def save(self, session: SwapSession) -> None:
        # Sessions are live objects; just refresh recency
        if session.conversation_id in self._sessions:
            self._sessions.move_to_end(session.conversation_id)

    async def delete(self, conversation_id: str) -> bool:
        return self._sessions.pop(conversation_id, None) is not None

    async def count(self) -> int:
        return len(self._sessions)
