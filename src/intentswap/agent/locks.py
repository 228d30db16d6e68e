"""Per-conversation locking.

One message per conversation is processed at a time, so a session's
pending quote is never mutated by two turns at once. Different
conversations never wait on each other.
"""

import asyncio
import logging
from typing import Optional

logger = logging.getLogger(__name__)


class LockTimeoutError(Exception):
    """Raised when a lock cannot be acquired within the timeout period."""

    pass


class ConversationLockRegistry:
    """Lazily created ``asyncio.Lock`` per conversation id."""

    def __init__(self):
        self._locks: dict[str, asyncio.Lock] = {}

    def get(self, conversation_id: str) -> asyncio.Lock:
        """Get or create the lock for a conversation."""
        lock = self._locks.get(conversation_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[conversation_id] = lock
        return lock

    def discard(self, conversation_id: str) -> None:
        """Forget an idle conversation's lock (e.g. after session eviction)."""
        lock = self._locks.get(conversation_id)
        if lock is not None and not lock.locked():
            del self._locks[conversation_id]

    def clear(self) -> None:
        """Clear all locks (useful for testing)."""
        self._locks.clear()

    def __len__(self) -> int:
        return len(self._locks)


class ConversationLock:
    """Context manager holding a conversation's lock for one turn.

    Example:
        async with ConversationLock(registry, conversation_id):
            session = await store.get_or_create(conversation_id)
            ...
    """

    def __init__(
        self,
        registry: ConversationLockRegistry,
        conversation_id: str,
        timeout: Optional[float] = 120.0,
    ):
        """Initialize the lock.

        Args:
            registry: Lock registry shared by the agent
            conversation_id: Conversation (session) id
            timeout: Maximum time to wait for lock (None = wait forever)
        """
        self.registry = registry
        self.conversation_id = conversation_id
        self.timeout = timeout
        self._lock: Optional[asyncio.Lock] = None
        self._acquired = False

    async def __aenter__(self) -> "ConversationLock":
        """Acquire the lock."""
        self._lock = self.registry.get(self.conversation_id)

        try:
            if self.timeout:
                self._acquired = await asyncio.wait_for(
                    self._lock.acquire(),
                    timeout=self.timeout,
                )
            else:
                await self._lock.acquire()
                self._acquired = True
        except asyncio.TimeoutError:
            logger.warning(
                f"Lock timeout for conversation {self.conversation_id} after {self.timeout}s"
            )
            raise LockTimeoutError(
                f"Conversation {self.conversation_id} is busy; try again in a moment"
            )

        logger.debug(f"Lock acquired for conversation {self.conversation_id}")
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Release the lock."""
        if self._acquired and self._lock:
            self._lock.release()
            self._acquired = False
            logger.debug(f"Lock released for conversation {self.conversation_id}")
        return False
