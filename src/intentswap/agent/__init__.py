"""Conversational swap agent."""

from intentswap.agent.agent import SwapAgent
from intentswap.agent.context import MessageContext
from intentswap.agent.locks import ConversationLock, ConversationLockRegistry, LockTimeoutError
from intentswap.agent.responses import AgentResponse, MessageType
from intentswap.agent.session import PendingQuote, SwapSession
from intentswap.agent.store import InMemorySessionStore, SessionStore

__all__ = [
    "AgentResponse",
    "ConversationLock",
    "ConversationLockRegistry",
    "InMemorySessionStore",
    "LockTimeoutError",
    "MessageContext",
    "MessageType",
    "PendingQuote",
    "SessionStore",
    "SwapAgent",
    "SwapSession",
]
