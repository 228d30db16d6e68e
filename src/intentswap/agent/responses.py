"""Structured agent responses."""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class MessageType(str, Enum):
    TEXT = "text"
    TOKENS = "tokens"
    CHAINS = "chains"
    QUOTE = "quote"
    LIVE_QUOTE = "live_quote"
    EXECUTION = "execution"
    DEPOSIT_NEEDED = "deposit_needed"
    STATUS = "status"
    ERROR = "error"
    HELP = "help"


class AgentResponse(BaseModel):
    """Human-readable message plus a machine-readable payload."""

    message: str
    type: MessageType = MessageType.TEXT
    data: Optional[dict[str, Any]] = None
    suggested_actions: list[str] = Field(default_factory=list)

    @classmethod
    def error(cls, message: str, *actions: str) -> "AgentResponse":
        return cls(message=message, type=MessageType.ERROR, suggested_actions=list(actions))

    @classmethod
    def text(cls, message: str, *actions: str, data: Optional[dict] = None) -> "AgentResponse":
        return cls(
            message=message, type=MessageType.TEXT, data=data, suggested_actions=list(actions)
        )
