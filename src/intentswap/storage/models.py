"""SQLAlchemy models for conversation sessions."""

import json
from typing import Optional

from sqlalchemy import Float, Index, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from intentswap.agent.session import PendingQuote, SwapSession
from intentswap.execution.base import ExecutionResult


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class SwapSessionRecord(Base):
    """One conversation's pending quote and last execution result.

    Both payloads are stored as JSON text; timestamps are epoch seconds.
    """

    __tablename__ = "swap_sessions"

    conversation_id: Mapped[str] = mapped_column(String(255), primary_key=True)
    pending_quote: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    last_result: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[float] = mapped_column(Float, nullable=False)
    updated_at: Mapped[float] = mapped_column(Float, nullable=False)
    last_active_at: Mapped[float] = mapped_column(Float, nullable=False)

    __table_args__ = (Index("ix_swap_sessions_last_active", "last_active_at"),)

    def to_session(self) -> SwapSession:
        pending = json.loads(self.pending_quote) if self.pending_quote else None
        result = json.loads(self.last_result) if self.last_result else None
        return SwapSession(
            conversation_id=self.conversation_id,
            pending_quote=PendingQuote.from_dict(pending) if pending else None,
            last_result=ExecutionResult.from_dict(result) if result else None,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    def update_from(self, session: SwapSession) -> None:
        self.pending_quote = (
            json.dumps(session.pending_quote.to_dict()) if session.pending_quote else None
        )
        self.last_result = (
            json.dumps(session.last_result.to_dict()) if session.last_result else None
        )
        self.updated_at = session.updated_at

    def __repr__(self) -> str:
        return f"<SwapSessionRecord {self.conversation_id}>"
