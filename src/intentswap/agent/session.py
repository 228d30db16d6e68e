"""Per-conversation swap state."""

import time
from dataclasses import asdict, dataclass, field
from typing import Optional

from intentswap.execution.base import ExecutionResult
from intentswap.routing.quote_engine import QuoteParams


@dataclass(frozen=True)
class PendingQuote:
    """A quoted swap waiting for the user's confirmation."""

    origin_asset: str
    destination_asset: str
    amount_raw: str
    refund_address: str
    recipient_address: str
    token_in_symbol: str
    token_out_symbol: str
    amount_in_human: str
    origin_chain: str
    dest_chain: str
    origin_decimals: Optional[int] = None

    @property
    def origin_is_near(self) -> bool:
        return self.origin_chain.lower() == "near"

    def to_quote_params(self) -> QuoteParams:
        return QuoteParams(
            origin_asset=self.origin_asset,
            destination_asset=self.destination_asset,
            amount=self.amount_raw,
            refund_address=self.refund_address,
            recipient_address=self.recipient_address,
        )

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "PendingQuote":
        return cls(**data)


@dataclass
class SwapSession:
    """State for one conversation.

    Holds at most one pending quote and the last execution result. All
    mutation goes through the methods below.
    """

    conversation_id: str
    pending_quote: Optional[PendingQuote] = None
    last_result: Optional[ExecutionResult] = None
    created_at: float = field(default_factory=time.time)
    updated_at: float = field(default_factory=time.time)

    def _touch(self) -> None:
        self.updated_at = time.time()

    def set_pending(self, quote: PendingQuote) -> None:
        """Store a new pending quote, replacing any previous one."""
        self.pending_quote = quote
        self._touch()

    def take_pending(self) -> Optional[PendingQuote]:
        """Consume the pending quote."""
        quote = self.pending_quote
        self.pending_quote = None
        self._touch()
        return quote

    def clear_pending(self) -> bool:
        """Drop the pending quote; True if there was one."""
        had_quote = self.pending_quote is not None
        self.pending_quote = None
        self._touch()
        return had_quote

    def record_result(self, result: ExecutionResult) -> None:
        self.last_result = result
        self._touch()
