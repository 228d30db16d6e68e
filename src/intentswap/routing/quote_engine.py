"""Dry-run and live quotes against the 1-Click API."""

import logging
from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from intentswap.oneclick.client import OneClickClient
from intentswap.oneclick.models import (
    DepositType,
    QuoteRequest,
    QuoteResponse,
    RecipientType,
    RefundType,
    SwapType,
)

logger = logging.getLogger(__name__)

DEFAULT_SLIPPAGE_BPS = 100  # 1%
DEFAULT_DEADLINE_SECONDS = 180
DEFAULT_WAITING_TIME_MS = 5000


@dataclass(frozen=True)
class QuoteParams:
    """What to quote: assets, smallest-unit amount and both addresses."""

    origin_asset: str
    destination_asset: str
    amount: str
    refund_address: str
    recipient_address: str

    def with_refund(self, refund_address: Optional[str]) -> "QuoteParams":
        """Copy with a different refund address (ignored when empty)."""
        if not refund_address:
            return self
        return replace(self, refund_address=refund_address)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def format_deadline(moment: datetime) -> str:
    """ISO-8601 UTC with millisecond precision and a ``Z`` suffix."""
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )


class QuoteEngine:
    """Builds quote requests with fixed swap semantics.

    Every request is EXACT_INPUT, deposited on the origin chain, refunded on
    the origin chain and delivered on the destination chain. The deadline is
    fixed at request time; the service enforces it.
    """

    def __init__(
        self,
        client: OneClickClient,
        referral: Optional[str] = None,
        slippage_bps: int = DEFAULT_SLIPPAGE_BPS,
        deadline_seconds: int = DEFAULT_DEADLINE_SECONDS,
        waiting_time_ms: Optional[int] = DEFAULT_WAITING_TIME_MS,
        now: Callable[[], datetime] = _utcnow,
    ):
        self.client = client
        self.referral = referral
        self.slippage_bps = slippage_bps
        self.deadline_seconds = deadline_seconds
        self.waiting_time_ms = waiting_time_ms
        self._now = now

    def build_request(
        self, params: QuoteParams, dry: bool, slippage_bps: Optional[int] = None
    ) -> QuoteRequest:
        deadline = self._now() + timedelta(seconds=self.deadline_seconds)
        return QuoteRequest(
            dry=dry,
            swap_type=SwapType.EXACT_INPUT,
            slippage_tolerance=slippage_bps if slippage_bps is not None else self.slippage_bps,
            origin_asset=params.origin_asset,
            deposit_type=DepositType.ORIGIN_CHAIN,
            destination_asset=params.destination_asset,
            amount=params.amount,
            refund_to=params.refund_address,
            refund_type=RefundType.ORIGIN_CHAIN,
            recipient=params.recipient_address,
            recipient_type=RecipientType.DESTINATION_CHAIN,
            deadline=format_deadline(deadline),
            referral=self.referral,
            quote_waiting_time_ms=self.waiting_time_ms,
        )

    async def dry_quote(self, params: QuoteParams) -> QuoteResponse:
        """Estimate only; the response carries no deposit address."""
        return await self.client.get_quote(self.build_request(params, dry=True))

    async def live_quote(
        self, params: QuoteParams, slippage_bps: Optional[int] = None
    ) -> QuoteResponse:
        """Firm quote with a deposit address valid until the deadline."""
        response = await self.client.get_quote(
            self.build_request(params, dry=False, slippage_bps=slippage_bps)
        )
        if response.quote and response.quote.deposit_address:
            logger.info(f"Live quote issued, deposit address {response.quote.deposit_address}")
        return response
