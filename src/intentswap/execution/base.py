"""Deposit executor interface and result types.

Deposit flow:
1. Fetch a live quote to obtain a deposit address
2. Check the origin account can cover the amount
3. Transfer the origin asset to the deposit address
4. Submit the tx hash to 1-Click (best effort)
5. Track settlement by deposit address
"""

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from typing import Optional

from intentswap.exceptions import UnsupportedAssetError
from intentswap.oneclick.models import QuoteDetails

logger = logging.getLogger(__name__)

INTENTS_EXPLORER_URL = "https://explorer.near-intents.org/transactions"
NEARBLOCKS_TX_URL = "https://nearblocks.io/txns"

NATIVE_NEAR_ASSET = "nep141:wrap.near"

_NEP141_RE = re.compile(r"^nep141:(.+)$")


def is_native_near(asset_id: str) -> bool:
    """wNEAR deposits are sent as native NEAR transfers."""
    return asset_id in (NATIVE_NEAR_ASSET, "near") or "wrap.near" in asset_id


def parse_nep141_contract(asset_id: str) -> str:
    """Token contract from a ``nep141:<contract>`` asset id.

    Raises:
        UnsupportedAssetError: The asset id is in any other format
    """
    match = _NEP141_RE.match(asset_id)
    if not match:
        raise UnsupportedAssetError(asset_id)
    return match.group(1)


def explorer_url(deposit_address: str) -> str:
    return f"{INTENTS_EXPLORER_URL}/{deposit_address}"


def near_blocks_url(tx_hash: str) -> str:
    return f"{NEARBLOCKS_TX_URL}/{tx_hash}"


@dataclass
class TransferResult:
    """Result of sending a deposit on chain."""

    success: bool
    tx_hash: Optional[str] = None
    error: Optional[str] = None


@dataclass
class ExecutionResult:
    """Outcome of a confirmed swap; the last one is kept per session."""

    success: bool
    deposit_address: Optional[str] = None
    tx_hash: Optional[str] = None
    error: Optional[str] = None
    explorer_url: Optional[str] = None
    near_blocks_url: Optional[str] = None
    quote: Optional[QuoteDetails] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        data = asdict(self)
        data["quote"] = self.quote.model_dump(mode="json") if self.quote else None
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "ExecutionResult":
        quote = data.get("quote")
        return cls(
            success=data["success"],
            deposit_address=data.get("deposit_address"),
            tx_hash=data.get("tx_hash"),
            error=data.get("error"),
            explorer_url=data.get("explorer_url"),
            near_blocks_url=data.get("near_blocks_url"),
            quote=QuoteDetails.model_validate(quote) if quote else None,
        )


@dataclass(frozen=True)
class NonCriticalResult:
    """Outcome of a best-effort call.

    Callers log it and move on; it never changes the overall result.
    """

    operation: str
    success: bool
    error: Optional[str] = None

    def log(self) -> None:
        if self.success:
            logger.info(f"{self.operation}: ok")
        else:
            logger.warning(f"{self.operation} failed (non-critical): {self.error}")


class DepositExecutor(ABC):
    """Sends an origin asset to a 1-Click deposit address.

    Each transfer mechanism has its own implementation.
    """

    @property
    @abstractmethod
    def account_id(self) -> str:
        """Account the deposit is sent from; also used as refund address."""

    @abstractmethod
    async def send_deposit(
        self,
        origin_asset: str,
        deposit_address: str,
        amount_raw: str,
        decimals: Optional[int] = None,
    ) -> TransferResult:
        """Transfer ``amount_raw`` smallest units of ``origin_asset``.

        Args:
            origin_asset: 1-Click asset id, e.g. ``nep141:wrap.near``
            deposit_address: Address from the live quote
            amount_raw: Integer amount in smallest units
            decimals: Token decimals, used for balance messages

        Returns:
            TransferResult with the tx hash if successful
        """
