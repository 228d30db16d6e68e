"""Request and response contracts for the 1-Click API.

Field names are snake_case in Python and camelCase on the wire.
"""

from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SwapType(str, Enum):
    EXACT_INPUT = "EXACT_INPUT"
    EXACT_OUTPUT = "EXACT_OUTPUT"


class DepositType(str, Enum):
    ORIGIN_CHAIN = "ORIGIN_CHAIN"
    INTENTS = "INTENTS"


class RefundType(str, Enum):
    ORIGIN_CHAIN = "ORIGIN_CHAIN"
    INTENTS = "INTENTS"


class RecipientType(str, Enum):
    DESTINATION_CHAIN = "DESTINATION_CHAIN"
    INTENTS = "INTENTS"


class SwapStatus(str, Enum):
    """Settlement status reported by the status endpoint."""

    PENDING_DEPOSIT = "PENDING_DEPOSIT"
    KNOWN_DEPOSIT_TX = "KNOWN_DEPOSIT_TX"
    PROCESSING = "PROCESSING"
    SUCCESS = "SUCCESS"
    INCOMPLETE_DEPOSIT = "INCOMPLETE_DEPOSIT"
    REFUNDED = "REFUNDED"
    FAILED = "FAILED"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES


TERMINAL_STATUSES = frozenset({SwapStatus.SUCCESS, SwapStatus.REFUNDED, SwapStatus.FAILED})


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, use_enum_values=False)


class TokenInfo(_WireModel):
    """A tradable asset as listed by ``GET /v0/tokens``."""

    blockchain: str
    symbol: str
    asset_id: str = Field(..., alias="assetId")
    decimals: Optional[int] = None
    contract_address: Optional[str] = Field(None, alias="contractAddress")
    price: Optional[Decimal] = None
    icon: Optional[str] = None


class QuoteRequest(_WireModel):
    """Body of ``POST /v0/quote``."""

    dry: bool
    swap_type: SwapType = Field(SwapType.EXACT_INPUT, alias="swapType")
    slippage_tolerance: int = Field(100, alias="slippageTolerance")
    origin_asset: str = Field(..., alias="originAsset")
    deposit_type: DepositType = Field(DepositType.ORIGIN_CHAIN, alias="depositType")
    destination_asset: str = Field(..., alias="destinationAsset")
    amount: str
    refund_to: str = Field(..., alias="refundTo")
    refund_type: RefundType = Field(RefundType.ORIGIN_CHAIN, alias="refundType")
    recipient: str
    recipient_type: RecipientType = Field(RecipientType.DESTINATION_CHAIN, alias="recipientType")
    deadline: str
    referral: Optional[str] = None
    quote_waiting_time_ms: Optional[int] = Field(None, alias="quoteWaitingTimeMs")

    def to_wire(self) -> dict:
        """Serialize with camelCase keys and enum values."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class QuoteDetails(_WireModel):
    amount_in: Optional[str] = Field(None, alias="amountIn")
    amount_in_formatted: Optional[str] = Field(None, alias="amountInFormatted")
    amount_in_usd: Optional[str] = Field(None, alias="amountInUsd")
    amount_out: Optional[str] = Field(None, alias="amountOut")
    amount_out_formatted: Optional[str] = Field(None, alias="amountOutFormatted")
    amount_out_usd: Optional[str] = Field(None, alias="amountOutUsd")
    deposit_address: Optional[str] = Field(None, alias="depositAddress")
    time_when_inactive: Optional[str] = Field(None, alias="timeWhenInactive")
    deadline: Optional[str] = None
    time_estimate: Optional[float] = Field(None, alias="timeEstimate")


class QuoteResponse(_WireModel):
    quote: Optional[QuoteDetails] = None
    error: Optional[str] = None


class StatusResponse(_WireModel):
    """Body of ``GET /v0/status``.

    ``timed_out`` is never sent by the service; the poller sets it on the
    synthetic result it returns when attempts run out.
    """

    status: SwapStatus
    deposit_address: Optional[str] = Field(None, alias="depositAddress")
    origin_asset: Optional[str] = Field(None, alias="originAsset")
    destination_asset: Optional[str] = Field(None, alias="destinationAsset")
    amount_in: Optional[str] = Field(None, alias="amountIn")
    amount_out: Optional[str] = Field(None, alias="amountOut")
    tx_hash: Optional[str] = Field(None, alias="txHash")
    error: Optional[str] = None
    timed_out: bool = False


class DepositSubmitRequest(_WireModel):
    tx_hash: str = Field(..., alias="txHash")
    deposit_address: str = Field(..., alias="depositAddress")
