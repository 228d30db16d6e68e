"""1-Click settlement service client and wire contracts."""

from intentswap.oneclick.client import ONECLICK_MAINNET, OneClickClient
from intentswap.oneclick.models import (
    TERMINAL_STATUSES,
    QuoteDetails,
    QuoteRequest,
    QuoteResponse,
    StatusResponse,
    SwapStatus,
    SwapType,
    TokenInfo,
)

__all__ = [
    "ONECLICK_MAINNET",
    "OneClickClient",
    "QuoteDetails",
    "QuoteRequest",
    "QuoteResponse",
    "StatusResponse",
    "SwapStatus",
    "SwapType",
    "TERMINAL_STATUSES",
    "TokenInfo",
]
