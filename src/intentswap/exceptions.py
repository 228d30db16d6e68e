"""Exception hierarchy for the swap orchestrator.

Handlers in the agent convert these into user-facing responses; none of
them escape ``SwapAgent.process_message``.
"""

from decimal import Decimal
from typing import Optional


class IntentSwapError(Exception):
    """Base class for all orchestrator errors."""

    pass


class OneClickAPIError(IntentSwapError):
    """Raised when the 1-Click API returns a non-2xx response."""

    def __init__(self, operation: str, status_code: int, body: str):
        self.operation = operation
        self.status_code = status_code
        self.body = body
        super().__init__(f"Failed to {operation}: {status_code} - {body}")


class AddressUnavailable(IntentSwapError):
    """Raised when no valid address exists for a chain."""

    def __init__(self, chain: str, role: str, hint: str = ""):
        self.chain = chain
        self.role = role
        self.hint = hint
        purpose = "for the refund" if role == "refund" else "to receive tokens"
        message = f"I need a valid {chain.upper()} address {purpose}."
        if hint:
            message = f"{message} {hint}"
        super().__init__(message)


class UnsupportedAssetError(IntentSwapError):
    """Raised when an origin asset id cannot be transferred."""

    def __init__(self, asset_id: str):
        self.asset_id = asset_id
        super().__init__(f"Unsupported origin asset format: {asset_id}")


class InsufficientBalanceError(IntentSwapError):
    """Raised when the origin account cannot cover a deposit."""

    def __init__(
        self,
        account_id: str,
        asset: str,
        required: Decimal,
        available: Decimal,
    ):
        self.account_id = account_id
        self.asset = asset
        self.required = required
        self.available = available
        self.shortfall = required - available
        super().__init__(
            f"Insufficient {asset} balance in {account_id}: need {required}, "
            f"have {available} (short by {self.shortfall})"
        )


class NearRpcError(IntentSwapError):
    """Raised when the NEAR RPC returns an error object."""

    def __init__(self, method: str, error: object):
        self.method = method
        self.error = error
        super().__init__(f"NEAR RPC {method} failed: {error}")


class DelegatedSignerError(IntentSwapError):
    """Raised when the delegated signer refuses or fails to sign."""

    pass


class ExecutionSetupError(IntentSwapError):
    """Raised when an executor is missing the material it needs."""

    def __init__(self, message: str, chain: Optional[str] = None):
        self.chain = chain
        super().__init__(message)
