"""Minimal NEAR JSON-RPC client."""

import base64
import json
import logging
from dataclasses import dataclass
from typing import Any, Optional

import base58
import httpx

from intentswap.exceptions import NearRpcError

logger = logging.getLogger(__name__)

NEAR_MAINNET_RPC = "https://rpc.mainnet.fastnear.com"

# Storage staking cost per byte (1e19 yoctoNEAR = 0.00001 NEAR)
STORAGE_PRICE_PER_BYTE = 10**19
YOCTO_PER_NEAR = 10**24


def format_near(yocto: int, places: int = 6) -> str:
    """Render yoctoNEAR as NEAR, truncated to ``places`` decimals."""
    whole, frac = divmod(max(yocto, 0), YOCTO_PER_NEAR)
    frac_str = str(frac).rjust(24, "0")[:places].rstrip("0")
    return f"{whole}.{frac_str}" if frac_str else str(whole)


@dataclass
class NearBalance:
    """Account balance as reported by ``view_account``."""

    account_id: str
    total_yocto: int = 0
    storage_usage: int = 0
    is_initialized: bool = True

    @property
    def available_yocto(self) -> int:
        """Total minus the storage stake, never negative."""
        return max(self.total_yocto - self.storage_usage * STORAGE_PRICE_PER_BYTE, 0)

    @property
    def total_near(self) -> str:
        return format_near(self.total_yocto)

    @property
    def available_near(self) -> str:
        return format_near(self.available_yocto)


def _is_unknown_account(error: Any) -> bool:
    if isinstance(error, dict):
        cause = error.get("cause") or {}
        if isinstance(cause, dict) and cause.get("name") == "UNKNOWN_ACCOUNT":
            return True
    return "does not exist" in str(error)


class NearRpcClient:
    """JSON-RPC calls used by the deposit executors and balance checks."""

    def __init__(
        self,
        url: str = NEAR_MAINNET_RPC,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url
        self.timeout = timeout
        self._transport = transport

    async def call(self, method: str, params: Any, timeout: Optional[float] = None) -> Any:
        """Send one JSON-RPC request and return its ``result``.

        Raises:
            NearRpcError: HTTP failure, an ``error`` member, or a query
                result that itself carries an ``error`` string
        """
        payload = {"jsonrpc": "2.0", "id": "intentswap", "method": method, "params": params}

        async with httpx.AsyncClient(
            timeout=timeout or self.timeout, transport=self._transport
        ) as client:
            response = await client.post(self.url, json=payload)

        if response.status_code != 200:
            raise NearRpcError(method, f"HTTP {response.status_code}: {response.text}")

        data = response.json()
        if "error" in data:
            raise NearRpcError(method, data["error"])

        result = data.get("result")
        # view_access_key and friends report failures inside the result
        if isinstance(result, dict) and "error" in result:
            raise NearRpcError(method, result["error"])
        return result

    async def query(self, request_type: str, **params: Any) -> dict:
        return await self.call(
            "query", {"request_type": request_type, "finality": "final", **params}
        )

    async def get_block_hash(self) -> bytes:
        """Hash of the latest final block, decoded from base58."""
        result = await self.call("block", {"finality": "final"})
        return base58.b58decode(result["header"]["hash"])

    async def view_access_key(self, account_id: str, public_key: str) -> dict:
        return await self.query("view_access_key", account_id=account_id, public_key=public_key)

    async def view_account(self, account_id: str) -> dict:
        return await self.query("view_account", account_id=account_id)

    async def call_view_function(self, contract_id: str, method_name: str, args: dict) -> Any:
        """Run a view method and decode its JSON return value."""
        args_base64 = base64.b64encode(json.dumps(args).encode()).decode()
        result = await self.query(
            "call_function",
            account_id=contract_id,
            method_name=method_name,
            args_base64=args_base64,
        )
        return json.loads(bytes(result["result"]).decode())

    async def ft_balance_of(self, contract_id: str, account_id: str) -> int:
        """NEP-141 token balance in the token's smallest units."""
        value = await self.call_view_function(
            contract_id, "ft_balance_of", {"account_id": account_id}
        )
        return int(value)

    async def get_balance(self, account_id: str) -> NearBalance:
        """NEAR balance; uninitialized accounts come back with zero."""
        try:
            account = await self.view_account(account_id)
        except NearRpcError as e:
            if _is_unknown_account(e.error):
                return NearBalance(account_id=account_id, is_initialized=False)
            raise

        return NearBalance(
            account_id=account_id,
            total_yocto=int(account["amount"]),
            storage_usage=int(account.get("storage_usage", 0)),
        )

    async def broadcast_tx_commit(self, signed_tx: bytes) -> dict:
        """Broadcast and wait for the transaction outcome."""
        encoded = base64.b64encode(signed_tx).decode()
        return await self.call("broadcast_tx_commit", [encoded], timeout=60.0)
