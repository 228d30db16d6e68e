"""Simulated deposits for dry-run mode and tests."""

import hashlib
import logging
from typing import Optional

import base58

from intentswap.exceptions import UnsupportedAssetError
from intentswap.execution.base import DepositExecutor, TransferResult, is_native_near, parse_nep141_contract

logger = logging.getLogger(__name__)


class SimulatedDepositExecutor(DepositExecutor):
    """Records deposits instead of broadcasting them."""

    def __init__(self, account_id: str = "simulated.near"):
        self._account_id = account_id
        self.transfers: list[dict] = []

    @property
    def account_id(self) -> str:
        return self._account_id

    async def send_deposit(
        self,
        origin_asset: str,
        deposit_address: str,
        amount_raw: str,
        decimals: Optional[int] = None,
    ) -> TransferResult:
        if not is_native_near(origin_asset):
            try:
                parse_nep141_contract(origin_asset)
            except UnsupportedAssetError as e:
                return TransferResult(success=False, error=str(e))

        seed = f"{self.account_id}:{deposit_address}:{amount_raw}:{len(self.transfers)}"
        tx_hash = base58.b58encode(hashlib.sha256(seed.encode()).digest()).decode()

        self.transfers.append(
            {
                "origin_asset": origin_asset,
                "deposit_address": deposit_address,
                "amount_raw": amount_raw,
                "tx_hash": tx_hash,
            }
        )
        logger.info(
            f"[SIMULATED] Deposit {amount_raw} of {origin_asset} to {deposit_address}: {tx_hash}"
        )
        return TransferResult(success=True, tx_hash=tx_hash)
