"""NEAR deposit executors signing with a local key pair."""

import logging
from abc import abstractmethod
from decimal import Decimal
from typing import Optional

import httpx

from intentswap.exceptions import (
    ExecutionSetupError,
    InsufficientBalanceError,
    IntentSwapError,
    NearRpcError,
)
from intentswap.execution.base import (
    DepositExecutor,
    TransferResult,
    is_native_near,
    parse_nep141_contract,
)
from intentswap.execution.near_rpc import YOCTO_PER_NEAR, NearRpcClient
from intentswap.execution.near_tx import (
    Action,
    NearKeyPair,
    Transaction,
    TransferAction,
    encode_public_key,
    ft_transfer_call,
)
from intentswap.resolver import from_smallest_unit

logger = logging.getLogger(__name__)

DEFAULT_FEE_RESERVE = Decimal("0.05")


def build_deposit_actions(
    origin_asset: str, deposit_address: str, amount_raw: str
) -> tuple[str, list[Action]]:
    """Receiver and actions for a deposit.

    Native NEAR goes straight to the deposit address; NEP-141 tokens are
    sent with ``ft_transfer_call`` on the token contract.

    Raises:
        UnsupportedAssetError: The asset id is neither native nor NEP-141
    """
    if is_native_near(origin_asset):
        return deposit_address, [TransferAction(amount=int(amount_raw))]

    contract = parse_nep141_contract(origin_asset)
    return contract, [ft_transfer_call(deposit_address, amount_raw)]


def _yocto_to_near(yocto: int) -> Decimal:
    return Decimal(yocto) / YOCTO_PER_NEAR


def _outcome_failure(outcome: dict) -> Optional[object]:
    status = outcome.get("status")
    if isinstance(status, dict) and "Failure" in status:
        return status["Failure"]
    return None


class NearDepositExecutor(DepositExecutor):
    """Shared NEAR flow: balance check, tx assembly, broadcast.

    Subclasses supply the signature.
    """

    def __init__(
        self,
        account_id: str,
        rpc: NearRpcClient,
        fee_reserve: Decimal = DEFAULT_FEE_RESERVE,
    ):
        self._account_id = account_id
        self.rpc = rpc
        self.fee_reserve = fee_reserve

    @property
    def account_id(self) -> str:
        return self._account_id

    @property
    def fee_reserve_yocto(self) -> int:
        return int(self.fee_reserve * YOCTO_PER_NEAR)

    async def check_balance(
        self, origin_asset: str, amount_raw: str, decimals: Optional[int] = None
    ) -> None:
        """Raise InsufficientBalanceError if the account cannot cover the deposit.

        Native NEAR must cover amount plus the fee reserve. Tokens must cover
        the amount, and the NEAR balance must still cover the reserve.
        """
        balance = await self.rpc.get_balance(self.account_id)
        available = balance.available_yocto
        amount = int(amount_raw)

        if is_native_near(origin_asset):
            required = amount + self.fee_reserve_yocto
            if available < required:
                raise InsufficientBalanceError(
                    self.account_id,
                    "NEAR",
                    _yocto_to_near(required),
                    _yocto_to_near(available),
                )
            return

        contract = parse_nep141_contract(origin_asset)
        token_balance = await self.rpc.ft_balance_of(contract, self.account_id)
        if token_balance < amount:
            scale = decimals if decimals is not None else 0
            raise InsufficientBalanceError(
                self.account_id,
                contract,
                Decimal(from_smallest_unit(str(amount), scale)),
                Decimal(from_smallest_unit(str(token_balance), scale)),
            )

        if available < self.fee_reserve_yocto:
            raise InsufficientBalanceError(
                self.account_id,
                "NEAR",
                self.fee_reserve,
                _yocto_to_near(available),
            )

    async def prepare_transaction(
        self, public_key: bytes, receiver_id: str, actions: list[Action]
    ) -> Transaction:
        """Fill in nonce and recent block hash."""
        access_key = await self.rpc.view_access_key(
            self.account_id, encode_public_key(public_key)
        )
        block_hash = await self.rpc.get_block_hash()
        return Transaction(
            signer_id=self.account_id,
            public_key=public_key,
            nonce=int(access_key["nonce"]) + 1,
            receiver_id=receiver_id,
            block_hash=block_hash,
            actions=actions,
        )

    async def broadcast(self, signed_tx: bytes) -> str:
        """Broadcast and return the tx hash.

        Raises:
            NearRpcError: The transaction executed with a Failure status
        """
        outcome = await self.rpc.broadcast_tx_commit(signed_tx)
        failure = _outcome_failure(outcome)
        if failure is not None:
            raise NearRpcError("broadcast_tx_commit", failure)

        tx_hash = (outcome.get("transaction") or {}).get("hash")
        if not tx_hash:
            tx_hash = (outcome.get("transaction_outcome") or {}).get("id")
        if not tx_hash:
            raise NearRpcError("broadcast_tx_commit", "no transaction hash in outcome")
        return tx_hash

    @abstractmethod
    async def sign_and_send(self, receiver_id: str, actions: list[Action]) -> str:
        """Sign a transaction with these actions, broadcast it, return its hash."""

    async def send_deposit(
        self,
        origin_asset: str,
        deposit_address: str,
        amount_raw: str,
        decimals: Optional[int] = None,
    ) -> TransferResult:
        try:
            receiver_id, actions = build_deposit_actions(origin_asset, deposit_address, amount_raw)
            await self.check_balance(origin_asset, amount_raw, decimals)

            logger.info(
                f"Sending deposit from {self.account_id}: {amount_raw} of {origin_asset} "
                f"-> {deposit_address}"
            )
            tx_hash = await self.sign_and_send(receiver_id, actions)
        except IntentSwapError as e:
            logger.error(f"Deposit from {self.account_id} failed: {e}")
            return TransferResult(success=False, error=str(e))
        except httpx.HTTPError as e:
            logger.error(f"Deposit from {self.account_id} failed: {e}")
            return TransferResult(success=False, error=f"NEAR RPC unreachable: {e}")

        logger.info(f"Deposit sent, tx {tx_hash}")
        return TransferResult(success=True, tx_hash=tx_hash)


class NearKeyPairExecutor(NearDepositExecutor):
    """Signs with an ``ed25519:`` private key.

    Used both for user-imported credentials and for the service-operated
    account configured in settings.
    """

    def __init__(
        self,
        account_id: str,
        private_key: str,
        rpc: NearRpcClient,
        fee_reserve: Decimal = DEFAULT_FEE_RESERVE,
    ):
        if not account_id:
            raise ExecutionSetupError("NEAR account id is required", chain="near")
        super().__init__(account_id, rpc, fee_reserve)
        self.key_pair = NearKeyPair.from_string(private_key)

    async def sign_and_send(self, receiver_id: str, actions: list[Action]) -> str:
        tx = await self.prepare_transaction(self.key_pair.public_key, receiver_id, actions)
        return await self.broadcast(self.key_pair.sign_transaction(tx))
