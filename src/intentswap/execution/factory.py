"""Factory for deposit executors."""

import logging
from typing import Optional

from intentswap.config import Settings
from intentswap.execution.base import DepositExecutor
from intentswap.execution.near import NearKeyPairExecutor
from intentswap.execution.near_rpc import NearRpcClient
from intentswap.execution.privy import DelegatedSignerExecutor, PrivyClient
from intentswap.execution.simulated import SimulatedDepositExecutor
from intentswap.execution.strategy import (
    DelegatedSigning,
    ExecutionStrategy,
    ImportedCredentials,
    ServiceAccount,
)

logger = logging.getLogger(__name__)


def build_privy_client(settings: Settings) -> PrivyClient:
    return PrivyClient(
        app_id=settings.privy_app_id,
        app_secret=settings.privy_app_secret,
        authorization_secret=settings.privy_authorization_secret,
        base_url=settings.privy_api_url,
    )


def get_deposit_executor(
    strategy: ExecutionStrategy,
    settings: Settings,
    rpc: Optional[NearRpcClient] = None,
    privy: Optional[PrivyClient] = None,
) -> Optional[DepositExecutor]:
    """Get the executor for a server-side strategy.

    Args:
        strategy: Selected execution strategy
        settings: Application settings
        rpc: NEAR RPC client (built from settings if omitted)
        privy: Privy client (built from settings if omitted)

    Returns:
        DepositExecutor, or None for client-sign and manual strategies

    Raises:
        ExecutionSetupError: Key material or signer config is invalid
    """
    if isinstance(strategy, (ImportedCredentials, ServiceAccount)):
        account_id = strategy.account_id
    elif isinstance(strategy, DelegatedSigning):
        account_id = strategy.near_address
    else:
        return None

    if settings.dry_run:
        logger.info(f"Dry-run mode: simulating deposits from {account_id}")
        return SimulatedDepositExecutor(account_id=account_id)

    rpc = rpc or NearRpcClient(settings.near_rpc_url)

    if isinstance(strategy, DelegatedSigning):
        return DelegatedSignerExecutor(
            wallet_id=strategy.wallet_id,
            near_address=strategy.near_address,
            privy=privy or build_privy_client(settings),
            rpc=rpc,
            fee_reserve=settings.near_fee_reserve,
        )

    return NearKeyPairExecutor(
        account_id=strategy.account_id,
        private_key=strategy.private_key,
        rpc=rpc,
        fee_reserve=settings.near_fee_reserve,
    )
