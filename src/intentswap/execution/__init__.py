"""Deposit execution: strategies, executors and the deposit flow."""

from intentswap.execution.base import (
    DepositExecutor,
    ExecutionResult,
    NonCriticalResult,
    TransferResult,
    explorer_url,
    is_native_near,
    near_blocks_url,
    parse_nep141_contract,
)
from intentswap.execution.factory import get_deposit_executor
from intentswap.execution.near import NearKeyPairExecutor, build_deposit_actions
from intentswap.execution.near_rpc import NearRpcClient
from intentswap.execution.privy import DelegatedSignerExecutor, PrivyClient
from intentswap.execution.runner import run_deposit, submit_deposit_best_effort
from intentswap.execution.simulated import SimulatedDepositExecutor
from intentswap.execution.strategy import (
    ClientSign,
    CredentialBundle,
    DelegatedSigning,
    ExecutionMode,
    ExecutionStrategy,
    ImportedCredentials,
    ManualDeposit,
    ServiceAccount,
    select_strategy,
)

__all__ = [
    "ClientSign",
    "CredentialBundle",
    "DelegatedSignerExecutor",
    "DelegatedSigning",
    "DepositExecutor",
    "ExecutionMode",
    "ExecutionResult",
    "ExecutionStrategy",
    "ImportedCredentials",
    "ManualDeposit",
    "NearKeyPairExecutor",
    "NearRpcClient",
    "NonCriticalResult",
    "PrivyClient",
    "ServiceAccount",
    "SimulatedDepositExecutor",
    "TransferResult",
    "build_deposit_actions",
    "explorer_url",
    "get_deposit_executor",
    "is_native_near",
    "near_blocks_url",
    "parse_nep141_contract",
    "run_deposit",
    "select_strategy",
    "submit_deposit_best_effort",
]
