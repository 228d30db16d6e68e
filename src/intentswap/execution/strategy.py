"""Execution strategy selection.

A confirmed quote is executed one of five ways depending on which
credentials are at hand. Each way is a small credential bundle; exactly one
is chosen per confirm.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Optional, Union


class ExecutionMode(str, Enum):
    """Execution mode requested by the front end."""

    AUTO = "auto"
    PRIVY_AUTO = "privy-auto"
    CLIENT_SIGN = "client-sign"
    MANUAL = "manual"


@dataclass(frozen=True)
class ImportedCredentials:
    """User supplied their own NEAR key pair."""

    kind: ClassVar[str] = "imported"

    account_id: str
    private_key: str = field(repr=False)


@dataclass(frozen=True)
class DelegatedSigning:
    """Privy-managed wallet signing server-side."""

    kind: ClassVar[str] = "delegated"

    wallet_id: str
    near_address: str


@dataclass(frozen=True)
class ClientSign:
    """Front end signs the deposit with the user's NEAR wallet."""

    kind: ClassVar[str] = "client_sign"

    account_id: str


@dataclass(frozen=True)
class ServiceAccount:
    """Operator-configured NEAR account."""

    kind: ClassVar[str] = "service_account"

    account_id: str
    private_key: str = field(repr=False)


@dataclass(frozen=True)
class ManualDeposit:
    """Show the deposit address; the user sends funds themselves."""

    kind: ClassVar[str] = "manual"


ExecutionStrategy = Union[
    ImportedCredentials, DelegatedSigning, ClientSign, ServiceAccount, ManualDeposit
]


@dataclass(frozen=True)
class CredentialBundle:
    """Everything known about the acting identity for one turn."""

    wallet_address: Optional[str] = None
    near_account_id: Optional[str] = None
    near_private_key: Optional[str] = field(default=None, repr=False)
    execution_mode: ExecutionMode = ExecutionMode.AUTO
    privy_wallet_id: Optional[str] = None
    privy_near_address: Optional[str] = None
    service_account_id: Optional[str] = None
    service_private_key: Optional[str] = field(default=None, repr=False)

    @property
    def has_service_account(self) -> bool:
        return bool(self.service_account_id and self.service_private_key)

    @property
    def has_identity(self) -> bool:
        """Some address a manual deposit can be tied to."""
        return bool(self.wallet_address or self.near_account_id or self.has_service_account)


def select_strategy(origin_needs_account: bool, bundle: CredentialBundle) -> ExecutionStrategy:
    """Pick the execution path for a confirmed quote.

    Order: imported keys, delegated signer, client-side signing, service
    account, manual. Only the manual path applies when the origin chain is
    not NEAR, since every other path sends a NEAR transaction.
    """
    if not origin_needs_account:
        return ManualDeposit()

    if bundle.near_account_id and bundle.near_private_key:
        return ImportedCredentials(bundle.near_account_id, bundle.near_private_key)

    if (
        bundle.execution_mode == ExecutionMode.PRIVY_AUTO
        and bundle.privy_wallet_id
        and bundle.privy_near_address
    ):
        return DelegatedSigning(bundle.privy_wallet_id, bundle.privy_near_address)

    if bundle.execution_mode == ExecutionMode.CLIENT_SIGN and bundle.near_account_id:
        return ClientSign(bundle.near_account_id)

    if bundle.has_service_account:
        return ServiceAccount(bundle.service_account_id, bundle.service_private_key)

    return ManualDeposit()
