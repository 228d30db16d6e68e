"""Refund and recipient address selection.

The refund address must be valid on the origin chain (where funds come
from) and the recipient address on the destination chain (where they go).
"""

import logging
from dataclasses import dataclass
from typing import Optional

from intentswap.chains import (
    ChainFamily,
    canonical_chain,
    chain_family,
    is_near_account,
    shorten_address,
    validate_address,
)
from intentswap.exceptions import AddressUnavailable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identities:
    """Addresses the caller can act for.

    ``wallet_address`` is the connected wallet (SUI, EVM or Solana shaped),
    ``user_near_account`` the user's own NEAR account and
    ``service_near_account`` the operator account from settings.
    """

    wallet_address: Optional[str] = None
    user_near_account: Optional[str] = None
    service_near_account: Optional[str] = None

    @property
    def near_account(self) -> Optional[str]:
        """User's NEAR account, else the service account."""
        return self.user_near_account or self.service_near_account

    @property
    def has_any(self) -> bool:
        return bool(self.wallet_address or self.near_account)


@dataclass(frozen=True)
class AddressPair:
    refund_address: str
    recipient_address: str


def address_for_chain(chain: str, identities: Identities) -> Optional[str]:
    """Pick the identity usable on ``chain``, or None.

    NEAR uses the NEAR account. SUI, EVM and Solana chains use the wallet
    only when its format matches the chain family. No identity is valid on
    other chains (BTC, TON, Tron and the like).
    """
    if chain_family(chain) == ChainFamily.NEAR:
        account = identities.near_account
        return account if is_near_account(account) else None

    wallet = identities.wallet_address
    return wallet if validate_address(chain, wallet) else None


def _refund_hint(chain: str) -> str:
    family = chain_family(chain)
    label = chain.upper()
    if family == ChainFamily.NEAR:
        return "Provide your NEAR account or configure SENDER_NEAR_ACCOUNT."
    if family == ChainFamily.SUI:
        return "Connect your SUI wallet."
    return f"You need a {label} wallet address connected to swap from {label}."


def _recipient_hint(chain: str) -> str:
    family = chain_family(chain)
    label = chain.upper()
    if family == ChainFamily.NEAR:
        return "Provide your NEAR account or configure SENDER_NEAR_ACCOUNT."
    if family == ChainFamily.SUI:
        return "Connect your SUI wallet."
    return f"You need a {label} wallet address to receive tokens on {label}."


def route_addresses(origin_chain: str, dest_chain: str, identities: Identities) -> AddressPair:
    """Compute refund and recipient addresses for a swap.

    Raises:
        AddressUnavailable: No identity is valid on one of the chains. The
            refund side is checked first.
    """
    origin = canonical_chain(origin_chain)
    dest = canonical_chain(dest_chain)

    refund = address_for_chain(origin, identities)
    recipient = address_for_chain(dest, identities)

    logger.debug(
        f"Address routing {origin} -> {dest}: "
        f"refund={shorten_address(refund) if refund else None} "
        f"recipient={shorten_address(recipient) if recipient else None}"
    )

    if not refund:
        raise AddressUnavailable(origin, "refund", _refund_hint(origin))
    if not recipient:
        raise AddressUnavailable(dest, "recipient", _recipient_hint(dest))

    return AddressPair(refund_address=refund, recipient_address=recipient)
