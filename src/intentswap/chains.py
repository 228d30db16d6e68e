"""Chain registry and address format rules.

Chain keys follow the ``blockchain`` slugs used by the 1-Click token list
(``near``, ``sui``, ``eth``, ``arb`` ...). Address rules are per family and
must not be mixed: a SUI address (0x + 64 hex) is never a valid EVM address
(0x + 40 hex) even though both start with ``0x``.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ChainFamily(str, Enum):
    """Address family of a chain."""

    NEAR = "near"
    SUI = "sui"
    EVM = "evm"
    SOLANA = "solana"
    OTHER = "other"


@dataclass
class ChainConfig:
    """Configuration for a blockchain supported by the settlement service."""

    slug: str
    name: str
    family: ChainFamily
    native_symbol: str
    decimals: int = 18
    explorer_url: Optional[str] = None


# ======================
# Chain Configurations
# ======================

CHAINS: dict[str, ChainConfig] = {
    "near": ChainConfig(
        slug="near",
        name="NEAR",
        family=ChainFamily.NEAR,
        native_symbol="NEAR",
        decimals=24,
        explorer_url="https://nearblocks.io",
    ),
    "sui": ChainConfig(
        slug="sui",
        name="Sui",
        family=ChainFamily.SUI,
        native_symbol="SUI",
        decimals=9,
        explorer_url="https://suiscan.xyz",
    ),
    "eth": ChainConfig(
        slug="eth",
        name="Ethereum",
        family=ChainFamily.EVM,
        native_symbol="ETH",
        explorer_url="https://etherscan.io",
    ),
    "arb": ChainConfig(
        slug="arb",
        name="Arbitrum",
        family=ChainFamily.EVM,
        native_symbol="ETH",
        explorer_url="https://arbiscan.io",
    ),
    "base": ChainConfig(
        slug="base",
        name="Base",
        family=ChainFamily.EVM,
        native_symbol="ETH",
        explorer_url="https://basescan.org",
    ),
    "op": ChainConfig(
        slug="op",
        name="Optimism",
        family=ChainFamily.EVM,
        native_symbol="ETH",
        explorer_url="https://optimistic.etherscan.io",
    ),
    "bsc": ChainConfig(
        slug="bsc",
        name="BNB Smart Chain",
        family=ChainFamily.EVM,
        native_symbol="BNB",
        explorer_url="https://bscscan.com",
    ),
    "pol": ChainConfig(
        slug="pol",
        name="Polygon",
        family=ChainFamily.EVM,
        native_symbol="POL",
        explorer_url="https://polygonscan.com",
    ),
    "avax": ChainConfig(
        slug="avax",
        name="Avalanche",
        family=ChainFamily.EVM,
        native_symbol="AVAX",
        explorer_url="https://snowtrace.io",
    ),
    "gnosis": ChainConfig(
        slug="gnosis",
        name="Gnosis",
        family=ChainFamily.EVM,
        native_symbol="XDAI",
        explorer_url="https://gnosisscan.io",
    ),
    "sol": ChainConfig(
        slug="sol",
        name="Solana",
        family=ChainFamily.SOLANA,
        native_symbol="SOL",
        decimals=9,
        explorer_url="https://solscan.io",
    ),
    "btc": ChainConfig(
        slug="btc",
        name="Bitcoin",
        family=ChainFamily.OTHER,
        native_symbol="BTC",
        decimals=8,
        explorer_url="https://mempool.space",
    ),
    "ton": ChainConfig(
        slug="ton",
        name="TON",
        family=ChainFamily.OTHER,
        native_symbol="TON",
        decimals=9,
    ),
    "tron": ChainConfig(
        slug="tron",
        name="Tron",
        family=ChainFamily.OTHER,
        native_symbol="TRX",
        decimals=6,
    ),
    "doge": ChainConfig(
        slug="doge",
        name="Dogecoin",
        family=ChainFamily.OTHER,
        native_symbol="DOGE",
        decimals=8,
    ),
    "xrp": ChainConfig(
        slug="xrp",
        name="XRP Ledger",
        family=ChainFamily.OTHER,
        native_symbol="XRP",
        decimals=6,
    ),
}

# Older slugs some token lists still carry
CHAIN_SLUG_ALIASES = {
    "polygon": "pol",
    "avalanche": "avax",
    "arbitrum": "arb",
    "optimism": "op",
    "solana": "sol",
    "bitcoin": "btc",
    "ethereum": "eth",
}

_SUI_RE = re.compile(r"^0x[0-9a-fA-F]{64}$")
_EVM_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")
_NEAR_IMPLICIT_RE = re.compile(r"^[0-9a-f]{64}$")
_NEAR_NAMED_RE = re.compile(r"^(([a-z\d]+[\-_])*[a-z\d]+\.)*([a-z\d]+[\-_])*[a-z\d]+$")
_SOLANA_RE = re.compile(r"^[1-9A-HJ-NP-Za-km-z]{32,44}$")


def canonical_chain(slug: str) -> str:
    """Normalize a blockchain slug to the registry key."""
    lower = slug.lower().strip()
    return CHAIN_SLUG_ALIASES.get(lower, lower)


def get_chain(slug: str) -> Optional[ChainConfig]:
    """Look up a chain by slug."""
    return CHAINS.get(canonical_chain(slug))


def chain_family(slug: str) -> ChainFamily:
    """Get the address family of a chain (OTHER when unknown)."""
    chain = get_chain(slug)
    return chain.family if chain else ChainFamily.OTHER


def is_sui_address(address: Optional[str]) -> bool:
    """SUI addresses are 0x followed by 64 hex characters."""
    return bool(address) and bool(_SUI_RE.match(address))


def is_evm_address(address: Optional[str]) -> bool:
    """EVM addresses are 0x followed by 40 hex characters."""
    return bool(address) and bool(_EVM_RE.match(address))


def is_solana_address(address: Optional[str]) -> bool:
    """Solana addresses are base58 public keys."""
    return bool(address) and bool(_SOLANA_RE.match(address))


def is_near_account(account_id: Optional[str]) -> bool:
    """Validate a NEAR named or implicit account id."""
    if not account_id:
        return False
    if _NEAR_IMPLICIT_RE.match(account_id):
        return True
    if len(account_id) < 2 or len(account_id) > 64:
        return False
    return bool(_NEAR_NAMED_RE.match(account_id))


def validate_address(chain: str, address: Optional[str]) -> bool:
    """Check that an address is usable on the given chain.

    Chains outside the known families accept no address, because none of
    the identities the orchestrator manages live there.
    """
    family = chain_family(chain)
    if family == ChainFamily.NEAR:
        return is_near_account(address)
    if family == ChainFamily.SUI:
        return is_sui_address(address)
    if family == ChainFamily.EVM:
        return is_evm_address(address)
    if family == ChainFamily.SOLANA:
        return is_solana_address(address)
    return False


def shorten_address(address: str, head: int = 8, tail: int = 6) -> str:
    """Truncate an address for display and logs."""
    if len(address) <= head + tail + 3:
        return address
    return f"{address[:head]}...{address[-tail:]}"
