"""Symbol resolution and fixed-point amount conversion."""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from intentswap.catalog import ResolvedToken
from intentswap.chains import canonical_chain
from intentswap.intent.aliases import resolve_chain, resolve_token_symbol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SymbolAlias:
    """Catalog symbols that stand for one user-facing symbol."""

    symbols: tuple[str, ...]
    prefer_chain: Optional[str] = None


SYMBOL_ALIASES: dict[str, SymbolAlias] = {
    "NEAR": SymbolAlias(("NEAR", "WNEAR"), prefer_chain="near"),
    "WNEAR": SymbolAlias(("WNEAR", "NEAR"), prefer_chain="near"),
    "BTC": SymbolAlias(("BTC", "WBTC"), prefer_chain="btc"),
    "WBTC": SymbolAlias(("WBTC", "BTC")),
    "ETH": SymbolAlias(("ETH", "WETH"), prefer_chain="eth"),
    "WETH": SymbolAlias(("WETH", "ETH")),
    "SOL": SymbolAlias(("SOL", "WSOL"), prefer_chain="sol"),
    "SUI": SymbolAlias(("SUI",), prefer_chain="sui"),
}

# Fallback when a catalog entry omits decimals
DECIMALS: dict[str, int] = {
    "USDC": 6,
    "USDT": 6,
    "SUI": 9,
    "NEAR": 24,
    "WNEAR": 24,
    "ETH": 18,
    "WETH": 18,
    "BTC": 8,
    "WBTC": 8,
    "SOL": 9,
    "ARB": 18,
    "BNB": 18,
    "AVAX": 18,
    "POL": 18,
    "DAI": 18,
    "DEEP": 6,
}
DEFAULT_DECIMALS = 18


def find_best_token(
    entries: Sequence[ResolvedToken],
    symbol: str,
    preferred_chain: Optional[str] = None,
) -> Optional[ResolvedToken]:
    """Pick the catalog entry for ``symbol``.

    An explicit ``preferred_chain`` wins over the alias default chain. When
    neither narrows the match, the first catalog match is returned.

    Args:
        entries: Catalog entries in source order
        symbol: User-facing symbol, case-insensitive
        preferred_chain: Chain slug or alias to prefer

    Returns:
        The matching entry, or None if the symbol is not listed
    """
    upper = symbol.upper()
    alias = SYMBOL_ALIASES.get(upper, SymbolAlias((upper,)))
    wanted = set(alias.symbols)

    matches = [t for t in entries if t.symbol.upper() in wanted]
    if not matches:
        logger.debug(f"No catalog entry for {symbol}")
        return None

    chain = preferred_chain or alias.prefer_chain
    if chain:
        slug = resolve_chain(chain) or canonical_chain(chain)
        for token in matches:
            if token.chain == slug:
                return token

    return matches[0]


def guess_decimals(symbol: str) -> int:
    return DECIMALS.get(symbol.upper(), DEFAULT_DECIMALS)


def token_decimals(token: ResolvedToken) -> int:
    """Catalog decimals, or the static guess when the catalog omits them."""
    if token.decimals is not None:
        return token.decimals
    return guess_decimals(token.symbol)


def to_smallest_unit(amount: str, decimals: int) -> str:
    """Scale a decimal string to integer smallest units without floats.

    Extra fractional digits beyond ``decimals`` are truncated.

    >>> to_smallest_unit("1.5", 6)
    '1500000'
    """
    whole, _, frac = amount.strip().replace(",", "").partition(".")
    frac = (frac + "0" * decimals)[:decimals]
    digits = ((whole or "0") + frac).lstrip("0")
    return digits or "0"


def from_smallest_unit(raw: str, decimals: int) -> str:
    """Inverse of ``to_smallest_unit``; trailing fractional zeros are trimmed.

    >>> from_smallest_unit("12345600", 6)
    '12.3456'
    """
    digits = str(raw).strip().lstrip("0") or "0"
    if decimals == 0:
        return digits

    digits = digits.rjust(decimals + 1, "0")
    whole, frac = digits[:-decimals], digits[-decimals:].rstrip("0")
    return f"{whole}.{frac}" if frac else whole


__all__ = [
    "DECIMALS",
    "SYMBOL_ALIASES",
    "find_best_token",
    "from_smallest_unit",
    "guess_decimals",
    "resolve_chain",
    "resolve_token_symbol",
    "to_smallest_unit",
    "token_decimals",
]
