"""Token and chain alias tables used by the parser and resolver."""

from typing import Optional

# Words users type -> canonical token symbol
TOKEN_ALIASES: dict[str, str] = {
    "bitcoin": "BTC",
    "btc": "BTC",
    "ethereum": "ETH",
    "ether": "ETH",
    "eth": "ETH",
    "sui": "SUI",
    "usdc": "USDC",
    "usdt": "USDT",
    "tether": "USDT",
    "near": "NEAR",
    "solana": "SOL",
    "sol": "SOL",
    "arbitrum": "ARB",
    "arb": "ARB",
    "bnb": "BNB",
    "binance": "BNB",
    "polygon": "POL",
    "matic": "POL",
    "avalanche": "AVAX",
    "avax": "AVAX",
    "deep": "DEEP",
    "doge": "DOGE",
    "dogecoin": "DOGE",
    "xrp": "XRP",
    "ripple": "XRP",
    "ada": "ADA",
    "cardano": "ADA",
    "ton": "TON",
    "wbtc": "WBTC",
    "weth": "WETH",
    "dai": "DAI",
}

# Words users type -> catalog chain slug. Insertion order matters: token
# listing requests pick the first alias found anywhere in the text.
CHAIN_ALIASES: dict[str, str] = {
    "sui": "sui",
    "near": "near",
    "ethereum": "eth",
    "eth": "eth",
    "arbitrum": "arb",
    "arb": "arb",
    "base": "base",
    "polygon": "pol",
    "matic": "pol",
    "optimism": "op",
    "op": "op",
    "avalanche": "avax",
    "avax": "avax",
    "bnb": "bsc",
    "bsc": "bsc",
    "binance": "bsc",
    "solana": "sol",
    "sol": "sol",
    "bitcoin": "btc",
    "btc": "btc",
    "ton": "ton",
    "tron": "tron",
    "trx": "tron",
}


def resolve_token_symbol(word: str) -> str:
    """Map a user-typed token word to its canonical symbol."""
    lower = word.lower().strip()
    return TOKEN_ALIASES.get(lower, word.strip().upper())


def resolve_chain(word: str) -> Optional[str]:
    """Map a user-typed chain word to a catalog slug, or None."""
    return CHAIN_ALIASES.get(word.lower().strip())


def find_chain_mention(text: str) -> Optional[str]:
    """First chain alias contained anywhere in ``text`` (substring match)."""
    lower = text.lower()
    for alias, slug in CHAIN_ALIASES.items():
        if alias in lower:
            return slug
    return None
