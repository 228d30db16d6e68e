"""Chat message -> structured intent."""

from intentswap.intent.aliases import (
    CHAIN_ALIASES,
    TOKEN_ALIASES,
    resolve_chain,
    resolve_token_symbol,
)
from intentswap.intent.parser import (
    IntentAction,
    IntentMatcher,
    IntentParser,
    ParsedIntent,
    parse_intent,
)

__all__ = [
    "CHAIN_ALIASES",
    "TOKEN_ALIASES",
    "IntentAction",
    "IntentMatcher",
    "IntentParser",
    "ParsedIntent",
    "parse_intent",
    "resolve_chain",
    "resolve_token_symbol",
]
