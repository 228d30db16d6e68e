"""Natural-language intent parser.

Turns a chat message into a ``ParsedIntent``. Parsing never raises and does
no I/O: anything unrecognised comes back as ``IntentAction.UNKNOWN``.

Matchers are tried in a fixed order and the first hit wins, because several
patterns overlap ("how much do I have" vs "how much SUI for 10 USDC").
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from intentswap.intent.aliases import find_chain_mention, resolve_chain, resolve_token_symbol


class IntentAction(str, Enum):
    SWAP = "swap"
    QUOTE = "quote"
    LIST_TOKENS = "list_tokens"
    LIST_CHAINS = "list_chains"
    STATUS = "status"
    HELP = "help"
    BALANCE = "balance"
    FUND = "fund"
    CONFIRM = "confirm"
    CANCEL = "cancel"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ParsedIntent:
    """Structured view of one user message."""

    action: IntentAction
    raw_text: str
    token_in: Optional[str] = None
    token_out: Optional[str] = None
    amount_in: Optional[str] = None
    chain_in: Optional[str] = None
    chain_out: Optional[str] = None
    deposit_address_ref: Optional[str] = None

    @property
    def is_complete_swap(self) -> bool:
        return bool(self.token_in and self.token_out and self.amount_in)


_AMOUNT_RE = re.compile(r"^(\d*)(?:\.(\d*))?$")


def normalize_amount(raw: str) -> Optional[str]:
    """Strip thousands separators and check the result is a plain decimal.

    Returns None for things like ``"1.2.3"`` or ``"."``.
    """
    cleaned = raw.replace(",", "").strip()
    match = _AMOUNT_RE.match(cleaned)
    if not match:
        return None
    whole, frac = match.group(1), match.group(2) or ""
    if not whole and not frac:
        return None
    whole = whole or "0"
    return f"{whole}.{frac}" if frac else whole


class IntentMatcher(ABC):
    """One entry in the parser cascade."""

    name: str = "matcher"

    @abstractmethod
    def try_match(self, text: str, lower: str) -> Optional[ParsedIntent]:
        """Return an intent if this matcher recognises the message."""


class PhraseMatcher(IntentMatcher):
    """Fixed action when any of ``patterns`` matches the lowered text."""

    def __init__(self, name: str, action: IntentAction, *patterns: str):
        self.name = name
        self.action = action
        self.patterns = [re.compile(p) for p in patterns]

    def try_match(self, text: str, lower: str) -> Optional[ParsedIntent]:
        if any(p.search(lower) for p in self.patterns):
            return ParsedIntent(action=self.action, raw_text=text)
        return None


class StatusMatcher(IntentMatcher):
    """``check status of X`` or a leading ``status`` keyword."""

    name = "status"

    _VERB = re.compile(
        r"(?:check|get|show|what(?:'s| is))\s+(?:the\s+)?status(?:\s+(?:of\s+)?(.+))?",
        re.IGNORECASE,
    )
    _LEADING = re.compile(r"^status(?:\s+(?:of\s+)?(.+))?$", re.IGNORECASE)

    def try_match(self, text: str, lower: str) -> Optional[ParsedIntent]:
        match = self._VERB.search(text) or self._LEADING.match(text)
        if not match:
            return None
        ref = match.group(1).strip() if match.group(1) else None
        return ParsedIntent(
            action=IntentAction.STATUS, raw_text=text, deposit_address_ref=ref or None
        )


class TokenListMatcher(IntentMatcher):
    name = "list_tokens"

    _PATTERNS = [
        re.compile(r"(?:list|show|what|available|supported)\s+(?:all\s+)?tokens?"),
        re.compile(r"tokens?\s+(?:on|for|available)"),
        re.compile(r"what\s+(?:can\s+i|tokens?\s+can)"),
        re.compile(r"^tokens?$"),
    ]

    def try_match(self, text: str, lower: str) -> Optional[ParsedIntent]:
        if not any(p.search(lower) for p in self._PATTERNS):
            return None
        return ParsedIntent(
            action=IntentAction.LIST_TOKENS,
            raw_text=text,
            chain_in=find_chain_mention(lower),
        )


@dataclass(frozen=True)
class SwapFields:
    """Raw captures from a swap-shaped pattern."""

    amount: Optional[str]
    token_in: Optional[str]
    token_out: Optional[str]
    quote_only: bool = False


class SwapPatternMatcher:
    """A swap-shaped regex and the order its groups appear in.

    ``groups`` names the capture order, e.g. ``("token_out", "amount",
    "token_in")`` for "buy SUI with 10 USDC".
    """

    def __init__(self, name: str, pattern: str, groups: tuple[str, ...], quote_only: bool = False):
        self.name = name
        self.pattern = re.compile(pattern, re.IGNORECASE)
        self.groups = groups
        self.quote_only = quote_only

    def try_match(self, text: str) -> Optional[SwapFields]:
        match = self.pattern.search(text)
        if not match:
            return None

        values = dict(zip(self.groups, match.groups()))
        amount = None
        if values.get("amount") is not None:
            amount = normalize_amount(values["amount"])
            if amount is None:
                return None

        return SwapFields(
            amount=amount,
            token_in=values.get("token_in"),
            token_out=values.get("token_out"),
            quote_only=self.quote_only,
        )


_ARROW = r"(?:for|to|into|->|→)"

SWAP_PATTERNS: list[SwapPatternMatcher] = [
    SwapPatternMatcher(
        "swap",
        r"(?:swap|exchange|convert|trade|send|transfer|i\s+want\s+to\s+swap"
        r"|i(?:'d|\s+would)\s+like\s+to\s+swap)\s+\$?([\d,.]+)\s*(?:of\s+)?(\w+)\s+"
        + _ARROW + r"\s+(\w+)",
        ("amount", "token_in", "token_out"),
    ),
    SwapPatternMatcher(
        "buy",
        r"(?:buy|purchase|get)\s+(\w+)\s+(?:with|using|from)\s+\$?([\d,.]+)\s*(?:of\s+)?(\w+)",
        ("token_out", "amount", "token_in"),
    ),
    SwapPatternMatcher(
        "sell",
        r"sell\s+\$?([\d,.]+)\s*(?:of\s+)?(\w+)\s+(?:for|to|into)\s+(\w+)",
        ("amount", "token_in", "token_out"),
    ),
    SwapPatternMatcher(
        "how_much",
        r"how\s+much\s+(\w+)\s+(?:would|will|can|do)?\s*(?:i\s+)?(?:get\s+)?"
        r"(?:for|from|with)\s+\$?([\d,.]+)\s*(?:of\s+)?(\w+)",
        ("token_out", "amount", "token_in"),
        quote_only=True,
    ),
    SwapPatternMatcher(
        "quote",
        r"(?:quote|estimate|price)\s+(?:for\s+)?\$?([\d,.]+)\s*(?:of\s+)?(\w+)\s+(?:to|for)\s+(\w+)",
        ("amount", "token_in", "token_out"),
        quote_only=True,
    ),
    SwapPatternMatcher(
        "shorthand",
        r"^\$?([\d,.]+)\s*(\w+)\s+" + _ARROW + r"\s+(\w+)",
        ("amount", "token_in", "token_out"),
    ),
]

# Tried only when no full pattern matched; yields tokens without an amount.
PARTIAL_PATTERNS: list[SwapPatternMatcher] = [
    SwapPatternMatcher(
        "partial_pair",
        r"(?:swap|exchange|convert|trade|quote)\s+([a-z]\w*)\s+" + _ARROW + r"\s+([a-z]\w*)",
        ("token_in", "token_out"),
    ),
    SwapPatternMatcher("partial_buy", r"^(?:buy|purchase)\s+([a-z]\w*)$", ("token_out",)),
    SwapPatternMatcher(
        "partial_sell", r"^(?:sell|swap|exchange|convert|trade)\s+([a-z]\w*)$", ("token_in",)
    ),
]

_QUOTE_ONLY_HINTS = [
    re.compile(r"(?:get|show|give\s+me)\s+(?:a\s+)?quote"),
    re.compile(r"how\s+much"),
    re.compile(r"what\s+(?:would|will|can|do)\s+i\s+get"),
    re.compile(r"price\s+(?:of|for)"),
    re.compile(r"estimate"),
]

_CHAIN_FROM = re.compile(r"\bfrom\s+(\w+)\s+(?:chain|network|to)\b", re.IGNORECASE)
_CHAIN_TO = re.compile(r"\bto\s+(\w+)\s+(?:chain|network)\b", re.IGNORECASE)
_CHAIN_ON = re.compile(r"\bon\s+(\w+)(?:\s+chain|\s+network)?", re.IGNORECASE)


def extract_chain_hints(text: str) -> tuple[Optional[str], Optional[str]]:
    """Return ``(chain_in, chain_out)`` from "from X chain", "to X network", "on X"."""
    chain_in = chain_out = None

    match = _CHAIN_FROM.search(text)
    if match:
        chain_in = resolve_chain(match.group(1))

    match = _CHAIN_TO.search(text)
    if match:
        chain_out = resolve_chain(match.group(1))

    if chain_out is None:
        match = _CHAIN_ON.search(text)
        if match:
            chain_out = resolve_chain(match.group(1))

    return chain_in, chain_out


COMMAND_MATCHERS: list[IntentMatcher] = [
    PhraseMatcher(
        "help",
        IntentAction.HELP,
        r"^(?:help|what can you do|commands|guide|tutorial|getting started)\b",
        r"^how$",
        r"^how\s+(?:do|does|to)\b",
    ),
    PhraseMatcher("cancel", IntentAction.CANCEL, r"^(?:cancel|no|nevermind|never mind|abort)[.!]?$"),
    PhraseMatcher(
        "confirm",
        IntentAction.CONFIRM,
        r"^(?:yes|confirm|execute|go ahead|do it|proceed|ok|okay|sure|yep|yea|yeah)\b",
    ),
    StatusMatcher(),
    TokenListMatcher(),
    PhraseMatcher(
        "list_chains",
        IntentAction.LIST_CHAINS,
        r"(?:list|show|what|available|supported)\s+(?:all\s+)?(?:chains?|networks?|blockchains?)",
        r"^chains?$",
    ),
    PhraseMatcher(
        "balance",
        IntentAction.BALANCE,
        r"(?:my\s+)?balance",
        r"how\s+much\s+(?:do\s+i|i)\s+have",
    ),
    PhraseMatcher(
        "fund", IntentAction.FUND, r"^(?:fund|deposit|add\s+funds|fund\s+wallet|top\s+up)\b"
    ),
]


class IntentParser:
    """Ordered matcher cascade producing a ``ParsedIntent``."""

    def __init__(
        self,
        commands: Optional[list[IntentMatcher]] = None,
        swap_patterns: Optional[list[SwapPatternMatcher]] = None,
        partial_patterns: Optional[list[SwapPatternMatcher]] = None,
    ):
        self.commands = commands if commands is not None else COMMAND_MATCHERS
        self.swap_patterns = swap_patterns if swap_patterns is not None else SWAP_PATTERNS
        self.partial_patterns = (
            partial_patterns if partial_patterns is not None else PARTIAL_PATTERNS
        )

    def parse(self, text: str) -> ParsedIntent:
        text = (text or "").strip()
        lower = text.lower()

        for matcher in self.commands:
            intent = matcher.try_match(text, lower)
            if intent is not None:
                return intent

        fields = self._match_swap(text)
        if fields is None:
            return ParsedIntent(action=IntentAction.UNKNOWN, raw_text=text)

        quote_only = fields.quote_only or any(p.search(lower) for p in _QUOTE_ONLY_HINTS)
        chain_in, chain_out = extract_chain_hints(text)

        intent = ParsedIntent(
            action=IntentAction.QUOTE if quote_only else IntentAction.SWAP,
            raw_text=text,
            token_in=resolve_token_symbol(fields.token_in) if fields.token_in else None,
            token_out=resolve_token_symbol(fields.token_out) if fields.token_out else None,
            amount_in=fields.amount,
            chain_in=chain_in,
            chain_out=chain_out,
        )

        if not intent.is_complete_swap:
            # Something swap-like but incomplete; the agent asks for the rest
            return replace(intent, action=IntentAction.QUOTE)
        return intent

    def _match_swap(self, text: str) -> Optional[SwapFields]:
        for matcher in self.swap_patterns:
            fields = matcher.try_match(text)
            if fields is not None:
                return fields
        for matcher in self.partial_patterns:
            fields = matcher.try_match(text)
            if fields is not None:
                return fields
        return None


_default_parser = IntentParser()


def parse_intent(text: str) -> ParsedIntent:
    """Parse a chat message with the default matcher cascade."""
    return _default_parser.parse(text)
