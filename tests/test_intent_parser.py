"""Tests for the natural-language intent parser."""

import pytest

from intentswap.intent import IntentAction, IntentParser, parse_intent
from intentswap.intent.aliases import find_chain_mention, resolve_chain, resolve_token_symbol
from intentswap.intent.parser import (
    PhraseMatcher,
    extract_chain_hints,
    normalize_amount,
)


class TestSwapPhrases:
    """Swap-shaped messages."""

    @pytest.mark.parametrize(
        "text",
        [
            "swap 100 USDC for SUI",
            "Swap 100 usdc to sui",
            "exchange 100 USDC into SUI",
            "convert 100 USDC -> SUI",
            "I want to swap 100 USDC for SUI",
            "sell 100 USDC for SUI",
            "buy SUI with 100 USDC",
            "100 USDC for SUI",
        ],
    )
    def test_swap_shapes(self, text):
        """Every supported phrasing yields the same swap."""
        intent = parse_intent(text)

        assert intent.action == IntentAction.SWAP
        assert intent.token_in == "USDC"
        assert intent.token_out == "SUI"
        assert intent.amount_in == "100"

    def test_thousands_separator_and_decimals(self):
        intent = parse_intent("swap 1,250.50 USDT for NEAR")

        assert intent.amount_in == "1250.50"
        assert intent.token_in == "USDT"
        assert intent.token_out == "NEAR"

    def test_dollar_sign_amount(self):
        intent = parse_intent("swap $50 USDC for SUI")

        assert intent.amount_in == "50"

    def test_token_aliases(self):
        """Chain names used as token words map to symbols."""
        intent = parse_intent("swap 0.5 bitcoin for ethereum")

        assert intent.token_in == "BTC"
        assert intent.token_out == "ETH"

    def test_chain_hints(self):
        intent = parse_intent("swap 100 USDC to SUI from ethereum chain")

        assert intent.chain_in == "eth"

    def test_on_chain_hint_sets_destination(self):
        intent = parse_intent("swap 100 USDC for SUI on sui")

        assert intent.chain_out == "sui"


    @pytest.mark.parametrize(
        "text, token_in, token_out, amount",
        [
            ("buy SUI with $100 of USDC", "USDC", "SUI", "100"),
            ("sell 5 of NEAR for USDC", "NEAR", "USDC", "5"),
            ("swap 20 of USDT for ETH", "USDT", "ETH", "20"),
        ],
    )
    def test_amount_of_token(self, text, token_in, token_out, amount):
        """'<amount> of <token>' reads like '<amount> <token>'."""
        intent = parse_intent(text)

        assert intent.action == IntentAction.SWAP
        assert intent.token_in == token_in
        assert intent.token_out == token_out
        assert intent.amount_in == amount


class TestQuotePhrases:
    """Quote-only requests."""

    def test_quote_verb(self):
        """The quote verb forces a quote-only intent."""
        intent = parse_intent("quote 50 USDT to BTC")

        assert intent.action == IntentAction.QUOTE
        assert intent.amount_in == "50"
        assert intent.token_in == "USDT"
        assert intent.token_out == "BTC"

    def test_how_much(self):
        """'how much' is a quote, not help and not balance."""
        intent = parse_intent("How much SUI for 50 USDC?")

        assert intent.action == IntentAction.QUOTE
        assert intent.token_out == "SUI"
        assert intent.token_in == "USDC"
        assert intent.amount_in == "50"

    def test_how_much_would_i_get(self):
        intent = parse_intent("how much NEAR would I get for 10 USDC")

        assert intent.action == IntentAction.QUOTE
        assert intent.token_out == "NEAR"

    def test_quote_amount_of_token(self):
        intent = parse_intent("quote 10 of USDT to BTC")

        assert intent.action == IntentAction.QUOTE
        assert intent.token_in == "USDT"
        assert intent.amount_in == "10"

    def test_how_much_amount_of_token(self):
        intent = parse_intent("how much SUI for 50 of USDC")

        assert intent.action == IntentAction.QUOTE
        assert intent.token_in == "USDC"
        assert intent.token_out == "SUI"

    def test_missing_amount_degrades_to_quote(self):
        """Incomplete swaps come back as quotes so the agent can ask."""
        intent = parse_intent("swap USDC for SUI")

        assert intent.action == IntentAction.QUOTE
        assert intent.token_in == "USDC"
        assert intent.token_out == "SUI"
        assert intent.amount_in is None
        assert not intent.is_complete_swap

    def test_buy_without_amount(self):
        intent = parse_intent("buy SUI")

        assert intent.action == IntentAction.QUOTE
        assert intent.token_out == "SUI"
        assert intent.token_in is None


class TestCommands:
    """Non-swap commands."""

    @pytest.mark.parametrize(
        "text,action",
        [
            ("help", IntentAction.HELP),
            ("what can you do", IntentAction.HELP),
            ("how do I swap?", IntentAction.HELP),
            ("confirm", IntentAction.CONFIRM),
            ("yes", IntentAction.CONFIRM),
            ("go ahead", IntentAction.CONFIRM),
            ("cancel", IntentAction.CANCEL),
            ("nevermind", IntentAction.CANCEL),
            ("no", IntentAction.CANCEL),
            ("tokens", IntentAction.LIST_TOKENS),
            ("show tokens on near", IntentAction.LIST_TOKENS),
            ("chains", IntentAction.LIST_CHAINS),
            ("what chains are supported?", IntentAction.LIST_CHAINS),
            ("balance", IntentAction.BALANCE),
            ("how much do I have", IntentAction.BALANCE),
            ("fund", IntentAction.FUND),
            ("top up", IntentAction.FUND),
        ],
    )
    def test_command(self, text, action):
        assert parse_intent(text).action == action

    def test_confirm_needs_word_boundary(self):
        """'okay' confirms but 'okra' does not."""
        assert parse_intent("okay").action == IntentAction.CONFIRM
        assert parse_intent("okra").action == IntentAction.UNKNOWN

    def test_status_with_verb(self):
        """Deposit address case is preserved."""
        intent = parse_intent("check status of 0xAbC123")

        assert intent.action == IntentAction.STATUS
        assert intent.deposit_address_ref == "0xAbC123"

    def test_status_leading_keyword(self):
        intent = parse_intent("status 0xDeF456")

        assert intent.action == IntentAction.STATUS
        assert intent.deposit_address_ref == "0xDeF456"

    def test_bare_status(self):
        intent = parse_intent("status")

        assert intent.action == IntentAction.STATUS
        assert intent.deposit_address_ref is None

    def test_token_list_chain(self):
        assert parse_intent("tokens on sui").chain_in == "sui"
        assert parse_intent("list tokens").chain_in is None

    def test_unknown(self):
        intent = parse_intent("what is the weather like")

        assert intent.action == IntentAction.UNKNOWN
        assert intent.raw_text == "what is the weather like"

    def test_empty_text(self):
        assert parse_intent("").action == IntentAction.UNKNOWN
        assert parse_intent(None).action == IntentAction.UNKNOWN


class TestParserComposition:
    """Custom matcher cascades."""

    def test_custom_command_list(self):
        """Matchers are tried in the order given."""
        parser = IntentParser(
            commands=[PhraseMatcher("gm", IntentAction.HELP, r"^gm$")],
        )

        assert parser.parse("gm").action == IntentAction.HELP
        assert parser.parse("help").action == IntentAction.UNKNOWN

    def test_parse_is_pure(self):
        parser = IntentParser()

        assert parser.parse("swap 1 NEAR for SUI") == parser.parse("swap 1 NEAR for SUI")


class TestHelpers:
    """Amount normalization and alias lookups."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("100", "100"),
            ("1,000", "1000"),
            ("0.5", "0.5"),
            (".5", "0.5"),
            ("5.", "5"),
            ("1.2.3", None),
            (".", None),
            ("abc", None),
        ],
    )
    def test_normalize_amount(self, raw, expected):
        assert normalize_amount(raw) == expected

    def test_resolve_token_symbol(self):
        assert resolve_token_symbol("tether") == "USDT"
        assert resolve_token_symbol("pepe") == "PEPE"

    def test_resolve_chain(self):
        assert resolve_chain("Ethereum") == "eth"
        assert resolve_chain("polygon") == "pol"
        assert resolve_chain("nowhere") is None

    def test_find_chain_mention(self):
        assert find_chain_mention("what is on arbitrum") == "arb"
        assert find_chain_mention("nothing here") is None

    def test_extract_chain_hints(self):
        assert extract_chain_hints("to solana network") == (None, "sol")
        assert extract_chain_hints("from near chain") == ("near", None)
