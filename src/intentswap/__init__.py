"""intentswap - conversational cross-chain swaps over NEAR Intents."""

__version__ = "0.1.0"
