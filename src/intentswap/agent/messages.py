"""User-facing message text for the swap agent."""

from decimal import Decimal, InvalidOperation
from typing import Optional

from intentswap.agent.session import PendingQuote
from intentswap.chains import shorten_address
from intentswap.execution.base import ExecutionResult, explorer_url, near_blocks_url
from intentswap.execution.near_rpc import NearBalance
from intentswap.oneclick.models import QuoteDetails, StatusResponse, SwapStatus

STATUS_EMOJI = {
    SwapStatus.PENDING_DEPOSIT: "⏳",
    SwapStatus.KNOWN_DEPOSIT_TX: "📥",
    SwapStatus.PROCESSING: "🔄",
    SwapStatus.SUCCESS: "✅",
    SwapStatus.INCOMPLETE_DEPOSIT: "⚠️",
    SwapStatus.REFUNDED: "↩️",
    SwapStatus.FAILED: "❌",
}

STATUS_NOTES = {
    SwapStatus.PENDING_DEPOSIT: "⏳ Waiting for deposit. Send tokens to the deposit address to proceed.",
    SwapStatus.KNOWN_DEPOSIT_TX: "📥 Deposit transaction seen. Waiting for it to be credited.",
    SwapStatus.PROCESSING: "🔄 Your swap is being processed. This usually takes 1-5 minutes.",
    SwapStatus.SUCCESS: "🎉 Swap completed successfully! Tokens have been delivered.",
    SwapStatus.INCOMPLETE_DEPOSIT: "⚠️ The deposit was smaller than quoted. Top it up or wait for a refund.",
    SwapStatus.REFUNDED: "↩️ The swap was refunded. Tokens have been returned to your refund address.",
    SwapStatus.FAILED: "❌ The swap failed. Please try again with a new quote.",
}


def _usd(value: Optional[str]) -> str:
    if not value:
        return ""
    try:
        return f"${Decimal(value):.2f}"
    except InvalidOperation:
        return ""


def _swap_cost(quote: QuoteDetails) -> str:
    try:
        cost = Decimal(quote.amount_in_usd) - Decimal(quote.amount_out_usd)
    except (InvalidOperation, TypeError):
        return "N/A"
    return f"${cost:.4f}"


def amount_out_text(quote: Optional[QuoteDetails]) -> str:
    if quote is None:
        return "Pending..."
    return quote.amount_out_formatted or quote.amount_out or "N/A"


def help_message(user_near: Optional[str], service_near: Optional[str]) -> str:
    if user_near:
        account_line = f"🔑 Your NEAR Account: {user_near}\n"
        footer = "🚀 Your NEAR wallet is connected! Swaps from NEAR will use your account."
    elif service_near:
        account_line = f"🔑 Server NEAR Account: {service_near} (auto-execution enabled)\n"
        footer = "🚀 Auto-execution is ON! Swaps from NEAR run automatically when you confirm."
    else:
        account_line = ""
        footer = (
            "💡 Tip: Enter your NEAR account ID to enable swaps from NEAR, "
            "or just get quotes and deposit manually."
        )

    return f"""👋 Welcome to IntentSwap!

I perform cross-chain swaps using NEAR Intents.

{account_line}
Here's what I can do:

🔄 Swap tokens - "Swap 0.1 NEAR for SUI"
💰 Get quotes - "How much SUI can I get for 50 USDC?"
📋 List tokens - "Show available tokens on SUI"
🌐 List chains - "What chains are supported?"
📊 Check status - "Check status of <deposit_address>"
💼 Balance - "Balance"
🚫 Cancel a pending swap - "Cancel"

Example commands:
• swap 0.1 NEAR for SUI
• buy SUI with 50 USDC
• quote 1000 USDT to ETH
• tokens on sui
• chains

{footer}"""


def tokens_message(chain_label: str, by_chain: dict[str, list[str]], count: int) -> str:
    lines = [f"📋 Available Tokens on {chain_label.upper()} ({count} tokens)", ""]
    for chain, symbols in by_chain.items():
        lines.append(f"{chain.upper()}: {', '.join(symbols)}")
    return "\n".join(lines)


def chains_message(chains: list[str]) -> str:
    listing = "\n".join(f"• {c.capitalize()}" for c in chains)
    return f"""🌐 Supported Blockchains ({len(chains)} chains)

{listing}

You can swap tokens between any of these chains using NEAR Intents!"""


def quote_message(
    pending: PendingQuote,
    quote: QuoteDetails,
    slippage_bps: int,
    execution_note: str,
) -> str:
    return f"""📊 Swap Quote

From: {pending.amount_in_human} {pending.token_in_symbol} ({pending.origin_chain}) {_usd(quote.amount_in_usd)}
To: {amount_out_text(quote)} {pending.token_out_symbol} ({pending.dest_chain}) {_usd(quote.amount_out_usd)}

Swap Cost: {_swap_cost(quote)}
Route: {pending.origin_chain} → NEAR Intents → {pending.dest_chain}
Slippage Tolerance: {Decimal(slippage_bps) / 100}%

{execution_note}""".rstrip()


def execution_message(pending: PendingQuote, result: ExecutionResult, account_label: str) -> str:
    return f"""✅ Swap Executed Successfully!

From: {pending.amount_in_human} {pending.token_in_symbol}
To: {amount_out_text(result.quote)} {pending.token_out_symbol}
{account_label}
Deposit Address: {result.deposit_address}
TX Hash: {result.tx_hash}
Status: 🔄 Processing

Your {pending.token_out_symbol} will arrive at the recipient address once processed.

📊 Track progress: say "status {result.deposit_address}"
🔗 NEAR Intents Explorer: {result.explorer_url}
🔗 NearBlocks TX: {result.near_blocks_url}"""


def execution_failed_message(error: Optional[str]) -> str:
    return f"""❌ Swap Failed

{error or "Unknown error occurred during swap execution."}

Please try again with a new quote."""


def deposit_needed_message(pending: PendingQuote, quote: QuoteDetails, account_id: str) -> str:
    return f"""🔐 Sign & Send Deposit

Your NEAR wallet will be prompted to sign a transfer of {pending.amount_in_human} {pending.token_in_symbol} to the deposit address.

From: {pending.amount_in_human} {pending.token_in_symbol}
To: {amount_out_text(quote)} {pending.token_out_symbol}
Deposit Address: {quote.deposit_address}
Your NEAR Account: {account_id}

⏳ Please approve the transaction in your wallet..."""


def live_quote_message(pending: PendingQuote, quote: QuoteDetails) -> str:
    recipient = shorten_address(pending.recipient_address)
    return f"""✅ Live Quote Ready!

From: {pending.amount_in_human} {pending.token_in_symbol}
To: {amount_out_text(quote)} {pending.token_out_symbol}
Deposit Address: {quote.deposit_address}
Deadline: {quote.deadline or "N/A"}
Time Estimate: {quote.time_estimate or "N/A"}

Instructions:
1. Send exactly {pending.amount_in_human} {pending.token_in_symbol} to the deposit address above
2. The swap will execute automatically once the deposit is detected
3. Funds will arrive at your address: {recipient}

You can check the status anytime by saying: "status {quote.deposit_address}"

🔗 Track on NEAR Intents Explorer: {explorer_url(quote.deposit_address)}"""


def deposit_sent_message(tx_hash: str, deposit_address: str) -> str:
    return f"""✅ Deposit Submitted!

TX Hash: {tx_hash}
Deposit Address: {deposit_address}
Status: 🔄 Processing

Your swap is being processed! Say "status {deposit_address}" to track progress.

🔗 NEAR Intents Explorer: {explorer_url(deposit_address)}
🔗 NearBlocks TX: {near_blocks_url(tx_hash)}"""


def status_message(status: StatusResponse, deposit_address: str) -> str:
    emoji = STATUS_EMOJI.get(status.status, "❓")
    lines = [
        f"{emoji} Swap Status: {status.status.value}",
        "",
        f"Deposit Address: {deposit_address}",
    ]
    if status.tx_hash:
        lines.append(f"Transaction: {status.tx_hash}")
    lines.extend(["", STATUS_NOTES[status.status]])
    if status.error:
        lines.append(f"Note: {status.error}")
    lines.extend(["", f"🔗 View on Explorer: {explorer_url(deposit_address)}"])
    return "\n".join(lines)


def balance_message(balance: NearBalance, wallet_address: Optional[str]) -> str:
    if not balance.is_initialized:
        return f"""💰 Wallet Balance

NEAR Account: {balance.account_id}
Status: ❌ Not initialized

Your account hasn't received any NEAR yet. Send NEAR to activate it.
Say "fund" to see your deposit address."""

    message = f"""💰 Wallet Balance

NEAR Account: {balance.account_id}
Total Balance: {balance.total_near} NEAR
Available: {balance.available_near} NEAR
"""
    if wallet_address:
        message += f"\nReceive Wallet: {wallet_address}\n"
    message += '\n💡 Try: "swap 0.5 NEAR for SUI" or any amount you want!'
    return message


def fund_message(account_id: str) -> str:
    return f"""💳 Fund Your Wallet

Send NEAR to this address:

{account_id}

💡 After funding, say "balance" to check your balance, then swap any amount you want!"""


SWAP_HINT_MESSAGE = """I think you want to do a swap! Try being more specific, like:

• "Swap 100 USDC for SUI"
• "How much SUI for 50 USDC?"
• "Quote 1000 USDT to ETH\""""

UNKNOWN_MESSAGE = """I'm not sure what you'd like to do. I specialize in cross-chain token swaps using NEAR Intents.

Try saying:
• "swap 100 USDC for SUI" - to get a swap quote
• "tokens" - to see available tokens
• "help" - for a full list of commands"""
