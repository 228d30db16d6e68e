"""Conversational swap agent.

``SwapAgent.process_message`` is the one entry point front ends call. Each
turn runs under the conversation's lock: parse, resolve, quote or execute,
then save the session. Errors become typed responses; nothing escapes.
"""

import logging
import re
from typing import Optional

import httpx

from intentswap.agent import messages
from intentswap.agent.context import MessageContext
from intentswap.agent.locks import ConversationLock, ConversationLockRegistry, LockTimeoutError
from intentswap.agent.responses import AgentResponse, MessageType
from intentswap.agent.session import PendingQuote, SwapSession
from intentswap.agent.store import InMemorySessionStore, SessionStore
from intentswap.catalog import ResolvedToken, TokenCatalog
from intentswap.config import Settings, get_settings
from intentswap.exceptions import (
    AddressUnavailable,
    ExecutionSetupError,
    NearRpcError,
    OneClickAPIError,
    UnsupportedAssetError,
)
from intentswap.execution.base import ExecutionResult, explorer_url, near_blocks_url
from intentswap.execution.factory import get_deposit_executor
from intentswap.execution.near import build_deposit_actions
from intentswap.execution.near_rpc import NearRpcClient
from intentswap.execution.privy import PrivyClient
from intentswap.execution.runner import run_deposit, submit_deposit_best_effort
from intentswap.execution.strategy import (
    ClientSign,
    CredentialBundle,
    DelegatedSigning,
    ExecutionStrategy,
    ImportedCredentials,
    ManualDeposit,
    ServiceAccount,
    select_strategy,
)
from intentswap.intent.parser import IntentAction, IntentParser, ParsedIntent
from intentswap.oneclick.client import OneClickClient
from intentswap.oneclick.models import StatusResponse
from intentswap.resolver import find_best_token, to_smallest_unit, token_decimals
from intentswap.routing.addresses import Identities, route_addresses
from intentswap.routing.quote_engine import QuoteEngine
from intentswap.status.poller import StatusCallback, poll_status

logger = logging.getLogger(__name__)

DEPOSIT_SENT_RE = re.compile(
    r"^deposit_sent\s+([A-Za-z0-9]+)\s+([A-Za-z0-9._-]+)", re.IGNORECASE
)

SERVICE_ERRORS = (OneClickAPIError, httpx.HTTPError)


def _token_dict(token: ResolvedToken) -> dict:
    return {
        "symbol": token.symbol,
        "chain": token.chain,
        "asset_id": token.asset_id,
        "decimals": token.decimals,
        "contract_address": token.contract_address,
        "price": str(token.price) if token.price is not None else None,
    }


class SwapAgent:
    """Turns chat messages into quotes, deposits and status checks."""

    def __init__(
        self,
        settings: Settings,
        client: OneClickClient,
        catalog: Optional[TokenCatalog] = None,
        engine: Optional[QuoteEngine] = None,
        store: Optional[SessionStore] = None,
        rpc: Optional[NearRpcClient] = None,
        privy: Optional[PrivyClient] = None,
        parser: Optional[IntentParser] = None,
    ):
        self.settings = settings
        self.client = client
        self.catalog = catalog or TokenCatalog(client, settings.token_cache_ttl_seconds)
        self.engine = engine or QuoteEngine(
            client,
            referral=settings.oneclick_referral,
            slippage_bps=settings.default_slippage_bps,
            deadline_seconds=settings.quote_deadline_seconds,
            waiting_time_ms=settings.quote_waiting_time_ms,
        )
        self.locks = ConversationLockRegistry()
        self.store = store or InMemorySessionStore(settings.session_pool_max)
        if self.store.on_evict is None:
            self.store.on_evict = self.locks.discard
        self.rpc = rpc or NearRpcClient(settings.near_rpc_url)
        self.privy = privy
        self.parser = parser or IntentParser()

    @classmethod
    def from_settings(
        cls, settings: Optional[Settings] = None, store: Optional[SessionStore] = None
    ) -> "SwapAgent":
        settings = settings or get_settings()
        client = OneClickClient(settings.oneclick_api_url, jwt=settings.oneclick_jwt)
        return cls(settings, client, store=store)

    async def track_swap(
        self, deposit_address: str, on_update: Optional[StatusCallback] = None
    ) -> StatusResponse:
        """Poll a swap until it settles, using the configured poll limits."""
        return await poll_status(
            self.client,
            deposit_address,
            on_update=on_update,
            max_attempts=self.settings.status_poll_max_attempts,
            interval=self.settings.status_poll_interval_seconds,
        )

    # ======================
    # Entry point
    # ======================

    async def process_message(
        self, text: str, context: Optional[MessageContext] = None
    ) -> AgentResponse:
        """Handle one user message.

        Args:
            text: Raw message text
            context: Caller identity and credentials for this message

        Returns:
            AgentResponse; errors are reported as ``type=error``
        """
        context = context or MessageContext()

        try:
            async with ConversationLock(self.locks, context.session_id):
                session = await self.store.get_or_create(context.session_id)
                response = await self._dispatch(text or "", context, session)
                await self.store.save(session)
                return response
        except LockTimeoutError as e:
            return AgentResponse.error(str(e), "Try again")
        except Exception as e:
            logger.exception(f"Unhandled error in conversation {context.session_id}: {e}")
            return AgentResponse.error(f"Something went wrong: {e}", "Try again", "Help")

    async def _dispatch(
        self, text: str, context: MessageContext, session: SwapSession
    ) -> AgentResponse:
        deposit_sent = DEPOSIT_SENT_RE.match(text.strip())
        if deposit_sent:
            return await self._handle_deposit_sent(
                deposit_sent.group(1), deposit_sent.group(2), session
            )

        intent = self.parser.parse(text)
        logger.debug(f"[{session.conversation_id}] intent={intent.action.value}")

        action = intent.action
        if action == IntentAction.HELP:
            return self._handle_help(context)
        if action == IntentAction.LIST_TOKENS:
            return await self._handle_tokens(intent.chain_in)
        if action == IntentAction.LIST_CHAINS:
            return await self._handle_chains()
        if action in (IntentAction.SWAP, IntentAction.QUOTE):
            return await self._handle_swap_quote(intent, context, session)
        if action == IntentAction.CONFIRM:
            return await self._handle_confirm(context, session)
        if action == IntentAction.CANCEL:
            return self._handle_cancel(session)
        if action == IntentAction.STATUS:
            return await self._handle_status(intent.deposit_address_ref, session)
        if action == IntentAction.BALANCE:
            return await self._handle_balance(context)
        if action == IntentAction.FUND:
            return self._handle_fund(context)
        return self._handle_unknown(text)

    # ======================
    # Helpers
    # ======================

    def _credentials(self, context: MessageContext) -> CredentialBundle:
        return context.credentials(
            service_account_id=self.settings.sender_near_account,
            service_private_key=self.settings.sender_private_key,
        )

    def _identities(self, context: MessageContext) -> Identities:
        return Identities(
            wallet_address=context.user_address,
            user_near_account=context.near_account_id or context.privy_near_address,
            service_near_account=self.settings.sender_near_account,
        )

    def _execution_note(
        self, strategy: ExecutionStrategy, context: MessageContext, identities: Identities
    ) -> str:
        if isinstance(strategy, (ImportedCredentials, ServiceAccount)):
            return (
                f'🚀 I can auto-execute this swap from {strategy.account_id}. '
                'Say "confirm" to proceed!'
            )
        if isinstance(strategy, DelegatedSigning):
            return (
                f"🚀 I can auto-execute this swap from your wallet {strategy.near_address}. "
                'Say "confirm" to proceed!'
            )
        if isinstance(strategy, ClientSign):
            return (
                "🔐 I'll prepare the deposit transaction for you to sign with your NEAR "
                f'wallet ({strategy.account_id}). Say "confirm" to proceed!'
            )
        if context.near_account_id:
            return (
                '💡 Say "confirm" to get the deposit address. Then send your tokens '
                f"manually from {context.near_account_id}."
            )
        if not identities.has_any:
            return "⚠️ Connect your wallet to execute this swap."
        return '💡 Say "confirm" or "execute" to proceed with this swap.'

    # ======================
    # Informational handlers
    # ======================

    def _handle_help(self, context: MessageContext) -> AgentResponse:
        service = self.settings.sender_near_account if self.settings.has_service_account else None
        return AgentResponse(
            message=messages.help_message(context.near_account_id, service),
            type=MessageType.HELP,
            suggested_actions=[
                "Show tokens on SUI",
                "Swap 0.01 NEAR for SUI",
                "What chains are supported?",
                "Balance",
            ],
        )

    async def _handle_tokens(self, chain: Optional[str]) -> AgentResponse:
        try:
            if chain:
                tokens = await self.catalog.tokens_on_chain(chain)
                label = chain
            else:
                tokens = await self.catalog.tokens_on_chain("sui")
                label = "sui"
                if not tokens:
                    tokens = await self.catalog.get_entries()
                    label = "all chains"
        except SERVICE_ERRORS as e:
            return AgentResponse.error(f"Failed to fetch tokens: {e}", "Try again")

        if not tokens:
            message = (
                f'No tokens found on the {chain} chain. Try "chains" to see all supported chains.'
                if chain
                else "No tokens found. The API might be temporarily unavailable."
            )
            return AgentResponse.text(message, "Show all chains", "Show tokens on NEAR")

        by_chain: dict[str, list[str]] = {}
        for token in tokens:
            by_chain.setdefault(token.chain, []).append(token.symbol)
        by_chain = {c: sorted(set(symbols)) for c, symbols in by_chain.items()}

        return AgentResponse(
            message=messages.tokens_message(label, by_chain, len(tokens)),
            type=MessageType.TOKENS,
            data={"chain": label, "tokens": [_token_dict(t) for t in tokens]},
            suggested_actions=["Swap 10 USDC for SUI", "Show tokens on NEAR", "Show all chains"],
        )

    async def _handle_chains(self) -> AgentResponse:
        try:
            chains = await self.catalog.supported_chains()
        except SERVICE_ERRORS as e:
            return AgentResponse.error(f"Failed to fetch chains: {e}", "Try again")

        return AgentResponse(
            message=messages.chains_message(chains),
            type=MessageType.CHAINS,
            data={"chains": chains},
            suggested_actions=["Show tokens on SUI", "Show tokens on NEAR", "Swap 10 USDC for SUI"],
        )

    # ======================
    # Quote
    # ======================

    async def _handle_swap_quote(
        self, intent: ParsedIntent, context: MessageContext, session: SwapSession
    ) -> AgentResponse:
        token_in, token_out, amount_in = intent.token_in, intent.token_out, intent.amount_in

        if not token_in or not token_out:
            return AgentResponse.text(
                "I need both the input and output tokens to generate a quote. "
                'Please specify like: "swap 100 USDC for SUI"',
                "Swap 100 USDC for SUI",
                "Buy SUI with 50 USDT",
                "Help",
            )

        if not amount_in:
            return AgentResponse.text(
                f"How much {token_in} would you like to swap for {token_out}? "
                "Please specify an amount.",
                f"Swap 10 {token_in} for {token_out}",
                f"Swap 100 {token_in} for {token_out}",
                f"Swap 1000 {token_in} for {token_out}",
            )

        try:
            entries = await self.catalog.get_entries()
        except SERVICE_ERRORS as e:
            return AgentResponse.error(f"Failed to get quote: {e}", "Try again", "Help")

        origin = find_best_token(entries, token_in, intent.chain_in)
        if origin is None:
            where = f" on {intent.chain_in}" if intent.chain_in else ""
            return AgentResponse.error(
                f'Could not find token {token_in}{where}. Try "tokens" to see available tokens.',
                "Show all tokens",
                "Show tokens on SUI",
            )

        preferred_dest = intent.chain_out or ("sui" if token_out == "SUI" else None)
        dest = find_best_token(entries, token_out, preferred_dest)
        if dest is None:
            where = f" on {intent.chain_out}" if intent.chain_out else ""
            return AgentResponse.error(
                f'Could not find token {token_out}{where}. Try "tokens" to see available tokens.',
                "Show all tokens",
                "Show tokens on SUI",
            )

        decimals = token_decimals(origin)
        amount_raw = to_smallest_unit(amount_in, decimals)
        if amount_raw == "0":
            return AgentResponse.error(
                f"{amount_in} {token_in} is too small to swap.", "Swap 10 USDC for SUI"
            )

        logger.info(
            f"Token resolution: {token_in} -> {origin.symbol} on {origin.chain} ({origin.asset_id}), "
            f"{token_out} -> {dest.symbol} on {dest.chain} ({dest.asset_id})"
        )

        identities = self._identities(context)
        try:
            addresses = route_addresses(origin.chain, dest.chain, identities)
        except AddressUnavailable as e:
            return AgentResponse(
                message=f"⚠️ {e}",
                type=MessageType.ERROR,
                data={"chain": e.chain, "role": e.role},
                suggested_actions=["Help"],
            )

        pending = PendingQuote(
            origin_asset=origin.asset_id,
            destination_asset=dest.asset_id,
            amount_raw=amount_raw,
            refund_address=addresses.refund_address,
            recipient_address=addresses.recipient_address,
            token_in_symbol=token_in,
            token_out_symbol=token_out,
            amount_in_human=amount_in,
            origin_chain=origin.chain,
            dest_chain=dest.chain,
            origin_decimals=decimals,
        )
        # Stored before the dry run so a failed estimate can still be confirmed
        session.set_pending(pending)

        try:
            response = await self.engine.dry_quote(pending.to_quote_params())
        except SERVICE_ERRORS as e:
            return AgentResponse.error(
                f"Failed to get quote: {e}", "Try again", "Show tokens", "Help"
            )

        if response.error:
            return AgentResponse.error(
                f"Quote error: {response.error}", "Try a different amount", "Show tokens"
            )

        if response.quote is None:
            return AgentResponse.error(
                "No quote available for this swap pair at the moment. Solvers may not be "
                "offering this route right now. Try again shortly or try a different pair.",
                "Show tokens on SUI",
                "Try a different pair",
            )

        strategy = select_strategy(pending.origin_is_near, self._credentials(context))
        quote = response.quote

        return AgentResponse(
            message=messages.quote_message(
                pending,
                quote,
                self.engine.slippage_bps,
                self._execution_note(strategy, context, identities),
            ),
            type=MessageType.QUOTE,
            data={
                "quote": quote.model_dump(mode="json"),
                "token_in": token_in,
                "token_out": token_out,
                "amount_in": amount_in,
                "amount_raw": amount_raw,
                "origin_chain": origin.chain,
                "dest_chain": dest.chain,
                "origin_asset": origin.asset_id,
                "dest_asset": dest.asset_id,
                "refund_address": addresses.refund_address,
                "recipient_address": addresses.recipient_address,
                "strategy": strategy.kind,
                "can_auto_execute": isinstance(
                    strategy, (ImportedCredentials, DelegatedSigning, ServiceAccount)
                ),
                "can_client_sign": isinstance(strategy, ClientSign),
                "near_account_id": identities.near_account,
                "quote_only": intent.action == IntentAction.QUOTE,
            },
            suggested_actions=["Confirm swap", "Get a different quote", "Cancel"],
        )

    # ======================
    # Confirm
    # ======================

    async def _handle_confirm(self, context: MessageContext, session: SwapSession) -> AgentResponse:
        pending = session.pending_quote
        if pending is None:
            return AgentResponse.error(
                'No pending quote to confirm. Get a quote first by saying something like '
                '"swap 100 USDC for SUI".',
                "Swap 10 USDC for SUI",
                "Help",
            )

        bundle = self._credentials(context)
        strategy = select_strategy(pending.origin_is_near, bundle)
        logger.info(f"[{session.conversation_id}] confirm via {strategy.kind}")

        if isinstance(strategy, ManualDeposit):
            return await self._manual_deposit(pending, bundle, session)
        if isinstance(strategy, ClientSign):
            return await self._client_side_deposit(pending, strategy, session)
        return await self._auto_execute(pending, strategy, session)

    async def _auto_execute(
        self, pending: PendingQuote, strategy: ExecutionStrategy, session: SwapSession
    ) -> AgentResponse:
        session.take_pending()

        try:
            executor = get_deposit_executor(strategy, self.settings, rpc=self.rpc, privy=self.privy)
        except ExecutionSetupError as e:
            result = ExecutionResult(success=False, error=str(e))
        else:
            result = await run_deposit(
                self.engine,
                executor,
                pending.to_quote_params(),
                decimals=pending.origin_decimals,
                slippage_bps=self.settings.default_slippage_bps,
            )

        session.record_result(result)

        if not result.success:
            return AgentResponse(
                message=messages.execution_failed_message(result.error),
                type=MessageType.ERROR,
                data={"error": result.error, "deposit_address": result.deposit_address},
                suggested_actions=["Try again", "Help"],
            )

        if isinstance(strategy, DelegatedSigning):
            account_label = f"Privy Wallet: {strategy.near_address}"
        elif isinstance(strategy, ImportedCredentials):
            account_label = f"Your NEAR Account: {strategy.account_id}"
        else:
            account_label = f"NEAR Account: {strategy.account_id}"

        return AgentResponse(
            message=messages.execution_message(pending, result, account_label),
            type=MessageType.EXECUTION,
            data={
                **pending.to_dict(),
                "deposit_address": result.deposit_address,
                "tx_hash": result.tx_hash,
                "explorer_url": result.explorer_url,
                "near_blocks_url": result.near_blocks_url,
                "quote": result.quote.model_dump(mode="json") if result.quote else None,
                "strategy": strategy.kind,
            },
            suggested_actions=[f"Check status of {result.deposit_address}", "Get another quote"],
        )

    async def _client_side_deposit(
        self, pending: PendingQuote, strategy: ClientSign, session: SwapSession
    ) -> AgentResponse:
        session.take_pending()
        params = pending.to_quote_params().with_refund(strategy.account_id)

        try:
            response = await self.engine.live_quote(
                params, slippage_bps=self.settings.default_slippage_bps
            )
        except SERVICE_ERRORS as e:
            return AgentResponse.error(
                f"Failed to prepare deposit: {e}. Please try again.", "Try again", "Get a new quote"
            )

        quote = response.quote
        if response.error or quote is None or not quote.deposit_address:
            reason = response.error or "No deposit address returned"
            return AgentResponse.error(
                f"Failed to prepare deposit: {reason}. Please try again.",
                "Try again",
                "Get a new quote",
            )

        try:
            receiver_id, actions = build_deposit_actions(
                pending.origin_asset, quote.deposit_address, pending.amount_raw
            )
        except UnsupportedAssetError as e:
            return AgentResponse.error(str(e), "Get a new quote")

        return AgentResponse(
            message=messages.deposit_needed_message(pending, quote, strategy.account_id),
            type=MessageType.DEPOSIT_NEEDED,
            data={
                **pending.to_dict(),
                "deposit_address": quote.deposit_address,
                "amount_formatted": pending.amount_in_human,
                "token_symbol": pending.token_in_symbol,
                "deadline": quote.deadline,
                "quote": quote.model_dump(mode="json"),
                "transaction": {
                    "signer_id": strategy.account_id,
                    "receiver_id": receiver_id,
                    "actions": [a.describe() for a in actions],
                },
            },
        )

    async def _manual_deposit(
        self, pending: PendingQuote, bundle: CredentialBundle, session: SwapSession
    ) -> AgentResponse:
        if not bundle.has_identity:
            # Nothing was attempted, so the pending quote stays
            error = AddressUnavailable(
                pending.origin_chain,
                "refund",
                "Please connect your wallet or enter your NEAR account ID to execute swaps.",
            )
            return AgentResponse(
                message=f"⚠️ {error}",
                type=MessageType.ERROR,
                data={"chain": error.chain, "role": error.role},
                suggested_actions=["Help"],
            )

        session.take_pending()

        try:
            response = await self.engine.live_quote(
                pending.to_quote_params(), slippage_bps=self.settings.default_slippage_bps
            )
        except SERVICE_ERRORS as e:
            return AgentResponse.error(
                f"Failed to generate live quote: {e}. Please try again.",
                "Try again",
                "Get a new quote",
            )

        quote = response.quote
        if response.error or quote is None:
            reason = response.error or "No quote available"
            return AgentResponse.error(
                f"Failed to generate live quote: {reason}. Please try again.",
                "Try again",
                "Get a new quote",
            )

        if not quote.deposit_address:
            return AgentResponse.error(
                "Failed to generate a deposit address. The quote may have expired. "
                "Please try again.",
                "Get a new quote",
            )

        session.record_result(
            ExecutionResult(
                success=True,
                deposit_address=quote.deposit_address,
                explorer_url=explorer_url(quote.deposit_address),
                quote=quote,
            )
        )

        return AgentResponse(
            message=messages.live_quote_message(pending, quote),
            type=MessageType.LIVE_QUOTE,
            data={
                **pending.to_dict(),
                "deposit_address": quote.deposit_address,
                "quote": quote.model_dump(mode="json"),
            },
            suggested_actions=[f"Check status of {quote.deposit_address}", "Get another quote"],
        )

    async def _handle_deposit_sent(
        self, tx_hash: str, deposit_address: str, session: SwapSession
    ) -> AgentResponse:
        submit = await submit_deposit_best_effort(self.client, tx_hash, deposit_address)
        submit.log()

        session.record_result(
            ExecutionResult(
                success=True,
                deposit_address=deposit_address,
                tx_hash=tx_hash,
                explorer_url=explorer_url(deposit_address),
                near_blocks_url=near_blocks_url(tx_hash),
            )
        )

        return AgentResponse(
            message=messages.deposit_sent_message(tx_hash, deposit_address),
            type=MessageType.EXECUTION,
            data={
                "tx_hash": tx_hash,
                "deposit_address": deposit_address,
                "explorer_url": explorer_url(deposit_address),
                "near_blocks_url": near_blocks_url(tx_hash),
            },
            suggested_actions=[f"Check status of {deposit_address}", "Get another quote"],
        )

    def _handle_cancel(self, session: SwapSession) -> AgentResponse:
        if session.clear_pending():
            return AgentResponse.text("Pending swap cancelled.", "Swap 10 USDC for SUI", "Help")
        return AgentResponse.text("No pending swap to cancel.", "Swap 10 USDC for SUI", "Help")

    # ======================
    # Status and wallet
    # ======================

    async def _handle_status(
        self, deposit_address: Optional[str], session: SwapSession
    ) -> AgentResponse:
        if not deposit_address and session.last_result:
            deposit_address = session.last_result.deposit_address

        if not deposit_address:
            return AgentResponse.text(
                'Please provide a deposit address to check the status. Example: "status 0x123..."',
                "Help",
            )

        try:
            status = await self.client.get_status(deposit_address)
        except SERVICE_ERRORS as e:
            return AgentResponse.error(f"Failed to check status: {e}", "Try again", "Help")

        if status.status.is_terminal:
            actions = ["Get a new quote", "Show tokens", "Help"]
        else:
            actions = [f"Check status of {deposit_address}", "Get a new quote"]

        return AgentResponse(
            message=messages.status_message(status, deposit_address),
            type=MessageType.STATUS,
            data={"status": status.model_dump(mode="json"), "deposit_address": deposit_address},
            suggested_actions=actions,
        )

    async def _handle_balance(self, context: MessageContext) -> AgentResponse:
        account = context.near_account_id or context.privy_near_address
        if not account:
            return AgentResponse.text(
                "⚠️ No NEAR wallet connected. Enter your NEAR account ID or connect a wallet first.",
                "Help",
            )

        try:
            balance = await self.rpc.get_balance(account)
        except (NearRpcError, httpx.HTTPError) as e:
            return AgentResponse.error(f"Failed to fetch balance: {e}", "Try again", "Help")

        data = {
            "near_account_id": account,
            "is_initialized": balance.is_initialized,
            "total_near": balance.total_near,
            "available_near": balance.available_near,
            "storage_usage": balance.storage_usage,
        }
        if not balance.is_initialized:
            return AgentResponse.text(
                messages.balance_message(balance, context.user_address),
                "Fund wallet",
                "Help",
                data=data,
            )

        return AgentResponse.text(
            messages.balance_message(balance, context.user_address),
            f"Swap {balance.available_near} NEAR for SUI",
            "Show tokens",
            "Fund wallet",
            data=data,
        )

    def _handle_fund(self, context: MessageContext) -> AgentResponse:
        account = context.near_account_id or context.privy_near_address
        if not account:
            return AgentResponse.text(
                "⚠️ No NEAR wallet connected. Enter your NEAR account ID first.", "Help"
            )

        return AgentResponse.text(
            messages.fund_message(account),
            "Balance",
            "Show tokens",
            data={"near_address": account},
        )

    def _handle_unknown(self, text: str) -> AgentResponse:
        lower = text.lower()
        if "sui" in lower or "usdc" in lower or "swap" in lower:
            return AgentResponse.text(
                messages.SWAP_HINT_MESSAGE, "Swap 10 USDC for SUI", "Show tokens on SUI", "Help"
            )
        return AgentResponse.text(
            messages.UNKNOWN_MESSAGE, "Help", "Show tokens", "Swap 10 USDC for SUI"
        )
