"""Live quote -> transfer -> deposit submit."""

import logging
from typing import Optional

import httpx

from intentswap.exceptions import OneClickAPIError
from intentswap.execution.base import (
    DepositExecutor,
    ExecutionResult,
    NonCriticalResult,
    explorer_url,
    near_blocks_url,
)
from intentswap.oneclick.client import OneClickClient
from intentswap.routing.quote_engine import QuoteEngine, QuoteParams

logger = logging.getLogger(__name__)


async def submit_deposit_best_effort(
    client: OneClickClient, tx_hash: str, deposit_address: str
) -> NonCriticalResult:
    """Tell 1-Click about a deposit tx.

    1-Click detects deposits on its own; this only speeds things up, so
    failures come back as a NonCriticalResult instead of raising.
    """
    operation = f"Submit deposit tx {tx_hash}"
    try:
        await client.submit_deposit_tx(tx_hash, deposit_address)
    except (OneClickAPIError, httpx.HTTPError) as e:
        return NonCriticalResult(operation, success=False, error=str(e))
    return NonCriticalResult(operation, success=True)


async def run_deposit(
    engine: QuoteEngine,
    executor: DepositExecutor,
    params: QuoteParams,
    decimals: Optional[int] = None,
    slippage_bps: Optional[int] = None,
) -> ExecutionResult:
    """Execute a swap end to end from the executor's account.

    The refund address becomes the executing account. Never raises for
    service or transfer failures; they come back as ``success=False``.
    """
    params = params.with_refund(executor.account_id)
    logger.info(
        f"Executing swap from {executor.account_id}: {params.amount} {params.origin_asset} "
        f"-> {params.destination_asset}"
    )

    try:
        response = await engine.live_quote(params, slippage_bps=slippage_bps)
    except (OneClickAPIError, httpx.HTTPError) as e:
        logger.error(f"Live quote failed: {e}")
        return ExecutionResult(success=False, error=f"Quote failed: {e}")

    if response.error or not response.quote:
        return ExecutionResult(
            success=False, error=f"Quote failed: {response.error or 'No quote available'}"
        )

    quote = response.quote
    deposit_address = quote.deposit_address
    if not deposit_address:
        return ExecutionResult(
            success=False, error="No deposit address returned in quote", quote=quote
        )

    transfer = await executor.send_deposit(
        params.origin_asset, deposit_address, params.amount, decimals
    )
    if not transfer.success:
        return ExecutionResult(
            success=False,
            deposit_address=deposit_address,
            error=transfer.error,
            quote=quote,
        )

    submit = await submit_deposit_best_effort(engine.client, transfer.tx_hash, deposit_address)
    submit.log()

    return ExecutionResult(
        success=True,
        deposit_address=deposit_address,
        tx_hash=transfer.tx_hash,
        explorer_url=explorer_url(deposit_address),
        near_blocks_url=near_blocks_url(transfer.tx_hash),
        quote=quote,
    )
