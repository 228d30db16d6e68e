"""Bounded polling of swap status."""

import asyncio
import inspect
import logging
from typing import Awaitable, Callable, Optional, Union

import httpx

from intentswap.exceptions import OneClickAPIError
from intentswap.oneclick.client import OneClickClient
from intentswap.oneclick.models import StatusResponse, SwapStatus

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 60
DEFAULT_INTERVAL_SECONDS = 5.0
TIMEOUT_MESSAGE = "Status polling timed out"

StatusCallback = Callable[[StatusResponse], Union[None, Awaitable[None]]]


async def poll_status(
    client: OneClickClient,
    deposit_address: str,
    on_update: Optional[StatusCallback] = None,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    interval: float = DEFAULT_INTERVAL_SECONDS,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> StatusResponse:
    """Poll until the swap reaches SUCCESS, REFUNDED or FAILED.

    A failed status request counts as one attempt. When attempts run out the
    result is a synthetic PROCESSING status with ``timed_out`` set; that means
    "still unknown", not failure.

    Args:
        client: 1-Click client
        deposit_address: Deposit address from the live quote
        on_update: Called (or awaited) with every status received
        max_attempts: Maximum status requests
        interval: Fixed delay between attempts in seconds
        sleep: Sleep function, replaceable in tests

    Returns:
        Terminal status, or the synthetic timeout status
    """
    for attempt in range(1, max_attempts + 1):
        try:
            status = await client.get_status(deposit_address)
        except (OneClickAPIError, httpx.HTTPError) as e:
            logger.warning(f"Status check {attempt}/{max_attempts} for {deposit_address} failed: {e}")
        else:
            if on_update is not None:
                maybe_awaitable = on_update(status)
                if inspect.isawaitable(maybe_awaitable):
                    await maybe_awaitable

            if status.status.is_terminal:
                logger.info(f"Swap {deposit_address} finished: {status.status.value}")
                return status

        if attempt < max_attempts:
            await sleep(interval)

    logger.warning(f"Gave up polling {deposit_address} after {max_attempts} attempts")
    return StatusResponse(
        status=SwapStatus.PROCESSING,
        deposit_address=deposit_address,
        error=TIMEOUT_MESSAGE,
        timed_out=True,
    )
