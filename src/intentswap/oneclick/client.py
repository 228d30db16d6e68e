"""NEAR Intents 1-Click API client.

Handles token listing, quote generation, deposit submission and status
checks. API docs:
https://docs.near-intents.org/near-intents/integration/distribution-channels/1click-api
"""

import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from intentswap.chains import shorten_address
from intentswap.exceptions import OneClickAPIError
from intentswap.oneclick.models import (
    DepositSubmitRequest,
    QuoteRequest,
    QuoteResponse,
    StatusResponse,
    TokenInfo,
)

logger = logging.getLogger(__name__)

ONECLICK_MAINNET = "https://1click.chaindefuser.com"


class OneClickClient:
    """Async client for the 1-Click REST API.

    Each call opens a short-lived ``httpx.AsyncClient``. ``transport`` can be
    supplied to route requests elsewhere (tests use ``httpx.MockTransport``).
    """

    def __init__(
        self,
        base_url: str = ONECLICK_MAINNET,
        jwt: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.jwt = jwt
        self.timeout = timeout
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.jwt:
            headers["Authorization"] = f"Bearer {self.jwt}"
        return headers

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            headers=self._headers(),
            transport=self._transport,
        )

    async def get_tokens(self) -> list[TokenInfo]:
        """Fetch all supported tokens. No authentication required."""
        async with self._client() as client:
            response = await client.get("/v0/tokens")

        if response.status_code != 200:
            raise OneClickAPIError("fetch tokens", response.status_code, response.text)

        tokens = [TokenInfo.model_validate(item) for item in response.json()]
        logger.debug(f"Fetched {len(tokens)} tokens from 1-Click")
        return tokens

    async def get_quote(self, request: QuoteRequest) -> QuoteResponse:
        """Request a swap quote (dry or live)."""
        logger.info(
            f"1-Click quote request: dry={request.dry} {request.origin_asset} -> "
            f"{request.destination_asset} amount={request.amount} "
            f"refundTo={shorten_address(request.refund_to)} "
            f"recipient={shorten_address(request.recipient)}"
        )

        async with self._client() as client:
            response = await client.post("/v0/quote", json=request.to_wire())

        if response.status_code >= 300:
            logger.error(f"1-Click quote error: {response.status_code} {response.text}")
            raise OneClickAPIError("get quote", response.status_code, response.text)

        return QuoteResponse.model_validate(response.json())

    async def submit_deposit_tx(self, tx_hash: str, deposit_address: str) -> None:
        """Submit a deposit transaction hash to speed up processing."""
        body = DepositSubmitRequest(tx_hash=tx_hash, deposit_address=deposit_address)

        async with self._client() as client:
            response = await client.post(
                "/v0/deposit/submit", json=body.model_dump(by_alias=True)
            )

        if response.status_code >= 300:
            raise OneClickAPIError("submit deposit tx", response.status_code, response.text)

    async def get_status(self, deposit_address: str) -> StatusResponse:
        """Check the status of a swap by its deposit address.

        Raises:
            OneClickAPIError: Non-200 response, or a body that is not a
                status object this client understands
        """
        async with self._client() as client:
            response = await client.get(
                "/v0/status", params={"depositAddress": deposit_address}
            )

        if response.status_code != 200:
            raise OneClickAPIError("get status", response.status_code, response.text)

        try:
            return StatusResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.warning(f"Unreadable status for {deposit_address}: {e}")
            raise OneClickAPIError("read status", response.status_code, response.text) from e
