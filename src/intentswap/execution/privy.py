"""Delegated signing through Privy server wallets.

The NEAR transaction is built and hashed locally; Privy's ``raw_sign``
signs the sha256 digest with the wallet's ed25519 key. Requests carry an
authorization signature made with the app's P-256 authorization key.
"""

import base64
import json
import logging
from decimal import Decimal
from typing import Optional

import httpx
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.serialization import load_der_private_key

from intentswap.exceptions import DelegatedSignerError, ExecutionSetupError, NearRpcError
from intentswap.execution.near import DEFAULT_FEE_RESERVE, NearDepositExecutor
from intentswap.execution.near_rpc import NearRpcClient
from intentswap.execution.near_tx import (
    Action,
    encode_signed_transaction,
    public_key_from_implicit_account,
)

logger = logging.getLogger(__name__)

PRIVY_API_URL = "https://api.privy.io"
AUTH_KEY_PREFIX = "wallet-auth:"


def canonical_json(value: dict) -> bytes:
    """Sorted keys, no whitespace."""
    return json.dumps(value, sort_keys=True, separators=(",", ":")).encode()


class PrivyClient:
    """Just enough of the Privy wallet API to raw-sign a hash."""

    def __init__(
        self,
        app_id: str,
        app_secret: str,
        authorization_secret: str,
        base_url: str = PRIVY_API_URL,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not app_id or not app_secret:
            raise ExecutionSetupError("PRIVY_APP_ID and PRIVY_APP_SECRET must be set")
        self.app_id = app_id
        self.app_secret = app_secret
        self.authorization_secret = authorization_secret
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def authorization_signature(self, url: str, body: dict) -> str:
        """Sign the canonical request payload with the authorization key."""
        secret = self.authorization_secret
        if secret.startswith(AUTH_KEY_PREFIX):
            secret = secret[len(AUTH_KEY_PREFIX):]

        try:
            private_key = load_der_private_key(base64.b64decode(secret), password=None)
        except ValueError as e:
            raise ExecutionSetupError(f"Invalid Privy authorization key: {e}")

        if not isinstance(private_key, ec.EllipticCurvePrivateKey):
            raise ExecutionSetupError("Privy authorization key must be a P-256 key")

        payload = canonical_json(
            {
                "version": 1,
                "method": "POST",
                "url": url,
                "body": body,
                "headers": {"privy-app-id": self.app_id},
            }
        )
        signature = private_key.sign(payload, ec.ECDSA(hashes.SHA256()))
        return base64.b64encode(signature).decode()

    async def raw_sign(self, wallet_id: str, digest: bytes) -> bytes:
        """Sign a 32-byte digest with the wallet key.

        Raises:
            DelegatedSignerError: Privy rejected the request or returned no
                signature
        """
        url = f"{self.base_url}/v1/wallets/{wallet_id}/raw_sign"
        body = {"params": {"hash": f"0x{digest.hex()}"}}
        headers = {
            "Content-Type": "application/json",
            "privy-app-id": self.app_id,
            "privy-authorization-signature": self.authorization_signature(url, body),
        }

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.post(
                url,
                content=canonical_json(body),
                headers=headers,
                auth=(self.app_id, self.app_secret),
            )

        if response.status_code != 200:
            raise DelegatedSignerError(
                f"Privy raw_sign failed: {response.status_code} - {response.text}"
            )

        data = response.json()
        signature = data.get("signature") or (data.get("data") or {}).get("signature")
        if not signature:
            raise DelegatedSignerError("Privy raw_sign returned no signature")

        if signature.startswith("0x"):
            signature = signature[2:]
        try:
            raw = bytes.fromhex(signature)
        except ValueError:
            raise DelegatedSignerError("Privy raw_sign returned a malformed signature")
        if len(raw) != 64:
            raise DelegatedSignerError(f"Privy signature has {len(raw)} bytes, expected 64")
        return raw


class DelegatedSignerExecutor(NearDepositExecutor):
    """Deposits from a Privy-managed NEAR implicit account."""

    def __init__(
        self,
        wallet_id: str,
        near_address: str,
        privy: PrivyClient,
        rpc: NearRpcClient,
        fee_reserve: Decimal = DEFAULT_FEE_RESERVE,
    ):
        super().__init__(near_address, rpc, fee_reserve)
        self.wallet_id = wallet_id
        self.privy = privy
        self.public_key = public_key_from_implicit_account(near_address)

    async def sign_and_send(self, receiver_id: str, actions: list[Action]) -> str:
        try:
            tx = await self.prepare_transaction(self.public_key, receiver_id, actions)
        except NearRpcError:
            raise ExecutionSetupError(
                "NEAR account not yet initialized. Send some NEAR to "
                f"{self.account_id} first to activate it.",
                chain="near",
            )

        digest = tx.hash()
        logger.info(f"Requesting Privy signature for wallet {self.wallet_id}")
        signature = await self.privy.raw_sign(self.wallet_id, digest)
        return await self.broadcast(encode_signed_transaction(tx, signature))
