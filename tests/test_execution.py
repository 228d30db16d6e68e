"""Tests for deposit executors, the deposit flow and the executor factory."""

import base64
import hashlib
import json
from decimal import Decimal

import base58
import httpx
import pytest
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from nacl.signing import SigningKey, VerifyKey

from intentswap.exceptions import DelegatedSignerError, ExecutionSetupError
from intentswap.execution.base import ExecutionResult, explorer_url, near_blocks_url
from intentswap.execution.factory import get_deposit_executor
from intentswap.execution.near import NearKeyPairExecutor, build_deposit_actions
from intentswap.execution.near_rpc import NearRpcClient, format_near
from intentswap.execution.near_tx import FunctionCallAction, TransferAction
from intentswap.execution.privy import DelegatedSignerExecutor, PrivyClient, canonical_json
from intentswap.execution.runner import run_deposit, submit_deposit_best_effort
from intentswap.execution.simulated import SimulatedDepositExecutor
from intentswap.execution.strategy import (
    ClientSign,
    DelegatedSigning,
    ImportedCredentials,
    ManualDeposit,
    ServiceAccount,
)
from intentswap.routing.quote_engine import QuoteEngine, QuoteParams

from conftest import (
    DEPOSIT_ADDRESS,
    NEAR_ACCOUNT,
    NEAR_RPC_URL,
    SUI_ASSET,
    SUI_WALLET,
    USDC_NEAR,
    WNEAR,
    make_settings,
)

NEAR = 10**24
SEED = bytes(range(32))
KEY = "ed25519:" + base58.b58encode(SEED).decode()
PRIVY_URL = "https://privy.test"


class FakeNearRpc:
    """Minimal NEAR JSON-RPC node behind MockTransport."""

    def __init__(self):
        self.amount = 5 * NEAR
        self.storage_usage = 1000
        self.token_balance = 500_000_000
        self.nonce = 41
        self.account_exists = True
        self.access_key_error = None
        self.broadcast_status = {"SuccessValue": ""}
        self.http_status = 200
        self.calls: list[dict] = []

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def methods(self) -> list[str]:
        return [c["method"] if c["method"] != "query" else c["params"]["request_type"] for c in self.calls]

    def broadcasts(self) -> list[bytes]:
        return [
            base64.b64decode(c["params"][0]) for c in self.calls if c["method"] == "broadcast_tx_commit"
        ]

    def handler(self, request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content)
        self.calls.append(payload)
        if self.http_status != 200:
            return httpx.Response(self.http_status, text="node down")
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": payload["id"], **self._answer(payload)})

    def _answer(self, payload: dict) -> dict:
        method, params = payload["method"], payload["params"]

        if method == "block":
            return {"result": {"header": {"hash": base58.b58encode(b"\x22" * 32).decode()}}}

        if method == "broadcast_tx_commit":
            return {
                "result": {
                    "status": self.broadcast_status,
                    "transaction": {"hash": "TxHash111"},
                    "transaction_outcome": {"id": "TxHash111"},
                }
            }

        request_type = params["request_type"]
        if request_type == "view_account":
            if not self.account_exists:
                return {
                    "error": {
                        "name": "HANDLER_ERROR",
                        "cause": {"name": "UNKNOWN_ACCOUNT"},
                        "message": f"account {params['account_id']} does not exist",
                    }
                }
            return {"result": {"amount": str(self.amount), "storage_usage": self.storage_usage}}

        if request_type == "view_access_key":
            if self.access_key_error:
                return {"result": {"error": self.access_key_error}}
            return {"result": {"nonce": self.nonce, "permission": "FullAccess"}}

        if request_type == "call_function":
            value = json.dumps(str(self.token_balance)).encode()
            return {"result": {"result": list(value), "logs": []}}

        return {"error": {"name": "UNKNOWN_METHOD"}}


@pytest.fixture
def near_rpc() -> FakeNearRpc:
    return FakeNearRpc()


@pytest.fixture
def rpc_client(near_rpc) -> NearRpcClient:
    return NearRpcClient(NEAR_RPC_URL, transport=near_rpc.transport)


def split_signed(signed: bytes) -> tuple[bytes, bytes]:
    """(transaction bytes, signature)"""
    return signed[:-65], signed[-64:]


class TestNearRpcClient:
    """Balance and view calls."""

    @pytest.mark.asyncio
    async def test_balance_is_storage_adjusted(self, rpc_client):
        balance = await rpc_client.get_balance(NEAR_ACCOUNT)

        assert balance.is_initialized
        assert balance.total_near == "5"
        assert balance.available_near == "4.99"

    @pytest.mark.asyncio
    async def test_unknown_account(self, rpc_client, near_rpc):
        near_rpc.account_exists = False

        balance = await rpc_client.get_balance("ab" * 32)

        assert not balance.is_initialized
        assert balance.available_yocto == 0

    @pytest.mark.asyncio
    async def test_ft_balance_of(self, rpc_client, near_rpc):
        assert await rpc_client.ft_balance_of("usdc.near", NEAR_ACCOUNT) == 500_000_000

        args = near_rpc.calls[0]["params"]["args_base64"]
        assert json.loads(base64.b64decode(args)) == {"account_id": NEAR_ACCOUNT}

    def test_format_near(self):
        assert format_near(NEAR) == "1"
        assert format_near(NEAR // 2) == "0.5"
        assert format_near(0) == "0"


class TestBuildDepositActions:
    """Native vs token deposits."""

    def test_native_near(self):
        receiver, actions = build_deposit_actions(WNEAR, DEPOSIT_ADDRESS, str(NEAR))

        assert receiver == DEPOSIT_ADDRESS
        assert actions == [TransferAction(amount=NEAR)]

    def test_nep141_token(self):
        receiver, actions = build_deposit_actions(USDC_NEAR, DEPOSIT_ADDRESS, "1500000")

        assert receiver == USDC_NEAR.removeprefix("nep141:")
        assert isinstance(actions[0], FunctionCallAction)
        assert actions[0].args["receiver_id"] == DEPOSIT_ADDRESS


class TestNearKeyPairExecutor:
    """Deposits signed with a local key."""

    @pytest.fixture
    def executor(self, rpc_client) -> NearKeyPairExecutor:
        return NearKeyPairExecutor(NEAR_ACCOUNT, KEY, rpc_client)

    @pytest.mark.asyncio
    async def test_native_deposit(self, executor, near_rpc):
        result = await executor.send_deposit(WNEAR, DEPOSIT_ADDRESS, str(NEAR))

        assert result.success
        assert result.tx_hash == "TxHash111"
        assert near_rpc.methods() == ["view_account", "view_access_key", "block", "broadcast_tx_commit"]

        tx_bytes, signature = split_signed(near_rpc.broadcasts()[0])
        assert DEPOSIT_ADDRESS.encode() in tx_bytes
        VerifyKey(SigningKey(SEED).verify_key.encode()).verify(
            hashlib.sha256(tx_bytes).digest(), signature
        )

    @pytest.mark.asyncio
    async def test_nonce_is_incremented(self, executor, near_rpc):
        await executor.send_deposit(WNEAR, DEPOSIT_ADDRESS, str(NEAR))

        tx_bytes, _ = split_signed(near_rpc.broadcasts()[0])
        signer_len = len(NEAR_ACCOUNT)
        nonce_offset = 4 + signer_len + 1 + 32
        assert int.from_bytes(tx_bytes[nonce_offset:nonce_offset + 8], "little") == 42

    @pytest.mark.asyncio
    async def test_token_deposit(self, executor, near_rpc):
        result = await executor.send_deposit(USDC_NEAR, DEPOSIT_ADDRESS, "100000000", decimals=6)

        assert result.success
        assert "call_function" in near_rpc.methods()
        tx_bytes, _ = split_signed(near_rpc.broadcasts()[0])
        assert b"ft_transfer_call" in tx_bytes

    @pytest.mark.asyncio
    async def test_insufficient_native_balance(self, executor, near_rpc):
        result = await executor.send_deposit(WNEAR, DEPOSIT_ADDRESS, str(5 * NEAR))

        assert not result.success
        assert "Insufficient NEAR balance" in result.error
        assert near_rpc.broadcasts() == []

    @pytest.mark.asyncio
    async def test_insufficient_token_balance(self, executor, near_rpc):
        near_rpc.token_balance = 1_000_000

        result = await executor.send_deposit(USDC_NEAR, DEPOSIT_ADDRESS, "100000000", decimals=6)

        assert not result.success
        assert "need 100" in result.error
        assert "have 1" in result.error

    @pytest.mark.asyncio
    async def test_token_deposit_needs_gas_reserve(self, executor, near_rpc):
        near_rpc.amount = 10**19 * near_rpc.storage_usage

        result = await executor.send_deposit(USDC_NEAR, DEPOSIT_ADDRESS, "100000000", decimals=6)

        assert not result.success
        assert "NEAR" in result.error

    @pytest.mark.asyncio
    async def test_failed_execution(self, executor, near_rpc):
        near_rpc.broadcast_status = {"Failure": {"ActionError": {"kind": "LackBalanceForState"}}}

        result = await executor.send_deposit(WNEAR, DEPOSIT_ADDRESS, str(NEAR))

        assert not result.success
        assert "LackBalanceForState" in result.error

    @pytest.mark.asyncio
    async def test_rpc_down(self, executor, near_rpc):
        near_rpc.http_status = 502

        result = await executor.send_deposit(WNEAR, DEPOSIT_ADDRESS, str(NEAR))

        assert not result.success
        assert "HTTP 502" in result.error

    @pytest.mark.asyncio
    async def test_unsupported_asset(self, executor, near_rpc):
        result = await executor.send_deposit("btc:native", DEPOSIT_ADDRESS, "1")

        assert not result.success
        assert "Unsupported origin asset" in result.error
        assert near_rpc.calls == []

    def test_requires_account(self, rpc_client):
        with pytest.raises(ExecutionSetupError):
            NearKeyPairExecutor("", KEY, rpc_client)


class PrivyService:
    """Privy raw_sign endpoint that signs with a known ed25519 key."""

    def __init__(self, signing_key: SigningKey, auth_key: ec.EllipticCurvePrivateKey):
        self.signing_key = signing_key
        self.auth_public_key = auth_key.public_key()
        self.status_code = 200
        self.requests: list[httpx.Request] = []

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.status_code != 200:
            return httpx.Response(self.status_code, text="denied")

        body = json.loads(request.content)
        payload = canonical_json(
            {
                "version": 1,
                "method": "POST",
                "url": str(request.url),
                "body": body,
                "headers": {"privy-app-id": request.headers["privy-app-id"]},
            }
        )
        self.auth_public_key.verify(
            base64.b64decode(request.headers["privy-authorization-signature"]),
            payload,
            ec.ECDSA(hashes.SHA256()),
        )

        digest = bytes.fromhex(body["params"]["hash"][2:])
        signature = self.signing_key.sign(digest).signature
        return httpx.Response(200, json={"method": "raw_sign", "data": {"signature": "0x" + signature.hex()}})


@pytest.fixture
def auth_key() -> ec.EllipticCurvePrivateKey:
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture
def auth_secret(auth_key) -> str:
    der = auth_key.private_bytes(
        serialization.Encoding.DER,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption(),
    )
    return "wallet-auth:" + base64.b64encode(der).decode()


@pytest.fixture
def privy_service(auth_key) -> PrivyService:
    return PrivyService(SigningKey(SEED), auth_key)


@pytest.fixture
def privy(privy_service, auth_secret) -> PrivyClient:
    return PrivyClient(
        app_id="app-1",
        app_secret="app-secret",
        authorization_secret=auth_secret,
        base_url=PRIVY_URL,
        transport=privy_service.transport,
    )


class TestPrivy:
    """Delegated signing."""

    IMPLICIT = SigningKey(SEED).verify_key.encode().hex()

    def test_requires_app_credentials(self):
        with pytest.raises(ExecutionSetupError):
            PrivyClient(app_id="", app_secret="", authorization_secret="")

    @pytest.mark.asyncio
    async def test_raw_sign_request(self, privy, privy_service):
        signature = await privy.raw_sign("wallet-1", b"\x01" * 32)

        assert len(signature) == 64
        request = privy_service.requests[0]
        assert str(request.url) == f"{PRIVY_URL}/v1/wallets/wallet-1/raw_sign"
        assert request.headers["privy-app-id"] == "app-1"
        expected_auth = base64.b64encode(b"app-1:app-secret").decode()
        assert request.headers["Authorization"] == f"Basic {expected_auth}"
        assert json.loads(request.content) == {"params": {"hash": "0x" + "01" * 32}}

    @pytest.mark.asyncio
    async def test_raw_sign_rejected(self, privy, privy_service):
        privy_service.status_code = 403

        with pytest.raises(DelegatedSignerError):
            await privy.raw_sign("wallet-1", b"\x01" * 32)

    @pytest.mark.asyncio
    async def test_bad_authorization_key(self, privy_service):
        client = PrivyClient(
            app_id="app-1",
            app_secret="app-secret",
            authorization_secret="wallet-auth:bm90LWEta2V5",
            base_url=PRIVY_URL,
            transport=privy_service.transport,
        )

        with pytest.raises(ExecutionSetupError):
            await client.raw_sign("wallet-1", b"\x01" * 32)

    @pytest.mark.asyncio
    async def test_delegated_deposit(self, privy, rpc_client, near_rpc):
        executor = DelegatedSignerExecutor("wallet-1", self.IMPLICIT, privy, rpc_client)

        result = await executor.send_deposit(WNEAR, DEPOSIT_ADDRESS, str(NEAR))

        assert result.success
        tx_bytes, signature = split_signed(near_rpc.broadcasts()[0])
        assert tx_bytes.startswith(len(self.IMPLICIT).to_bytes(4, "little") + self.IMPLICIT.encode())
        VerifyKey(bytes.fromhex(self.IMPLICIT)).verify(
            hashlib.sha256(tx_bytes).digest(), signature
        )

    @pytest.mark.asyncio
    async def test_uninitialized_account(self, privy, rpc_client, near_rpc):
        near_rpc.access_key_error = "access key does not exist while viewing"
        executor = DelegatedSignerExecutor("wallet-1", self.IMPLICIT, privy, rpc_client)

        result = await executor.send_deposit(WNEAR, DEPOSIT_ADDRESS, str(NEAR))

        assert not result.success
        assert "not yet initialized" in result.error

    @pytest.mark.asyncio
    async def test_signer_refusal_is_a_failed_transfer(self, privy, privy_service, rpc_client, near_rpc):
        privy_service.status_code = 401
        executor = DelegatedSignerExecutor("wallet-1", self.IMPLICIT, privy, rpc_client)

        result = await executor.send_deposit(WNEAR, DEPOSIT_ADDRESS, str(NEAR))

        assert not result.success
        assert "raw_sign failed" in result.error
        assert near_rpc.broadcasts() == []

    def test_named_account_rejected(self, privy, rpc_client):
        with pytest.raises(ExecutionSetupError):
            DelegatedSignerExecutor("wallet-1", NEAR_ACCOUNT, privy, rpc_client)


class TestSimulatedExecutor:
    """Dry-run deposits."""

    @pytest.mark.asyncio
    async def test_records_transfer(self):
        executor = SimulatedDepositExecutor("svc.near")

        result = await executor.send_deposit(USDC_NEAR, DEPOSIT_ADDRESS, "100")

        assert result.success
        assert executor.transfers[0]["tx_hash"] == result.tx_hash
        assert executor.account_id == "svc.near"

    @pytest.mark.asyncio
    async def test_distinct_hashes(self):
        executor = SimulatedDepositExecutor()

        first = await executor.send_deposit(WNEAR, DEPOSIT_ADDRESS, "100")
        second = await executor.send_deposit(WNEAR, DEPOSIT_ADDRESS, "100")

        assert first.tx_hash != second.tx_hash

    @pytest.mark.asyncio
    async def test_rejects_unknown_asset_format(self):
        result = await SimulatedDepositExecutor().send_deposit("btc:native", DEPOSIT_ADDRESS, "1")

        assert not result.success


PARAMS = QuoteParams(
    origin_asset=USDC_NEAR,
    destination_asset=SUI_ASSET,
    amount="100000000",
    refund_address="someone-else.near",
    recipient_address=SUI_WALLET,
)


class TestRunDeposit:
    """Live quote, transfer, submit."""

    @pytest.fixture
    def engine(self, oneclick_client) -> QuoteEngine:
        return QuoteEngine(oneclick_client, referral="intentswap")

    @pytest.mark.asyncio
    async def test_success(self, engine, fake_oneclick):
        executor = SimulatedDepositExecutor("svc.near")

        result = await run_deposit(engine, executor, PARAMS, decimals=6)

        assert result.success
        assert result.deposit_address == DEPOSIT_ADDRESS
        assert result.explorer_url == explorer_url(DEPOSIT_ADDRESS)
        assert result.near_blocks_url == near_blocks_url(result.tx_hash)
        assert result.quote.amount_out_formatted == "28.5"

        body = fake_oneclick.quote_bodies()[0]
        assert body["dry"] is False
        assert body["refundTo"] == "svc.near"
        assert len(fake_oneclick.calls("/v0/deposit/submit")) == 1

    @pytest.mark.asyncio
    async def test_quote_failure(self, engine, fake_oneclick):
        fake_oneclick.quote_failures.append((503, "solvers unavailable"))
        executor = SimulatedDepositExecutor()

        result = await run_deposit(engine, executor, PARAMS)

        assert not result.success
        assert result.error.startswith("Quote failed")
        assert executor.transfers == []

    @pytest.mark.asyncio
    async def test_transfer_failure_keeps_deposit_address(self, engine, fake_oneclick):
        params = QuoteParams("btc:native", SUI_ASSET, "1", "x.near", SUI_WALLET)

        result = await run_deposit(engine, SimulatedDepositExecutor(), params)

        assert not result.success
        assert result.deposit_address == DEPOSIT_ADDRESS
        assert fake_oneclick.calls("/v0/deposit/submit") == []

    @pytest.mark.asyncio
    async def test_submit_failure_is_non_critical(self, engine, fake_oneclick):
        fake_oneclick.submit_status_code = 500

        result = await run_deposit(engine, SimulatedDepositExecutor(), PARAMS)

        assert result.success

    @pytest.mark.asyncio
    async def test_submit_best_effort(self, oneclick_client, fake_oneclick):
        fake_oneclick.submit_status_code = 500

        outcome = await submit_deposit_best_effort(oneclick_client, "TxHash1", DEPOSIT_ADDRESS)

        assert not outcome.success
        assert "500" in outcome.error


class TestExecutionResult:
    """Result serialization for session storage."""

    def test_dict_round_trip(self):
        result = ExecutionResult(success=False, deposit_address=DEPOSIT_ADDRESS, error="boom")

        assert ExecutionResult.from_dict(result.to_dict()) == result


class TestFactory:
    """Strategy -> executor."""

    def test_manual_and_client_sign_have_no_executor(self):
        settings = make_settings()

        assert get_deposit_executor(ManualDeposit(), settings) is None
        assert get_deposit_executor(ClientSign(NEAR_ACCOUNT), settings) is None

    def test_dry_run_simulates(self):
        settings = make_settings(dry_run=True)

        executor = get_deposit_executor(ServiceAccount("svc.near", "not-a-key"), settings)

        assert isinstance(executor, SimulatedDepositExecutor)
        assert executor.account_id == "svc.near"

    def test_imported_credentials(self, rpc_client):
        settings = make_settings(near_fee_reserve=Decimal("0.1"))

        executor = get_deposit_executor(ImportedCredentials(NEAR_ACCOUNT, KEY), settings, rpc=rpc_client)

        assert isinstance(executor, NearKeyPairExecutor)
        assert executor.account_id == NEAR_ACCOUNT
        assert executor.fee_reserve == Decimal("0.1")

    def test_bad_key(self):
        with pytest.raises(ExecutionSetupError):
            get_deposit_executor(ImportedCredentials(NEAR_ACCOUNT, "ed25519:abc"), make_settings())

    def test_delegated_without_privy_config(self):
        with pytest.raises(ExecutionSetupError):
            get_deposit_executor(DelegatedSigning("wallet-1", "ab" * 32), make_settings())

    def test_delegated(self, privy, rpc_client):
        executor = get_deposit_executor(
            DelegatedSigning("wallet-1", "ab" * 32), make_settings(), rpc=rpc_client, privy=privy
        )

        assert isinstance(executor, DelegatedSignerExecutor)
        assert executor.account_id == "ab" * 32
