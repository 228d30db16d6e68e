"""Pytest configuration and fixtures."""

import json
import os
from typing import AsyncGenerator, Optional

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

# Set test environment
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["DEBUG"] = "true"
os.environ["DRY_RUN"] = "false"
os.environ["SESSION_STORE"] = "memory"

from intentswap.agent import SwapAgent
from intentswap.config import Settings
from intentswap.execution.near_rpc import NearRpcClient
from intentswap.oneclick.client import OneClickClient
from intentswap.storage.models import Base

ONECLICK_URL = "https://1click.test"
NEAR_RPC_URL = "https://rpc.near.test"

SUI_WALLET = "0x" + "a1" * 32
EVM_WALLET = "0x" + "b2" * 20
NEAR_ACCOUNT = "alice.near"
DEPOSIT_ADDRESS = "0xdeposit00000000000000000000000000000001"

USDC_NEAR = "nep141:17208628f84f5d6ad33f0da3bbbeb27ffcb398eac501a31bd6ad2011e36133a1"
USDT_NEAR = "nep141:usdt.tether-token.near"
WNEAR = "nep141:wrap.near"
SUI_ASSET = "nep141:sui.omft.near"
BTC_ASSET = "nep141:btc.omft.near"

TOKENS = [
    {"blockchain": "near", "symbol": "wNEAR", "assetId": WNEAR, "decimals": 24, "price": "3.10"},
    {"blockchain": "near", "symbol": "USDC", "assetId": USDC_NEAR, "decimals": 6, "price": "1"},
    {
        "blockchain": "eth",
        "symbol": "USDC",
        "assetId": "nep141:eth-0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48.omft.near",
        "decimals": 6,
        "contractAddress": "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48",
        "price": "1",
    },
    {"blockchain": "near", "symbol": "USDT", "assetId": USDT_NEAR, "decimals": 6, "price": "1"},
    {"blockchain": "sui", "symbol": "SUI", "assetId": SUI_ASSET, "decimals": 9, "price": "3.50"},
    {"blockchain": "btc", "symbol": "BTC", "assetId": BTC_ASSET, "decimals": 8, "price": "65000"},
]


class FakeOneClick:
    """In-process stand-in for the 1-Click API, served through MockTransport.

    ``quote_failures`` is a queue of (status_code, body) returned by the next
    quote calls before normal quotes resume.
    """

    def __init__(self, tokens: Optional[list[dict]] = None):
        self.tokens = tokens if tokens is not None else TOKENS
        self.requests: list[httpx.Request] = []
        self.quote_failures: list[tuple[int, str]] = []
        self.statuses: list[str] = ["PROCESSING"]
        self.submit_status_code = 200

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def calls(self, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path == path]

    def quote_bodies(self) -> list[dict]:
        return [json.loads(r.content) for r in self.calls("/v0/quote")]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path == "/v0/tokens":
            return httpx.Response(200, json=self.tokens)

        if path == "/v0/quote":
            if self.quote_failures:
                status_code, body = self.quote_failures.pop(0)
                return httpx.Response(status_code, text=body)
            return httpx.Response(200, json=self._quote(json.loads(request.content)))

        if path == "/v0/deposit/submit":
            return httpx.Response(self.submit_status_code, json={})

        if path == "/v0/status":
            status = self.statuses.pop(0) if len(self.statuses) > 1 else self.statuses[0]
            return httpx.Response(
                200,
                json={
                    "status": status,
                    "depositAddress": request.url.params.get("depositAddress"),
                },
            )

        return httpx.Response(404, text="not found")

    @staticmethod
    def _quote(body: dict) -> dict:
        quote = {
            "amountIn": body["amount"],
            "amountInFormatted": "100",
            "amountInUsd": "100.00",
            "amountOut": "28500000000",
            "amountOutFormatted": "28.5",
            "amountOutUsd": "99.75",
            "deadline": body["deadline"],
            "timeEstimate": 20,
        }
        if not body["dry"]:
            quote["depositAddress"] = DEPOSIT_ADDRESS
        return {"quote": quote}


def make_settings(**overrides) -> Settings:
    """Settings isolated from any .env file."""
    values = {
        "oneclick_api_url": ONECLICK_URL,
        "near_rpc_url": NEAR_RPC_URL,
        "sender_near_account": None,
        "sender_private_key": None,
        "dry_run": False,
        "session_pool_max": 50,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def fake_oneclick() -> FakeOneClick:
    return FakeOneClick()


@pytest.fixture
def oneclick_client(fake_oneclick: FakeOneClick) -> OneClickClient:
    return OneClickClient(ONECLICK_URL, transport=fake_oneclick.transport)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def agent(settings: Settings, oneclick_client: OneClickClient) -> SwapAgent:
    """Agent wired to the fake 1-Click service; NEAR RPC is unreachable."""
    rpc = NearRpcClient(
        NEAR_RPC_URL,
        transport=httpx.MockTransport(lambda request: httpx.Response(500, text="no rpc in tests")),
    )
    return SwapAgent(settings, oneclick_client, rpc=rpc)


@pytest_asyncio.fixture
async def db_engine():
    """Create in-memory database engine for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(db_engine) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Session factory bound to the in-memory database."""
    yield async_sessionmaker(bind=db_engine, class_=AsyncSession, expire_on_commit=False)
