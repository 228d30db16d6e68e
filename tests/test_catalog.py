"""Tests for the token catalog cache."""

import asyncio

import httpx
import pytest

from intentswap.catalog import TokenCatalog
from intentswap.exceptions import OneClickAPIError
from intentswap.oneclick.client import OneClickClient

from conftest import ONECLICK_URL, USDC_NEAR, FakeOneClick


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def catalog(oneclick_client, clock) -> TokenCatalog:
    return TokenCatalog(oneclick_client, ttl_seconds=300, clock=clock)


class TestTokenCatalog:
    """Read-through caching of /v0/tokens."""

    @pytest.mark.asyncio
    async def test_entries_are_resolved(self, catalog):
        entries = await catalog.get_entries()

        usdc = [t for t in entries if t.asset_id == USDC_NEAR][0]
        assert usdc.symbol == "USDC"
        assert usdc.chain == "near"
        assert usdc.decimals == 6

    @pytest.mark.asyncio
    async def test_cached_within_ttl(self, catalog, fake_oneclick, clock):
        await catalog.get_entries()
        clock.now += 299
        await catalog.get_entries()

        assert len(fake_oneclick.calls("/v0/tokens")) == 1

    @pytest.mark.asyncio
    async def test_refreshed_after_ttl(self, catalog, fake_oneclick, clock):
        await catalog.get_entries()
        clock.now += 300
        await catalog.get_entries()

        assert len(fake_oneclick.calls("/v0/tokens")) == 2

    @pytest.mark.asyncio
    async def test_snapshot_age(self, catalog, clock):
        assert catalog.snapshot_age() is None

        await catalog.get_entries()
        clock.now += 42

        assert catalog.snapshot_age() == 42

    @pytest.mark.asyncio
    async def test_invalidate(self, catalog, fake_oneclick):
        await catalog.get_entries()
        catalog.invalidate()
        await catalog.get_entries()

        assert len(fake_oneclick.calls("/v0/tokens")) == 2

    @pytest.mark.asyncio
    async def test_concurrent_reads_fetch_once(self, catalog, fake_oneclick):
        """Turns waiting on the refresh lock reuse the fresh snapshot."""
        await asyncio.gather(*(catalog.get_entries() for _ in range(5)))

        assert len(fake_oneclick.calls("/v0/tokens")) == 1

    @pytest.mark.asyncio
    async def test_tokens_on_chain(self, catalog):
        tokens = await catalog.tokens_on_chain("SUI")

        assert [t.symbol for t in tokens] == ["SUI"]

    @pytest.mark.asyncio
    async def test_supported_chains_sorted_unique(self, catalog):
        assert await catalog.supported_chains() == ["btc", "eth", "near", "sui"]

    @pytest.mark.asyncio
    async def test_legacy_chain_slugs_are_canonical(self, clock):
        fake = FakeOneClick(
            tokens=[{"blockchain": "ethereum", "symbol": "ETH", "assetId": "nep141:eth.omft.near"}]
        )
        catalog = TokenCatalog(OneClickClient(ONECLICK_URL, transport=fake.transport), clock=clock)

        entries = await catalog.get_entries()

        assert entries[0].chain == "eth"
        assert entries[0].decimals is None

    @pytest.mark.asyncio
    async def test_service_error_propagates(self, clock):
        """A failed refresh raises and leaves no snapshot behind."""
        transport = httpx.MockTransport(lambda request: httpx.Response(503, text="unavailable"))
        catalog = TokenCatalog(OneClickClient(ONECLICK_URL, transport=transport), clock=clock)

        with pytest.raises(OneClickAPIError) as exc_info:
            await catalog.get_entries()

        assert exc_info.value.status_code == 503
        assert catalog.snapshot is None
