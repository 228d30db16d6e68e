"""Time-boxed cache of the tradable token list.

The catalog is the only state shared between conversations. It is
refreshed on read once the TTL has passed, and a refresh replaces the whole
snapshot; entries are never patched in place.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Optional

from intentswap.chains import canonical_chain
from intentswap.oneclick.client import OneClickClient
from intentswap.oneclick.models import TokenInfo

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 300


@dataclass(frozen=True)
class ResolvedToken:
    """A catalog entry: one asset on one chain."""

    symbol: str
    chain: str
    asset_id: str
    decimals: Optional[int] = None
    contract_address: Optional[str] = None
    price: Optional[Decimal] = None

    @classmethod
    def from_token_info(cls, info: TokenInfo) -> "ResolvedToken":
        return cls(
            symbol=info.symbol,
            chain=canonical_chain(info.blockchain),
            asset_id=info.asset_id,
            decimals=info.decimals,
            contract_address=info.contract_address,
            price=info.price,
        )


@dataclass(frozen=True)
class CatalogSnapshot:
    entries: tuple[ResolvedToken, ...]
    fetched_at: float

    def is_fresh(self, now: float, ttl_seconds: float) -> bool:
        return now - self.fetched_at < ttl_seconds


class TokenCatalog:
    """Read-through cache over ``OneClickClient.get_tokens``.

    Catalog order is preserved from the source; resolution treats the first
    match as the default pick.
    """

    def __init__(
        self,
        client: OneClickClient,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.client = client
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._snapshot: Optional[CatalogSnapshot] = None
        self._refresh_lock = asyncio.Lock()

    @property
    def snapshot(self) -> Optional[CatalogSnapshot]:
        return self._snapshot

    def snapshot_age(self) -> Optional[float]:
        """Seconds since the last refresh, or None before the first fetch."""
        if self._snapshot is None:
            return None
        return self._clock() - self._snapshot.fetched_at

    async def get_entries(self) -> list[ResolvedToken]:
        """Return the cached entries, refreshing them if stale."""
        snapshot = self._snapshot
        if snapshot and snapshot.is_fresh(self._clock(), self.ttl_seconds):
            return list(snapshot.entries)

        async with self._refresh_lock:
            # Another turn may have refreshed while we waited
            snapshot = self._snapshot
            if snapshot and snapshot.is_fresh(self._clock(), self.ttl_seconds):
                return list(snapshot.entries)

            tokens = await self.client.get_tokens()
            snapshot = CatalogSnapshot(
                entries=tuple(ResolvedToken.from_token_info(t) for t in tokens),
                fetched_at=self._clock(),
            )
            self._snapshot = snapshot
            logger.info(f"Token catalog refreshed: {len(snapshot.entries)} entries")
            return list(snapshot.entries)

    async def tokens_on_chain(self, chain: str) -> list[ResolvedToken]:
        """Entries whose chain matches ``chain`` (case-insensitive)."""
        wanted = canonical_chain(chain)
        return [t for t in await self.get_entries() if t.chain == wanted]

    async def supported_chains(self) -> list[str]:
        """Sorted unique chain slugs present in the catalog."""
        return sorted({t.chain for t in await self.get_entries()})

    def invalidate(self) -> None:
        """Drop the snapshot so the next read refetches."""
        self._snapshot = None
