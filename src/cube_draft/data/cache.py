"""Session caches for card metadata and pack theme profiles."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import httpx

from ..config import get_settings
from ..utils.mana import parse_mana_cost
from .models import CardRecord, PoolCard

if TYPE_CHECKING:
    from .models import ThemeProfile
    from .scryfall import ScryfallClient

logger = logging.getLogger(__name__)

FallbackLookup = Callable[[str], PoolCard | None]


def fallback_record(name: str, row: PoolCard | None) -> CardRecord:
    """Build a best-effort record from the local pool row for a name.

    Oracle text is always empty. Colors and CMC come from the raw mana cost;
    an unknown row yields an empty record with CMC 0.
    """
    if row is None:
        return CardRecord(name=name)

    mana = parse_mana_cost(row.mana_cost)
    return CardRecord(
        name=name,
        type_line=row.type_line,
        mana_cost=row.mana_cost,
        color_identity=frozenset(mana.colors),
        cmc=mana.cmc,
    )


class CardMetadataCache:
    """Name-keyed card metadata cache backed by batched remote lookups.

    Lookups never fail: batches the card database cannot answer, and names
    beyond the per-call batch cap, resolve to fallback records built from the
    pool. Fallbacks are cached like any other record. Without a client the
    cache works offline and only builds fallbacks.
    """

    def __init__(
        self,
        client: ScryfallClient | None = None,
        fallback_lookup: FallbackLookup | None = None,
        batch_size: int | None = None,
        max_batches: int | None = None,
        batch_delay: float | None = None,
    ) -> None:
        settings = get_settings()
        self._client = client
        self._fallback_lookup = fallback_lookup
        self.batch_size = batch_size or settings.lookup_batch_size
        self.max_batches = max_batches or settings.lookup_max_batches
        self.batch_delay = (
            settings.lookup_batch_delay_seconds if batch_delay is None else batch_delay
        )
        self._records: dict[str, CardRecord] = {}
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, name: object) -> bool:
        return name in self._records

    @property
    def online(self) -> bool:
        """Whether lookups go to the card database."""
        return self._client is not None

    def _fallback(self, name: str) -> CardRecord:
        row = self._fallback_lookup(name) if self._fallback_lookup else None
        logger.debug("Using pool data for %s", name)
        return fallback_record(name, row)

    async def get(self, names: Sequence[str]) -> list[CardRecord]:
        """Resolve records for names, one per input name in input order."""
        async with self._lock:
            missing = list(dict.fromkeys(n for n in names if n not in self._records))
            if missing:
                await self._populate(missing)
            return [self._records[name] for name in names]

    async def _populate(self, names: list[str]) -> None:
        if self._client is None:
            for name in names:
                self._records[name] = self._fallback(name)
            return

        limit = self.batch_size * self.max_batches
        fetchable, overflow = names[:limit], names[limit:]

        for index, start in enumerate(range(0, len(fetchable), self.batch_size)):
            if index > 0:
                await asyncio.sleep(self.batch_delay)
            await self._fetch_batch(self._client, fetchable[start : start + self.batch_size])

        if overflow:
            logger.debug("%d names exceed the batch cap, using pool data", len(overflow))
        for name in overflow:
            self._records[name] = self._fallback(name)

    async def _fetch_batch(self, client: ScryfallClient, batch: list[str]) -> None:
        try:
            cards = await client.fetch_collection(batch)
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Card lookup failed for %d names: %s", len(batch), e)
            cards = []

        by_name = {card.name.lower(): card for card in cards}
        for position, name in enumerate(batch):
            card = by_name.get(name.lower())
            if card is None and len(cards) == len(batch):
                # Service answered every identifier but canonicalised this name
                card = cards[position]
            if card is not None:
                self._records.setdefault(card.name, card)
                self._records[name] = card
            else:
                self._records[name] = self._fallback(name)

    def clear(self) -> None:
        """Drop every cached record."""
        count = len(self._records)
        self._records.clear()
        logger.info("Cleared %d cached card records", count)


@dataclass
class ThemeProfileCache:
    """Theme profiles keyed by pack name, with optional expiry."""

    ttl_seconds: float = 1800
    clock: Callable[[], float] = time.monotonic
    _entries: dict[str, tuple[float, ThemeProfile]] = field(default_factory=dict)

    def get(self, pack_name: str) -> ThemeProfile | None:
        """Return the cached profile, or None when absent or expired."""
        entry = self._entries.get(pack_name)
        if entry is None:
            return None
        stored_at, profile = entry
        if self.ttl_seconds and self.clock() - stored_at >= self.ttl_seconds:
            del self._entries[pack_name]
            return None
        return profile

    def set(self, pack_name: str, profile: ThemeProfile) -> None:
        self._entries[pack_name] = (self.clock(), profile)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
