"""Tests for the card metadata and theme profile caches."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import httpx
import pytest

from cube_draft.data.cache import CardMetadataCache, ThemeProfileCache, fallback_record
from cube_draft.data.models import PoolCard, ThemeProfile
from cube_draft.data.pool import CubePool
from cube_draft.data.scryfall import ScryfallClient

if TYPE_CHECKING:
    from conftest import FakeScryfall


def _cache(
    fake: FakeScryfall, pool: CubePool, batch_size: int = 25, max_batches: int = 2
) -> CardMetadataCache:
    return CardMetadataCache(
        client=fake.client(),
        fallback_lookup=pool.find,
        batch_size=batch_size,
        max_batches=max_batches,
        batch_delay=0,
    )


class TestFallbackRecord:
    """Tests for records built from pool rows."""

    def test_from_pool_row(self) -> None:
        """Colors and CMC come from the mana cost; text stays empty."""
        row = PoolCard(name="Raff", type_line="Legendary Creature", mana_cost="{2}{W}{U}")
        record = fallback_record("Raff", row)
        assert record.oracle_text == ""
        assert record.type_line == "Legendary Creature"
        assert record.color_identity == frozenset({"W", "U"})
        assert record.cmc == 4

    def test_unknown_row(self) -> None:
        """Names with no pool row get an empty record."""
        record = fallback_record("Ghost", None)
        assert record.name == "Ghost"
        assert record.type_line == ""
        assert record.cmc == 0


class TestCardMetadataCache:
    """Tests for CardMetadataCache.get."""

    async def test_results_in_input_order(
        self, fake_scryfall: FakeScryfall, pool: CubePool
    ) -> None:
        """One record per input name, duplicates included, in order."""
        cache = _cache(fake_scryfall, pool)
        names = ["Sol Ring", "Plains", "Sol Ring", "Blood Artist"]
        records = await cache.get(names)
        assert [r.name for r in records] == names
        # Duplicate names are only requested once
        assert fake_scryfall.requests == [["Sol Ring", "Plains", "Blood Artist"]]

    async def test_remote_data_used(self, fake_scryfall: FakeScryfall, pool: CubePool) -> None:
        """Names the service knows carry its rules text."""
        cache = _cache(fake_scryfall, pool)
        (artist,) = await cache.get(["Blood Artist"])
        assert "whenever blood artist" in artist.oracle_text

    async def test_missing_names_fall_back(
        self, fake_scryfall: FakeScryfall, pool: CubePool
    ) -> None:
        """Names the service omits are built from the pool row."""
        cache = _cache(fake_scryfall, pool)
        (winds,) = await cache.get(["Favorable Winds"])
        assert winds.oracle_text == ""
        assert winds.type_line == "Enchantment"
        assert winds.color_identity == frozenset({"U"})
        assert winds.cmc == 2

    async def test_idempotent(self, fake_scryfall: FakeScryfall, pool: CubePool) -> None:
        """A second lookup returns equal records without a remote call."""
        cache = _cache(fake_scryfall, pool)
        first = await cache.get(["Sol Ring", "Favorable Winds"])
        second = await cache.get(["Sol Ring", "Favorable Winds"])
        assert first == second
        assert len(fake_scryfall.requests) == 1

    async def test_only_uncached_names_requested(
        self, fake_scryfall: FakeScryfall, pool: CubePool
    ) -> None:
        """Cached names are skipped in later batches."""
        cache = _cache(fake_scryfall, pool)
        await cache.get(["Sol Ring"])
        await cache.get(["Sol Ring", "Viscera Seer"])
        assert fake_scryfall.requests == [["Sol Ring"], ["Viscera Seer"]]

    async def test_failure_degrades_to_fallback(
        self, fake_scryfall: FakeScryfall, pool: CubePool
    ) -> None:
        """A failing batch never raises; every name gets pool data."""
        fake_scryfall.fail = True
        cache = _cache(fake_scryfall, pool)
        records = await cache.get(["Sol Ring", "Blood Artist"])
        assert [r.oracle_text for r in records] == ["", ""]
        assert records[1].cmc == 2

    async def test_fallback_cached_like_real_data(
        self, fake_scryfall: FakeScryfall, pool: CubePool
    ) -> None:
        """Fallback records are stored; the failed names are not retried."""
        fake_scryfall.fail = True
        cache = _cache(fake_scryfall, pool)
        await cache.get(["Sol Ring"])
        fake_scryfall.fail = False
        (ring,) = await cache.get(["Sol Ring"])
        assert ring.oracle_text == ""
        assert len(fake_scryfall.requests) == 1

    async def test_transport_error_degrades(self, pool: CubePool) -> None:
        """Network errors are swallowed like HTTP errors."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("offline", request=request)

        client = ScryfallClient(transport=httpx.MockTransport(handler))
        cache = CardMetadataCache(client=client, fallback_lookup=pool.find, batch_delay=0)
        (record,) = await cache.get(["Cultivate"])
        assert record.cmc == 3
        assert record.color_identity == frozenset({"G"})

    @pytest.mark.parametrize(
        "body",
        [[], "not a collection", {"data": {"name": "Cultivate"}}, {"data": ["Cultivate"]}],
    )
    async def test_unexpected_body_degrades(self, pool: CubePool, body: object) -> None:
        """Valid JSON of the wrong shape falls back to pool data."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=body)

        client = ScryfallClient(transport=httpx.MockTransport(handler))
        cache = CardMetadataCache(client=client, fallback_lookup=pool.find, batch_delay=0)
        (record,) = await cache.get(["Cultivate"])
        assert record.oracle_text == ""
        assert record.cmc == 3
        assert record.color_identity == frozenset({"G"})

    async def test_batching_and_cap(self, fake_scryfall: FakeScryfall, pool: CubePool) -> None:
        """Names are split into batches; names beyond the cap are not requested."""
        cache = _cache(fake_scryfall, pool, batch_size=2, max_batches=2)
        names = ["Sol Ring", "Viscera Seer", "Blood Artist", "Goblin Bombardment", "Forest"]
        records = await cache.get(names)
        assert fake_scryfall.requests == [names[0:2], names[2:4]]
        assert [r.name for r in records] == names
        assert records[4].type_line == "Basic Land - Forest"

    async def test_delay_between_batches(
        self, fake_scryfall: FakeScryfall, pool: CubePool, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """The pause happens before each subsequent batch only."""
        delays: list[float] = []

        async def fake_sleep(seconds: float) -> None:
            delays.append(seconds)

        monkeypatch.setattr(asyncio, "sleep", fake_sleep)
        cache = CardMetadataCache(
            client=fake_scryfall.client(),
            fallback_lookup=pool.find,
            batch_size=1,
            max_batches=3,
            batch_delay=0.2,
        )
        await cache.get(["Sol Ring", "Viscera Seer", "Blood Artist"])
        assert delays == [0.2, 0.2]

    async def test_offline_mode(self, pool: CubePool) -> None:
        """Without a client every record comes from the pool."""
        cache = CardMetadataCache(fallback_lookup=pool.find)
        (ring,) = await cache.get(["Sol Ring"])
        assert ring.cmc == 1
        assert "Sol Ring" in cache

    async def test_concurrent_gets_fetch_once(
        self, fake_scryfall: FakeScryfall, pool: CubePool
    ) -> None:
        """Concurrent lookups of the same names share one remote request."""
        cache = _cache(fake_scryfall, pool)
        await asyncio.gather(cache.get(["Sol Ring"]), cache.get(["Sol Ring"]))
        assert fake_scryfall.requests == [["Sol Ring"]]

    async def test_canonical_name_cached_under_request(self, pool: CubePool) -> None:
        """A record returned under another name is also stored for the requested one."""

        def handler(request: httpx.Request) -> httpx.Response:
            card = {"name": "Lim-Dûl's Vault", "oracle_text": "Look at the top five."}
            return httpx.Response(200, json={"data": [card]})

        client = ScryfallClient(transport=httpx.MockTransport(handler))
        cache = CardMetadataCache(client=client, fallback_lookup=pool.find, batch_delay=0)
        (vault,) = await cache.get(["Lim-Dul's Vault"])
        assert vault.name == "Lim-Dûl's Vault"
        assert "Lim-Dul's Vault" in cache
        assert "Lim-Dûl's Vault" in cache

    async def test_clear(self, fake_scryfall: FakeScryfall, pool: CubePool) -> None:
        """Clearing forces the next lookup back to the service."""
        cache = _cache(fake_scryfall, pool)
        await cache.get(["Sol Ring"])
        cache.clear()
        assert len(cache) == 0
        await cache.get(["Sol Ring"])
        assert len(fake_scryfall.requests) == 2


def _profile(strategy: str = "Midrange") -> ThemeProfile:
    return ThemeProfile(
        average_cmc=3,
        primary_strategy=strategy,
        theme_strength=3,
        curve_archetype="Balanced",
    )


class TestThemeProfileCache:
    """Tests for ThemeProfileCache expiry."""

    def test_get_and_set(self) -> None:
        """Stored profiles come back until they expire."""
        cache = ThemeProfileCache()
        cache.set("WU - Fliers", _profile())
        assert cache.get("WU - Fliers") == _profile()
        assert cache.get("G - Ramp") is None

    def test_expiry(self) -> None:
        """Entries older than the TTL are dropped."""
        now = [1000.0]
        cache = ThemeProfileCache(ttl_seconds=1800, clock=lambda: now[0])
        cache.set("WU - Fliers", _profile())
        now[0] += 1799
        assert cache.get("WU - Fliers") is not None
        now[0] += 1
        assert cache.get("WU - Fliers") is None
        assert len(cache) == 0

    def test_zero_ttl_never_expires(self) -> None:
        """A TTL of zero disables expiry."""
        now = [0.0]
        cache = ThemeProfileCache(ttl_seconds=0, clock=lambda: now[0])
        cache.set("WU - Fliers", _profile())
        now[0] += 10**9
        assert cache.get("WU - Fliers") is not None

    def test_clear(self) -> None:
        cache = ThemeProfileCache()
        cache.set("WU - Fliers", _profile())
        cache.clear()
        assert cache.get("WU - Fliers") is None
