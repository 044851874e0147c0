"""Tests for the pack synergy analyzer."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import pytest

from cube_draft.data.cache import CardMetadataCache
from cube_draft.data.models import CompatibilityScore, PackCompatibility
from cube_draft.data.pool import CubePool
from cube_draft.exceptions import PackNotFoundError
from cube_draft.tools.synergy import PackSynergyAnalyzer, ScoringContext

if TYPE_CHECKING:
    from conftest import FakeScryfall


@pytest.fixture
def analyzer(pool: CubePool) -> PackSynergyAnalyzer:
    """An offline analyzer over the sample pool."""
    return PackSynergyAnalyzer(pool)


class TestAnalyzePack:
    """Tests for analyze_pack."""

    async def test_profile_from_pool_data(self, analyzer: PackSynergyAnalyzer) -> None:
        """Offline profiles still see types, names and mana costs."""
        profile = await analyzer.analyze_pack("BR - Sacrifice")
        assert profile.primary_strategy == "Sacrifice/Aristocrats"
        assert profile.color_identity == ["B", "R"]
        assert profile.tribes == ["vampire"]
        assert profile.card_count == 5

    async def test_profile_cached(self, analyzer: PackSynergyAnalyzer) -> None:
        """A fresh profile is reused rather than rebuilt."""
        first = await analyzer.analyze_pack("G - Ramp")
        second = await analyzer.analyze_pack("G - Ramp")
        assert first is second

    async def test_metadata_fetched_once(
        self, pool: CubePool, fake_scryfall: FakeScryfall
    ) -> None:
        """Card metadata for a pack is requested in one batch."""
        cache = CardMetadataCache(
            client=fake_scryfall.client(), fallback_lookup=pool.find, batch_delay=0
        )
        analyzer = PackSynergyAnalyzer(pool, metadata_cache=cache)
        profile = await analyzer.analyze_pack("BR - Sacrifice")
        await analyzer.analyze_pack("BR - Sacrifice")
        assert profile.primary_strategy == "Sacrifice/Aristocrats"
        assert fake_scryfall.requests == [
            ["Viscera Seer", "Goblin Bombardment", "Blood Artist", "Swamp", "Mountain"]
        ]

    async def test_empty_pack(self, analyzer: PackSynergyAnalyzer) -> None:
        """A pack with no dealt cards cannot be profiled."""
        with pytest.raises(PackNotFoundError) as exc:
            await analyzer.analyze_pack("UR - Nothing")
        assert exc.value.pack_name == "UR - Nothing"

    async def test_clear_cache(self, analyzer: PackSynergyAnalyzer) -> None:
        await analyzer.analyze_pack("G - Ramp")
        analyzer.clear_cache()
        assert len(analyzer.profiles) == 0
        assert len(analyzer.metadata) == 0


class TestCompare:
    """Tests for compare."""

    async def test_compare(self, analyzer: PackSynergyAnalyzer) -> None:
        """Unlisted strategy pairs score a small penalty."""
        result = await analyzer.compare("BR - Sacrifice", "G - Ramp")
        assert isinstance(result, CompatibilityScore)
        assert result.score == -0.5
        assert result.reasons == ["Unknown strategy interaction"]

    async def test_compare_with_context(self, analyzer: PackSynergyAnalyzer) -> None:
        """Commander colors widen the first pack's colors."""
        commanders = await analyzer.metadata.get(["Judith the Scourge Diva"])
        context = ScoringContext(commanders=commanders)
        plain = await analyzer.compare("G - Ramp", "BR - Sacrifice")
        result = await analyzer.compare("G - Ramp", "BR - Sacrifice", context)
        assert "Good color synergy (BR)" not in plain.reasons
        assert result.reasons[0] == "Good color synergy (BR)"

    async def test_context_leaves_candidate_colors(
        self, analyzer: PackSynergyAnalyzer
    ) -> None:
        """A commander of the first pack does not lend its colors to the candidate."""
        commanders = await analyzer.metadata.get(["Judith the Scourge Diva"])
        context = ScoringContext(commanders=commanders)
        result = await analyzer.compare("BR - Sacrifice", "G - Ramp", context)
        assert result.score == -0.5
        assert result.reasons == ["Unknown strategy interaction"]


class TestSweep:
    """Tests for sweep."""

    async def test_results_attributed_to_options(self, analyzer: PackSynergyAnalyzer) -> None:
        """Each result carries its option id and pack, and is reported as it lands."""
        seen: list[PackCompatibility] = []
        options = {"option-0": "G - Ramp", "option-1": "WU - Fliers"}
        results = await analyzer.sweep("BR - Sacrifice", options, on_result=seen.append)
        assert set(results) == {"option-0", "option-1"}
        assert results["option-0"].pack_name == "G - Ramp"
        assert results["option-1"].pack_name == "WU - Fliers"
        assert sorted(r.option_id for r in seen) == ["option-0", "option-1"]

    async def test_disabled(self, pool: CubePool) -> None:
        """A disabled analyzer reports nothing."""
        analyzer = PackSynergyAnalyzer(pool, enabled=False)
        assert await analyzer.sweep("BR - Sacrifice", {"option-0": "G - Ramp"}) == {}

    async def test_failing_option_dropped(self, analyzer: PackSynergyAnalyzer) -> None:
        """One bad option does not take the others down."""
        options = {"option-0": "UR - Nothing", "option-1": "G - Ramp"}
        results = await analyzer.sweep("BR - Sacrifice", options)
        assert list(results) == ["option-1"]

    async def test_unknown_first_pack(self, analyzer: PackSynergyAnalyzer) -> None:
        """A first pack that cannot be profiled yields no results."""
        assert await analyzer.sweep("UR - Nothing", {"option-0": "G - Ramp"}) == {}

    async def test_stale_results_discarded(
        self, analyzer: PackSynergyAnalyzer, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Results for a replaced first pack are never reported."""
        started = asyncio.Event()
        release = asyncio.Event()
        original = analyzer.compare

        async def gated(
            pack1: str, pack2: str, context: ScoringContext | None = None
        ) -> CompatibilityScore:
            if pack1 == "BR - Sacrifice":
                started.set()
                await release.wait()
            return await original(pack1, pack2, context)

        monkeypatch.setattr(analyzer, "compare", gated)
        seen: list[PackCompatibility] = []

        stale = asyncio.create_task(
            analyzer.sweep("BR - Sacrifice", {"option-0": "G - Ramp"}, on_result=seen.append)
        )
        await started.wait()
        fresh = await analyzer.sweep(
            "G - Ramp", {"option-0": "WU - Fliers"}, on_result=seen.append
        )
        release.set()

        assert await stale == {}
        assert list(fresh) == ["option-0"]
        assert [r.pack_name for r in seen] == ["WU - Fliers"]
