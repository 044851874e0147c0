"""Pack synergy analyzer: cached profiles, comparisons and option sweeps."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Mapping

from ...config import get_settings
from ...data.cache import CardMetadataCache, ThemeProfileCache
from ...data.models import CompatibilityScore, PackCompatibility, ThemeProfile
from ...data.pool import CubePool
from ...exceptions import CubeDraftError, PackNotFoundError
from .profiler import profile_pack
from .scoring import ScoringContext, score_compatibility

logger = logging.getLogger(__name__)

ResultCallback = Callable[[PackCompatibility], None]


class PackSynergyAnalyzer:
    """Profiles packs of a cube pool and scores pack pairs.

    Holds the two session caches: card metadata by name and theme profiles
    by pack name (with expiry).
    """

    def __init__(
        self,
        pool: CubePool,
        metadata_cache: CardMetadataCache | None = None,
        theme_ttl: float | None = None,
        enabled: bool = True,
    ) -> None:
        if theme_ttl is None:
            theme_ttl = get_settings().theme_cache_ttl_seconds
        self.pool = pool
        if metadata_cache is None:
            metadata_cache = CardMetadataCache(fallback_lookup=pool.find)
        self.metadata = metadata_cache
        self.profiles = ThemeProfileCache(ttl_seconds=theme_ttl)
        self.enabled = enabled
        self._sweep_pack: str | None = None

    async def analyze_pack(self, pack_name: str) -> ThemeProfile:
        """Profile a pack, reusing a cached profile while it is fresh.

        Raises:
            PackNotFoundError: If no cards are dealt into the pack.
        """
        cached = self.profiles.get(pack_name)
        if cached is not None:
            return cached

        cards = self.pool.cards_for_pack(pack_name)
        if not cards:
            raise PackNotFoundError(pack_name)

        records = await self.metadata.get([card.name for card in cards])
        profile = profile_pack(records)
        self.profiles.set(pack_name, profile)
        logger.debug("Built theme profile for %s: %s", pack_name, profile.primary_strategy)
        return profile

    async def compare(
        self,
        pack1: str,
        pack2: str,
        context: ScoringContext | None = None,
    ) -> CompatibilityScore:
        """Score a pack pair."""
        profile1 = await self.analyze_pack(pack1)
        profile2 = await self.analyze_pack(pack2)
        return score_compatibility(profile1, profile2, context)

    async def _compare_option(
        self,
        pack1: str,
        option_id: str,
        pack2: str,
        context: ScoringContext | None,
        on_result: ResultCallback | None,
    ) -> PackCompatibility | None:
        compatibility = await self.compare(pack1, pack2, context)
        if self._sweep_pack != pack1:
            logger.debug("Discarding stale result for %s against %s", pack2, pack1)
            return None

        result = PackCompatibility(
            option_id=option_id, pack_name=pack2, compatibility=compatibility
        )
        if on_result is not None:
            on_result(result)
        return result

    async def sweep(
        self,
        pack1: str,
        options: Mapping[str, str],
        context: ScoringContext | None = None,
        on_result: ResultCallback | None = None,
    ) -> dict[str, PackCompatibility]:
        """
        Score the first pack against every offered second pack.

        The first pack is profiled before any comparison starts; comparisons
        then run concurrently and each result is attributed to its option id.
        Results computed for a first pack the user has since replaced (a newer
        sweep started with a different pack) are discarded. A failing
        comparison only drops its own option.

        Args:
            pack1: The chosen first pack
            options: Option id to candidate pack name
            context: Optional commander context for every comparison
            on_result: Called with each result as soon as it is ready

        Returns:
            Results by option id; empty when disabled or stale
        """
        if not self.enabled:
            return {}

        self._sweep_pack = pack1
        try:
            await self.analyze_pack(pack1)
        except CubeDraftError as e:
            logger.warning("Cannot profile %s: %s", pack1, e.message)
            return {}

        option_ids = list(options)
        outcomes = await asyncio.gather(
            *(
                self._compare_option(pack1, option_id, options[option_id], context, on_result)
                for option_id in option_ids
            ),
            return_exceptions=True,
        )

        results: dict[str, PackCompatibility] = {}
        for option_id, outcome in zip(option_ids, outcomes):
            if isinstance(outcome, BaseException):
                logger.warning(
                    "Compatibility check failed for %s: %s", options[option_id], outcome
                )
            elif outcome is not None:
                results[option_id] = outcome

        if self._sweep_pack != pack1:
            return {}
        return results

    def clear_cache(self) -> None:
        """Drop cached card metadata and theme profiles."""
        self.metadata.clear()
        self.profiles.clear()
        logger.info("Cleared synergy caches")
