"""Draft session state: pack offers, selections and the final deck."""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence

from .data.models import DeckPowerResult, DraftDeck, PackCompatibility, PoolCard
from .data.pool import CubePool
from .exceptions import DeckBuildError, PackNotFoundError
from .tools.decklist import (
    apply_commander_additions,
    build_draft_deck,
    filter_fixing_pool,
    fixing_land_colors,
)
from .tools.power import score_deck_power
from .tools.synergy import PackSynergyAnalyzer, ResultCallback, ScoringContext

logger = logging.getLogger(__name__)

PACKS_OFFERED = 3
COMMANDER_PACKS_OFFERED = 10
KOFFERS_CHOICES = 3


class DraftSession:
    """One user's walk from pack offers to a finished deck.

    Holds what the user has been offered and picked so far. The pool and
    the analyzer (with its caches) may be shared between sessions.
    """

    def __init__(
        self,
        pool: CubePool,
        analyzer: PackSynergyAnalyzer | None = None,
        is_commander: bool = False,
    ) -> None:
        self.pool = pool
        self.analyzer = analyzer if analyzer is not None else PackSynergyAnalyzer(pool)
        self.is_commander = is_commander
        self.pack1: str | None = None
        self.pack2: str | None = None
        self.offer: dict[str, str] = {}
        self.offer_number: int | None = None

    def offer_packs(self, number: int, rng: random.Random | None = None) -> dict[str, str]:
        """
        Deal a random offer of packs for pick 1 or 2.

        Commander cubes offer 10 packs for the first pick and 9 for the
        second; other cubes offer 3. The second offer never repeats pack 1.
        Offering pick 1 resets both selections; offering pick 2 resets the
        second.

        Returns:
            Pack names keyed by option id
        """
        if number not in (1, 2):
            raise ValueError(f"Pack number must be 1 or 2, got {number}")
        rng = rng or random.Random()

        themes = self.pool.pack_themes()
        size = COMMANDER_PACKS_OFFERED if self.is_commander else PACKS_OFFERED

        if number == 1:
            self.pack1 = None
            self.pack2 = None
        else:
            if self.pack1 is None:
                raise DeckBuildError("Pick the first pack before the second")
            self.pack2 = None
            themes = [t for t in themes if t != self.pack1]
            if self.is_commander:
                size -= 1

        chosen = rng.sample(themes, min(size, len(themes)))
        if len(chosen) < size:
            logger.info("Only %d packs available to offer", len(chosen))

        self.offer = {f"option-{i}": name for i, name in enumerate(chosen)}
        self.offer_number = number
        return dict(self.offer)

    def select(self, number: int, pack_name: str) -> None:
        """Record the pick for pack 1 or 2."""
        if pack_name not in self.pool.pack_themes():
            raise PackNotFoundError(pack_name)

        if number == 1:
            self.pack1 = pack_name
            self.pack2 = None
        elif number == 2:
            if self.pack1 is None:
                raise DeckBuildError("Pick the first pack before the second")
            if pack_name == self.pack1:
                raise DeckBuildError("The second pack must differ from the first")
            self.pack2 = pack_name
        else:
            raise ValueError(f"Pack number must be 1 or 2, got {number}")

    async def scoring_context(self) -> ScoringContext | None:
        """Commander context for comparisons against the chosen first pack."""
        if not self.is_commander or self.pack1 is None:
            return None
        commanders = self.pool.commanders_for(self.pack1)
        if not commanders:
            return None
        records = await self.analyzer.metadata.get([c.name for c in commanders])
        return ScoringContext(commanders=records)

    async def pack2_indicators(
        self, on_result: ResultCallback | None = None
    ) -> dict[str, PackCompatibility]:
        """Compatibility of pack 1 with each option of the current second offer."""
        if self.pack1 is None or self.offer_number != 2:
            return {}
        context = await self.scoring_context()
        return await self.analyzer.sweep(self.pack1, self.offer, context, on_result)

    def koffers_choices(self, rng: random.Random | None = None) -> list[PoolCard]:
        """Up to three random Koffers cards to pick from."""
        rng = rng or random.Random()
        pool = self.pool.koffers_pool()
        return rng.sample(pool, min(KOFFERS_CHOICES, len(pool)))

    def fixing_choices(self) -> list[PoolCard]:
        """Fixing lands matching the colors of both chosen packs."""
        colors = fixing_land_colors(self.pack1, self.pack2)
        return filter_fixing_pool(self.pool.fixing_pool(), colors)

    async def finalize(
        self,
        koffers_card: PoolCard | None = None,
        fixing_lands: Sequence[str] = (),
        lands_to_remove: Sequence[str] = (),
    ) -> tuple[DraftDeck, DeckPowerResult]:
        """
        Build the final deck and score its power.

        Commander cube extras are applied when a Koffers card is given. Power
        is scored on resolved card metadata, so rules text counts.

        Raises:
            DeckBuildError: If either pack is missing or the extras are invalid.
        """
        if self.pack1 is None or self.pack2 is None:
            raise DeckBuildError("Two packs must be selected before building a deck")

        deck = build_draft_deck(self.pool, self.pack1, self.pack2, commander=self.is_commander)
        if self.is_commander and koffers_card is not None:
            deck = apply_commander_additions(deck, koffers_card, fixing_lands, lands_to_remove)

        deck_records = await self.analyzer.metadata.get([c.name for c in deck.cards])
        commander_records = await self.analyzer.metadata.get([c.name for c in deck.commanders])
        power = score_deck_power(deck_records, commander_records)
        logger.info("Final deck: %d cards, power %s", deck.card_count, power.label)
        return deck, power
