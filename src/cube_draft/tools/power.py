"""Deck power level scoring (the "bully meter")."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence
from typing import Protocol

from ..data.models import DeckPowerResult, PowerCategory

logger = logging.getLogger(__name__)


class CardLike(Protocol):
    """Anything with a name and a type line; rules text is optional."""

    @property
    def name(self) -> str: ...

    @property
    def type_line(self) -> str: ...


POWER_WEIGHTS: dict[PowerCategory, int] = {
    "fast_mana": 15,
    "tutors": 12,
    "countermagic": 8,
    "removal": 6,
    "card_draw": 5,
    "combos": 20,
    "stax": 18,
    "land_destruction": 15,
    "extra_turns": 25,
    "planeswalkers": 8,
}

MAX_POWER_SCORE = 100

# Lowercase name fragments per category
POWER_CARD_NAMES: dict[PowerCategory, tuple[str, ...]] = {
    "fast_mana": (
        "sol ring",
        "mana crypt",
        "mana vault",
        "chrome mox",
        "mox diamond",
        "mox opal",
        "lotus petal",
        "dark ritual",
        "cabal ritual",
        "seething song",
        "simian spirit guide",
        "elvish spirit guide",
        "jeweled lotus",
    ),
    "tutors": (
        "demonic tutor",
        "vampiric tutor",
        "imperial seal",
        "diabolic intent",
        "enlightened tutor",
        "mystical tutor",
        "worldly tutor",
        "survival of the fittest",
        "natural order",
        "green sun's zenith",
        "chord of calling",
    ),
    "countermagic": (
        "counterspell",
        "force of will",
        "force of negation",
        "mana drain",
        "swan song",
        "negate",
        "spell pierce",
        "mental misstep",
    ),
    "removal": (
        "wrath of god",
        "damnation",
        "cyclonic rift",
        "toxic deluge",
        "swords to plowshares",
        "path to exile",
        "lightning bolt",
        "fatal push",
    ),
    "card_draw": (
        "rhystic study",
        "mystic remora",
        "necropotence",
        "sylvan library",
        "phyrexian arena",
        "consecrated sphinx",
        "tymna the weaver",
    ),
    "combos": (
        "thassa's oracle",
        "demonic consultation",
        "tainted pact",
        "hermit druid",
        "dockside extortionist",
        "temur sabertooth",
        "kiki-jiki",
        "splinter twin",
        "exquisite blood",
        "sanguine bond",
        "mikaeus",
        "walking ballista",
    ),
    "stax": (
        "winter orb",
        "static orb",
        "smokestack",
        "tangle wire",
        "sphere of resistance",
        "trinisphere",
        "null rod",
        "collector ouphe",
    ),
    "land_destruction": (
        "armageddon",
        "ravages of war",
        "catastrophe",
        "strip mine",
        "wasteland",
        "ghost quarter",
        "tectonic edge",
    ),
    "extra_turns": (
        "time walk",
        "ancestral recall",
        "time warp",
        "temporal manipulation",
        "capture of jingzhou",
        "temporal mastery",
        "nexus of fate",
    ),
    "planeswalkers": (),
}

POWER_TEXT_PATTERNS: dict[PowerCategory, re.Pattern[str]] = {
    "tutors": re.compile(r"search your library"),
    "countermagic": re.compile(r"counter target"),
    "removal": re.compile(r"destroy all|exile target|return all"),
    "card_draw": re.compile(r"draw.*card"),
    "extra_turns": re.compile(r"extra turn"),
}


def card_in_category(card: CardLike, category: PowerCategory) -> bool:
    """Whether a card counts toward a power category."""
    if category == "planeswalkers":
        return "planeswalker" in (card.type_line or "").lower()

    name = (card.name or "").lower()
    if any(fragment in name for fragment in POWER_CARD_NAMES[category]):
        return True

    pattern = POWER_TEXT_PATTERNS.get(category)
    if pattern is None:
        return False
    text = (getattr(card, "oracle_text", "") or "").lower()
    return bool(pattern.search(text))


def count_categories(cards: Iterable[CardLike]) -> dict[PowerCategory, int]:
    """Count cards per power category; a card counts once per category."""
    counts: dict[PowerCategory, int] = dict.fromkeys(POWER_WEIGHTS, 0)
    for card in cards:
        for category in POWER_WEIGHTS:
            if card_in_category(card, category):
                counts[category] += 1
    return counts


def score_deck_power(
    deck: Sequence[CardLike],
    commanders: Sequence[CardLike] = (),
) -> DeckPowerResult:
    """
    Score a deck's power level on a 0-100 scale.

    Each category count is multiplied by its weight and the sum is capped
    at 100. An empty deck scores 0.

    Args:
        deck: Main deck cards
        commanders: Commander cards, counted like deck cards

    Returns:
        DeckPowerResult with the score and per-category counts
    """
    counts = count_categories([*deck, *commanders])
    total = sum(count * POWER_WEIGHTS[category] for category, count in counts.items())
    score = min(MAX_POWER_SCORE, total)

    logger.debug("Power breakdown %s: raw %d, score %d", counts, total, score)
    return DeckPowerResult(score=score, category_counts=counts)
