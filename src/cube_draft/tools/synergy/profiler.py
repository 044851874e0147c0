"""Pack theme profiling: colors, curve, strategy, tribes and mechanics."""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable, Sequence

from ...data.models import CardRecord, CurveArchetype, ThemeProfile
from ...utils.mana import sort_colors
from .constants import (
    AGGRO_MAX_CMC,
    CREATURE_TYPES,
    DENSITY_BONUS_PER_CARD,
    DENSITY_MIN_CARDS,
    FALLBACK_STRENGTH,
    FALLBACK_THRESHOLD,
    HIGH_CURVE_MIN,
    KEYWORD_MATCH_CAP,
    LOW_CURVE,
    MECHANICS,
    MID_CURVE,
    MIN_SHARED_CARDS,
    NAME_MATCH_MULTIPLIER,
    RAMP_MIN_CMC,
    SUB_THEME_RATIO,
    THEME_PATTERNS,
    TRIBAL_SUFFIX,
    TYPE_MATCH_MULTIPLIER,
    ThemePattern,
)
from .detection import detect_card_synergies

logger = logging.getLogger(__name__)


def classify_curve(cmcs: Sequence[float]) -> CurveArchetype:
    """Classify a mana curve by the share of cheap, mid and expensive cards.

    Zero-cost cards count toward the total but fall in no bucket.
    """
    total = len(cmcs)
    low = sum(1 for c in cmcs if LOW_CURVE[0] <= c < LOW_CURVE[1])
    mid = sum(1 for c in cmcs if MID_CURVE[0] <= c < MID_CURVE[1])
    high = sum(1 for c in cmcs if c >= HIGH_CURVE_MIN)

    if low / total > 0.6:
        return "Aggressive"
    if high / total > 0.4:
        return "Big Mana"
    if mid / total > 0.5:
        return "Midrange"
    return "Balanced"


def _card_pattern_score(card: CardRecord, pattern: ThemePattern) -> float:
    text = card.oracle_text
    type_line = card.type_line.lower()
    name = card.name.lower()
    score = 0.0

    for keyword in pattern.keywords:
        matches = text.count(keyword)
        if matches:
            score += pattern.weight * min(matches, KEYWORD_MATCH_CAP)

    for creature_type in pattern.types:
        if creature_type in type_line:
            score += pattern.weight * TYPE_MATCH_MULTIPLIER

    for card_name in pattern.card_names:
        if card_name in name or card_name in text:
            score += pattern.weight * NAME_MATCH_MULTIPLIER

    return score


def score_themes(cards: Sequence[CardRecord]) -> list[tuple[str, float]]:
    """Score every taxonomy strategy, highest first. Zero scores are dropped."""
    scores: dict[str, float] = {}

    for theme, pattern in THEME_PATTERNS.items():
        total = 0.0
        contributing = 0
        for card in cards:
            card_score = _card_pattern_score(card, pattern)
            if card_score > 0:
                total += card_score
                contributing += 1

        if contributing >= DENSITY_MIN_CARDS:
            total += contributing * DENSITY_BONUS_PER_CARD

        if total > 0:
            scores[theme] = total

    return sorted(scores.items(), key=lambda item: item[1], reverse=True)


def _frequent(counts: Counter[str]) -> list[str]:
    # most_common keeps first-seen order among equal counts
    return [name for name, count in counts.most_common() if count >= MIN_SHARED_CARDS]


def count_tribes(cards: Iterable[CardRecord]) -> list[str]:
    """Creature types found on at least two type lines, most frequent first."""
    counts: Counter[str] = Counter()
    for card in cards:
        type_line = card.type_line.lower()
        counts.update(t for t in CREATURE_TYPES if t in type_line)
    return _frequent(counts)


def count_mechanics(cards: Iterable[CardRecord]) -> list[str]:
    """Mechanics mentioned by at least two cards, most frequent first."""
    counts: Counter[str] = Counter()
    for card in cards:
        keywords = [k.lower() for k in card.keywords]
        counts.update(
            m
            for m in MECHANICS
            if m in card.oracle_text or any(m in k for k in keywords)
        )
    return _frequent(counts)


def fallback_strategy(average_cmc: float, keywords: list[str], tribes: list[str]) -> str:
    """Pick a label for packs that match no taxonomy strategy strongly."""
    if average_cmc <= AGGRO_MAX_CMC and "flying" in keywords:
        return "Aggro Flyers"
    if average_cmc <= AGGRO_MAX_CMC:
        return "Aggro"
    if average_cmc >= RAMP_MIN_CMC:
        return "Big Mana/Ramp"
    if "counter" in keywords or "draw" in keywords:
        return "Control"
    if "sacrifice" in keywords or "graveyard" in keywords:
        return "Sacrifice/Graveyard"
    if "artifact" in keywords:
        return "Artifacts Matter"
    if tribes:
        return tribes[0].capitalize() + TRIBAL_SUFFIX
    return "Midrange"


def profile_pack(cards: Sequence[CardRecord]) -> ThemeProfile:
    """
    Build the theme profile of a pack.

    The card list must not be empty; an empty pack has no average mana
    value and raises ZeroDivisionError.

    Args:
        cards: Resolved card records of the pack

    Returns:
        ThemeProfile with a non-empty primary strategy
    """
    colors = sort_colors(c for card in cards for c in card.color_identity)
    cmcs = [card.cmc for card in cards]
    average_cmc = sum(cmcs) / len(cmcs)
    curve = classify_curve(cmcs)

    tribes = count_tribes(cards)
    keywords = count_mechanics(cards)

    ranked = score_themes(cards)
    primary, strength = ranked[0] if ranked else ("", 0.0)
    sub_themes = [
        theme for theme, score in ranked[1:] if score >= strength * SUB_THEME_RATIO
    ]

    if strength < FALLBACK_THRESHOLD:
        primary = fallback_strategy(average_cmc, keywords, tribes)
        strength = FALLBACK_STRENGTH

    profile = ThemeProfile(
        color_identity=colors,
        average_cmc=average_cmc,
        primary_strategy=primary,
        theme_strength=strength,
        sub_themes=sub_themes,
        tribes=tribes,
        keywords=keywords,
        curve_archetype=curve,
        card_synergies=detect_card_synergies(cards),
        card_count=len(cards),
    )
    logger.debug(
        "Profiled %d cards: %s (%.1f)", len(cards), primary, strength
    )
    return profile
