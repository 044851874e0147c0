"""Pack compatibility scoring."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field

from ...data.models import CardRecord, CompatibilityScore, ThemeProfile
from ...utils.mana import sort_colors
from .constants import (
    BASELINE_PENALTY,
    CARD_SYNERGY_BONUS,
    CARD_SYNERGY_MIN_COUNT,
    CARD_SYNERGY_MIN_STRENGTH,
    CURVE_GAP_PENALTY,
    CURVE_GAP_THRESHOLD,
    FILLER_REASON_MARKERS,
    FIVE_COLOR_PENALTY,
    FOUR_COLOR_PENALTY,
    GOOD_COLOR_BONUS,
    MANY_MECHANICS_BONUS,
    NO_OVERLAP_PENALTY,
    NO_SYNERGY_REASON,
    PERFECT_COLOR_BONUS,
    SCORE_BOUND,
    SHARED_SUB_THEME_BONUS,
    SHARED_TRIBE_BONUS,
    SOME_MECHANICS_BONUS,
    STRATEGY_PAIRS,
    STRATEGY_WEIGHTS,
    STRONG_THEME_MIN,
    STRONG_THEMES_BONUS,
    UNKNOWN_STRATEGY_PENALTY,
    WEAK_THEME_MAX,
    WEAK_THEMES_PENALTY,
)

STRATEGY_REASONS = {
    "good": "Complementary strategies",
    "okay": "Compatible strategies",
    "neutral": "Neutral strategies",
    "bad": "Conflicting strategies",
}


@dataclass
class ScoringContext:
    """Extra inputs for a comparison, such as the first pack's commanders.

    Commander color identities widen the first pack's colors before the
    color factor runs. The candidate pack keeps its own colors.
    """

    commanders: Sequence[CardRecord] = field(default_factory=list)

    def colors(self) -> list[str]:
        return sort_colors(c for card in self.commanders for c in card.color_identity)


def _shared(first: Sequence[str], second: Sequence[str]) -> list[str]:
    return [item for item in first if item in second]


def _color_factor(colors1: list[str], colors2: list[str]) -> tuple[float, str | None]:
    shared = _shared(colors1, colors2)
    total = len(set(colors1) | set(colors2))

    if len(shared) >= 2 and total <= 2:
        return PERFECT_COLOR_BONUS, f"Perfect color overlap ({''.join(shared)})"
    if shared and total <= 3:
        return GOOD_COLOR_BONUS, f"Good color synergy ({''.join(shared)})"
    if total == 4:
        return FOUR_COLOR_PENALTY, "Four colors - mana concerns"
    if total >= 5:
        return FIVE_COLOR_PENALTY, "Five colors - serious mana issues"
    if not shared and len(colors1) > 1 and len(colors2) > 1:
        return NO_OVERLAP_PENALTY, "No color overlap in multicolor packs"
    return 0.0, None


def _strategy_factor(strategy1: str, strategy2: str) -> tuple[float, str]:
    pairs = STRATEGY_PAIRS.get(strategy1, {})
    for relation in ("good", "okay", "neutral", "bad"):
        if strategy2 in pairs.get(relation, ()):
            return STRATEGY_WEIGHTS[relation], STRATEGY_REASONS[relation]
    return UNKNOWN_STRATEGY_PENALTY, "Unknown strategy interaction"


def round_half(value: float) -> float:
    """Round to the nearest 0.5, halves rounding up."""
    return math.floor(value * 2 + 0.5) / 2


def meaningful_reasons(reasons: list[str]) -> list[str]:
    """Drop filler reasons; never returns an empty list."""
    kept = [r for r in reasons if not any(m in r for m in FILLER_REASON_MARKERS)]
    return kept or [NO_SYNERGY_REASON]


def score_compatibility(
    profile1: ThemeProfile,
    profile2: ThemeProfile,
    context: ScoringContext | None = None,
) -> CompatibilityScore:
    """
    Score how well two packs combine into one deck.

    Factors are evaluated in a fixed order (colors, tribes, mechanics, theme
    strength, sub-themes, internal synergies, strategy, curve gap, baseline),
    each adding to a running total and optionally a reason. The total is
    clamped to [-3, 3] and rounded to the nearest 0.5. The result is fully
    deterministic.

    Args:
        profile1: Profile of the first pack
        profile2: Profile of the candidate second pack
        context: Optional commander context

    Returns:
        CompatibilityScore with at least one reason
    """
    total = 0.0
    reasons: list[str] = []

    colors1 = list(profile1.color_identity)
    colors2 = list(profile2.color_identity)
    if context is not None and context.commanders:
        colors1 = sort_colors([*colors1, *context.colors()])

    delta, reason = _color_factor(colors1, colors2)
    total += delta
    if reason:
        reasons.append(reason)

    shared_tribes = _shared(profile1.tribes, profile2.tribes)
    if shared_tribes:
        total += SHARED_TRIBE_BONUS
        reasons.append(f"Shared tribes: {', '.join(shared_tribes)}")

    shared_keywords = _shared(profile1.keywords, profile2.keywords)
    if len(shared_keywords) >= 3:
        total += MANY_MECHANICS_BONUS
        reasons.append(f"Many shared mechanics: {', '.join(shared_keywords[:3])}...")
    elif shared_keywords:
        total += SOME_MECHANICS_BONUS
        reasons.append(f"Shared mechanics: {', '.join(shared_keywords)}")

    average_strength = (profile1.theme_strength + profile2.theme_strength) / 2
    if average_strength > STRONG_THEME_MIN:
        total += STRONG_THEMES_BONUS
        reasons.append("Both packs have strong, focused themes")
    elif average_strength < WEAK_THEME_MAX:
        total += WEAK_THEMES_PENALTY
        reasons.append("Weak theme coherence")

    shared_sub_themes = _shared(profile1.sub_themes, profile2.sub_themes)
    if shared_sub_themes:
        total += SHARED_SUB_THEME_BONUS
        reasons.append(f"Shared sub-themes: {', '.join(shared_sub_themes)}")

    synergies = [*profile1.card_synergies, *profile2.card_synergies]
    if len(synergies) > CARD_SYNERGY_MIN_COUNT:
        mean_strength = sum(s.strength for s in synergies) / len(synergies)
        if mean_strength > CARD_SYNERGY_MIN_STRENGTH:
            total += CARD_SYNERGY_BONUS
            reasons.append("Strong internal card synergies detected")

    delta, reason = _strategy_factor(profile1.primary_strategy, profile2.primary_strategy)
    total += delta
    reasons.append(reason)

    if abs(profile1.average_cmc - profile2.average_cmc) >= CURVE_GAP_THRESHOLD:
        total += CURVE_GAP_PENALTY
        reasons.append("Extreme mana curve mismatch")

    total += BASELINE_PENALTY

    score = max(-SCORE_BOUND, min(SCORE_BOUND, round_half(total)))
    return CompatibilityScore(score=score, reasons=meaningful_reasons(reasons))
