"""Pack synergy analysis: theme profiles and pack compatibility."""

from .analyzer import PackSynergyAnalyzer, ResultCallback
from .constants import CREATURE_TYPES, FALLBACK_LABELS, MECHANICS, STRATEGY_PAIRS, THEME_PATTERNS
from .detection import (
    card_pair_strength,
    classify_synergy_type,
    detect_card_synergies,
    is_enabler,
    is_payoff,
)
from .profiler import (
    classify_curve,
    count_mechanics,
    count_tribes,
    fallback_strategy,
    profile_pack,
    score_themes,
)
from .scoring import ScoringContext, meaningful_reasons, round_half, score_compatibility

__all__ = [
    "CREATURE_TYPES",
    "FALLBACK_LABELS",
    "MECHANICS",
    "STRATEGY_PAIRS",
    "THEME_PATTERNS",
    "PackSynergyAnalyzer",
    "ResultCallback",
    "ScoringContext",
    "card_pair_strength",
    "classify_curve",
    "classify_synergy_type",
    "count_mechanics",
    "count_tribes",
    "detect_card_synergies",
    "fallback_strategy",
    "is_enabler",
    "is_payoff",
    "meaningful_reasons",
    "profile_pack",
    "round_half",
    "score_compatibility",
    "score_themes",
]
