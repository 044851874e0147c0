"""Result models for profiling, scoring and deck assembly."""

from __future__ import annotations

from pydantic import BaseModel, Field, computed_field

from .card import PoolCard
from .types import CardSynergyType, Color, CurveArchetype, PowerCategory

# Score tiers for pack compatibility, highest first
COMPATIBILITY_RATINGS: list[tuple[float, str]] = [
    (3.0, "Amazing"),
    (2.0, "Excellent"),
    (1.0, "Good"),
    (0.0, "Neutral"),
    (-1.0, "Poor"),
    (-2.0, "Bad"),
]

# Power meter tiers, highest first
POWER_LABELS: list[tuple[float, str]] = [
    (100, "BIG BULLY"),
    (80, "BULLY"),
    (60, "STRONG"),
    (40, "MODERATE"),
    (20, "MILD"),
]


class SynergyFinding(BaseModel):
    """An enabler/payoff card relationship inside one pack."""

    enabler: str
    payoff: str
    strength: float = Field(gt=0)
    synergy_type: CardSynergyType


class ThemeProfile(BaseModel):
    """Derived summary of a pack's colors, curve and strategy."""

    color_identity: list[Color] = Field(default_factory=list)
    average_cmc: float
    primary_strategy: str
    theme_strength: float = Field(ge=0)
    sub_themes: list[str] = Field(default_factory=list)
    tribes: list[str] = Field(default_factory=list)
    keywords: list[str] = Field(default_factory=list)
    curve_archetype: CurveArchetype
    card_synergies: list[SynergyFinding] = Field(default_factory=list, max_length=5)
    card_count: int = Field(default=0, ge=0)


class CompatibilityScore(BaseModel):
    """Bounded compatibility score between two packs."""

    score: float = Field(ge=-3, le=3)
    reasons: list[str] = Field(min_length=1)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def rating(self) -> str:
        """Human-readable tier for the score."""
        for threshold, label in COMPATIBILITY_RATINGS:
            if self.score >= threshold:
                return label
        return "Terrible"

    def summary(self) -> str:
        """One-line description suitable for a tooltip."""
        return f"{self.rating} synergy ({self.score:+g}): {', '.join(self.reasons)}"


class PackCompatibility(BaseModel):
    """Compatibility of one offered second pack, keyed by its UI option."""

    option_id: str
    pack_name: str
    compatibility: CompatibilityScore


class DeckPowerResult(BaseModel):
    """Deck power level ("bully meter") result."""

    score: float = Field(ge=0, le=100)
    category_counts: dict[PowerCategory, int]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def label(self) -> str:
        """Power tier shown under the meter."""
        for threshold, label in POWER_LABELS:
            if self.score >= threshold:
                return label
        return "NICE"


class DraftDeck(BaseModel):
    """A deck merged from two chosen packs."""

    pack1: str
    pack2: str
    cards: list[PoolCard] = Field(default_factory=list)
    commanders: list[PoolCard] = Field(default_factory=list)
    type_groups: dict[str, list[str]] = Field(default_factory=dict)
    decklist_text: str = ""

    @computed_field  # type: ignore[prop-decorator]
    @property
    def card_count(self) -> int:
        return len(self.cards)
