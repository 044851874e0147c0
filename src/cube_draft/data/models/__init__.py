"""Data models for cube drafting."""

from .card import COMMANDER_TAG, CardRecord, PoolCard
from .responses import (
    CompatibilityScore,
    DeckPowerResult,
    DraftDeck,
    PackCompatibility,
    SynergyFinding,
    ThemeProfile,
)
from .types import CardSynergyType, Color, CurveArchetype, PowerCategory, TypeGroup

__all__ = [
    "COMMANDER_TAG",
    "CardRecord",
    "CardSynergyType",
    "Color",
    "CompatibilityScore",
    "CurveArchetype",
    "DeckPowerResult",
    "DraftDeck",
    "PackCompatibility",
    "PoolCard",
    "PowerCategory",
    "SynergyFinding",
    "ThemeProfile",
    "TypeGroup",
]
