"""Type definitions for cube draft data."""

from typing import Literal

Color = Literal["W", "U", "B", "R", "G"]

CurveArchetype = Literal["Aggressive", "Big Mana", "Midrange", "Balanced"]

CardSynergyType = Literal["Token", "Artifact", "Graveyard", "Spell", "Generic"]

PowerCategory = Literal[
    "fast_mana",
    "tutors",
    "countermagic",
    "removal",
    "card_draw",
    "combos",
    "stax",
    "land_destruction",
    "extra_turns",
    "planeswalkers",
]

TypeGroup = Literal[
    "Creature",
    "Instant / Sorcery",
    "Artifact / Enchantment",
    "Planeswalker",
    "Other",
]
