"""Constants and data for pack theme analysis."""

from __future__ import annotations

from typing import NamedTuple


class ThemePattern(NamedTuple):
    """Matching rules for one strategy in the theme taxonomy."""

    weight: float
    keywords: tuple[str, ...]
    types: tuple[str, ...]
    card_names: tuple[str, ...]


THEME_PATTERNS: dict[str, ThemePattern] = {
    "Lifegain": ThemePattern(
        weight=2.5,
        keywords=("lifegain", "life", "heal", "lifelink"),
        types=("cleric", "angel"),
        card_names=("soul warden", "ajani's pridemate", "serra ascendant"),
    ),
    "Artifacts": ThemePattern(
        weight=2.5,
        keywords=("artifact", "equipment", "metalcraft", "affinity"),
        types=("artificer", "construct", "thopter"),
        card_names=("servo", "myr", "vault skirge"),
    ),
    "Graveyard Value": ThemePattern(
        weight=3,
        keywords=("graveyard", "flashback", "delve", "escape", "dredge", "threshold"),
        types=("zombie", "skeleton", "spirit"),
        card_names=("raise dead", "reanimate", "buried alive"),
    ),
    "Token Swarm": ThemePattern(
        weight=2.5,
        keywords=("token", "create", "populate", "convoke"),
        types=("soldier", "goblin", "saproling", "elf"),
        card_names=("gather the townsfolk", "krenko", "doubling season"),
    ),
    "Spell Velocity": ThemePattern(
        weight=2.5,
        keywords=("instant", "sorcery", "prowess", "storm", "flashback"),
        types=("wizard", "monk", "shaman"),
        card_names=("young pyromancer", "monastery swiftspear"),
    ),
    "Burn/Direct Damage": ThemePattern(
        weight=2,
        keywords=("damage", "burn", "shock", "bolt"),
        types=("wizard", "elemental"),
        card_names=("lightning bolt", "lava spike", "flame rift"),
    ),
    "Ramp/Big Mana": ThemePattern(
        weight=2,
        keywords=("ramp", "mana", "land", "search", "accelerate"),
        types=("druid", "elf"),
        card_names=("llanowar elves", "rampant growth", "cultivate"),
    ),
    "Control/Counterspells": ThemePattern(
        weight=2,
        keywords=("counter", "draw", "exile", "bounce"),
        types=("wizard", "sphinx"),
        card_names=("counterspell", "fact or fiction", "wrath of god"),
    ),
    "Sacrifice/Aristocrats": ThemePattern(
        weight=2.5,
        keywords=("sacrifice", "death", "dies", "enters"),
        types=("vampire", "demon", "cleric"),
        card_names=("blood artist", "zulaport cutthroat", "viscera seer"),
    ),
    "Enchantments Matter": ThemePattern(
        weight=2,
        keywords=("enchantment", "aura", "constellation"),
        types=("spirit", "nymph"),
        card_names=("enchantress", "eidolon", "sphere of safety"),
    ),
}

# Keyword occurrences per card that still add score
KEYWORD_MATCH_CAP = 3
TYPE_MATCH_MULTIPLIER = 1.5
NAME_MATCH_MULTIPLIER = 2
DENSITY_MIN_CARDS = 3
DENSITY_BONUS_PER_CARD = 0.5
SUB_THEME_RATIO = 0.3

# Below this the taxonomy result is replaced by the fallback chain
FALLBACK_THRESHOLD = 5
FALLBACK_STRENGTH = 3

AGGRO_MAX_CMC = 2.5
RAMP_MIN_CMC = 4.5

FALLBACK_LABELS = (
    "Aggro Flyers",
    "Aggro",
    "Big Mana/Ramp",
    "Control",
    "Sacrifice/Graveyard",
    "Artifacts Matter",
    "Midrange",
)

TRIBAL_SUFFIX = " Tribal"
MIN_SHARED_CARDS = 2

CREATURE_TYPES = (
    "human",
    "elf",
    "goblin",
    "wizard",
    "zombie",
    "angel",
    "dragon",
    "beast",
    "spirit",
    "knight",
    "soldier",
    "warrior",
    "vampire",
    "demon",
    "elemental",
    "construct",
    "thopter",
    "servo",
    "cleric",
    "artificer",
    "shaman",
    "druid",
    "merfolk",
    "faerie",
    "rogue",
    "dinosaur",
    "cat",
    "bird",
    "insect",
    "sphinx",
)

MECHANICS = (
    "flying",
    "trample",
    "lifelink",
    "deathtouch",
    "sacrifice",
    "draw",
    "counter",
    "artifact",
    "enchantment",
    "graveyard",
    "exile",
    "token",
    "equipment",
    "aura",
    "flash",
    "storm",
    "cascade",
    "delve",
    "prowess",
    "landfall",
    "flashback",
    "dredge",
    "threshold",
    "metalcraft",
    "affinity",
    "convoke",
    "populate",
)

# Curve bucket bounds (inclusive low, exclusive high)
LOW_CURVE = (1, 3)
MID_CURVE = (3, 5)
HIGH_CURVE_MIN = 5

# Intra-pack synergy markers
ENABLER_MARKERS = ("create", "put", "search", "when", "whenever")
PAYOFF_MARKERS = ("for each", "if you control", "gets +", "whenever a", "whenever you")
MAX_CARD_SYNERGIES = 5

# Second-pack relationships per primary strategy
STRATEGY_PAIRS: dict[str, dict[str, tuple[str, ...]]] = {
    "Aggro": {
        "good": ("Aggro Flyers",),
        "okay": ("Burn/Direct Damage",),
        "neutral": ("Midrange",),
        "bad": ("Control/Counterspells", "Ramp/Big Mana"),
    },
    "Aggro Flyers": {
        "good": ("Aggro",),
        "okay": ("Burn/Direct Damage",),
        "neutral": ("Midrange",),
        "bad": ("Control/Counterspells", "Ramp/Big Mana"),
    },
    "Control/Counterspells": {
        "good": ("Ramp/Big Mana",),
        "okay": ("Enchantments Matter",),
        "neutral": ("Midrange",),
        "bad": ("Aggro", "Burn/Direct Damage", "Token Swarm"),
    },
    "Ramp/Big Mana": {
        "good": ("Control/Counterspells",),
        "okay": ("Graveyard Value",),
        "neutral": ("Midrange",),
        "bad": ("Aggro", "Burn/Direct Damage"),
    },
    "Sacrifice/Aristocrats": {
        "good": ("Token Swarm", "Graveyard Value"),
        "okay": ("Artifacts",),
        "neutral": ("Midrange",),
        "bad": ("Lifegain",),
    },
    "Token Swarm": {
        "good": ("Sacrifice/Aristocrats",),
        "okay": ("Artifacts",),
        "neutral": ("Midrange",),
        "bad": ("Control/Counterspells",),
    },
    "Graveyard Value": {
        "good": ("Sacrifice/Aristocrats",),
        "okay": ("Spell Velocity",),
        "neutral": ("Midrange",),
        "bad": ("Aggro",),
    },
    "Artifacts": {
        "good": ("Sacrifice/Aristocrats",),
        "okay": ("Token Swarm", "Control/Counterspells"),
        "neutral": ("Midrange",),
        "bad": (),
    },
    "Spell Velocity": {
        "good": ("Burn/Direct Damage",),
        "okay": ("Graveyard Value",),
        "neutral": ("Midrange",),
        "bad": ("Token Swarm",),
    },
    "Burn/Direct Damage": {
        "good": ("Spell Velocity", "Aggro"),
        "okay": ("Aggro Flyers",),
        "neutral": ("Midrange",),
        "bad": ("Lifegain", "Control/Counterspells"),
    },
    "Lifegain": {
        "good": (),
        "okay": ("Control/Counterspells",),
        "neutral": ("Midrange",),
        "bad": ("Burn/Direct Damage", "Sacrifice/Aristocrats"),
    },
    "Enchantments Matter": {
        "good": (),
        "okay": ("Control/Counterspells",),
        "neutral": ("Midrange",),
        "bad": ("Aggro",),
    },
    "Midrange": {
        "good": (),
        "okay": (),
        "neutral": (
            "Midrange",
            "Aggro",
            "Control/Counterspells",
            "Sacrifice/Aristocrats",
            "Artifacts",
            "Token Swarm",
            "Graveyard Value",
        ),
        "bad": (),
    },
}

# Compatibility factor weights
PERFECT_COLOR_BONUS = 1.0
GOOD_COLOR_BONUS = 0.3
FOUR_COLOR_PENALTY = -1.0
FIVE_COLOR_PENALTY = -2.0
NO_OVERLAP_PENALTY = -0.5
SHARED_TRIBE_BONUS = 0.5
MANY_MECHANICS_BONUS = 0.7
SOME_MECHANICS_BONUS = 0.3
STRONG_THEMES_BONUS = 0.3
STRONG_THEME_MIN = 20
WEAK_THEMES_PENALTY = -0.5
WEAK_THEME_MAX = 3
SHARED_SUB_THEME_BONUS = 0.4
CARD_SYNERGY_BONUS = 0.3
CARD_SYNERGY_MIN_COUNT = 2
CARD_SYNERGY_MIN_STRENGTH = 2
STRATEGY_WEIGHTS = {
    "good": 0.8,
    "okay": 0.2,
    "neutral": 0.0,
    "bad": -1.0,
}
UNKNOWN_STRATEGY_PENALTY = -0.2
CURVE_GAP_THRESHOLD = 3.0
CURVE_GAP_PENALTY = -0.1
BASELINE_PENALTY = -0.5
SCORE_BOUND = 3.0

# Reasons that carry no signal and are dropped from the final list
FILLER_REASON_MARKERS = ("Compatible", "Similar", "Limited synergies")
NO_SYNERGY_REASON = "No significant synergies detected"
